"""Live S3 integration tests (MinIO-compatible)."""

from __future__ import annotations

import os
import uuid

import boto3
import pytest

from s3conn import BucketConnection, ConnectionConfig, ObjectNotFoundError, shallow_merge

pytestmark = pytest.mark.s3


@pytest.fixture
def live_conn() -> BucketConnection:
    if os.getenv("S3CONN_S3_TEST") != "1":
        pytest.skip("S3 integration tests disabled (set S3CONN_S3_TEST=1)")

    endpoint = os.getenv("S3CONN_S3_ENDPOINT", "http://127.0.0.1:9000")
    bucket = os.getenv("S3CONN_S3_BUCKET", "s3conn-test")
    region = os.getenv("S3CONN_S3_REGION", "us-east-1")

    s3 = boto3.client("s3", endpoint_url=endpoint, region_name=region)
    existing = {b["Name"] for b in s3.list_buckets().get("Buckets", [])}
    if bucket not in existing:
        s3.create_bucket(Bucket=bucket)

    return BucketConnection(
        bucket,
        config=ConnectionConfig(
            region=region,
            endpoint_url=endpoint,
            addressing_style="path",
            merge_metadata=shallow_merge,
        ),
    )


@pytest.fixture
def prefix() -> str:
    return f"it/{uuid.uuid4().hex}/"


def test_put_get_head_roundtrip(live_conn, prefix):
    key = f"{prefix}hello.txt"
    live_conn.put(key, "héllo", content_type="text/plain", metadata={"owner": "ada"})
    try:
        assert live_conn.get_str(key) == "héllo"
        assert live_conn.get_head(key) == {"owner": "ada"}
        assert live_conn.head(key).content_type == "text/plain"
    finally:
        live_conn.delete(key)


def test_put_head_merges_and_keeps_body(live_conn, prefix):
    key = f"{prefix}doc.json"
    live_conn.put(key, b"{}", content_type="application/json", metadata={"stage": "draft"})
    try:
        live_conn.put_head(key, {"reviewed": True})
        assert live_conn.get_head(key) == {"stage": "draft", "reviewed": "true"}
        assert live_conn.head(key).content_type == "application/json"
        assert live_conn.get_bytes(key) == b"{}"
    finally:
        live_conn.delete(key)


def test_rename_and_list(live_conn, prefix):
    live_conn.put(f"{prefix}a", b"1")
    live_conn.rename(f"{prefix}a", f"{prefix}b")
    try:
        keys = [s.key for s in live_conn.list_heads(prefix=prefix)]
        assert keys == [f"{prefix}b"]
        with pytest.raises(ObjectNotFoundError):
            live_conn.get(f"{prefix}a")
    finally:
        live_conn.delete(f"{prefix}b")
