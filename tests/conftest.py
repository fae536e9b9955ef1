"""Shared test fixtures for s3conn tests."""

from __future__ import annotations

import hashlib
import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody

from s3conn import BucketConnection, ConnectionConfig, shallow_merge

BUCKET = "test-bucket"

_SYSTEM_HEADERS = (
    "ContentEncoding",
    "ContentDisposition",
    "ContentLanguage",
    "CacheControl",
    "Expires",
)


def client_error(code: str, operation: str, message: str = "") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


@dataclass
class _StoredObject:
    body: bytes
    metadata: dict[str, str] = field(default_factory=dict)
    content_type: str = "binary/octet-stream"
    headers: dict[str, Any] = field(default_factory=dict)
    last_modified: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc)
    )

    @property
    def etag(self) -> str:
        return f'"{hashlib.md5(self.body).hexdigest()}"'


def _read_body(body: Any) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    if hasattr(body, "read"):
        return body.read()
    return bytes(body)


class FakeS3Client:
    """In-memory stand-in for a boto3 S3 client; records every call."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], _StoredObject] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on: dict[str, ClientError] = {}

    def _record(self, operation: str, params: dict[str, Any]) -> None:
        self.calls.append((operation, params))
        if operation in self.fail_on:
            raise self.fail_on[operation]

    @property
    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]

    def _lookup(self, bucket: str, key: str, operation: str, code: str) -> _StoredObject:
        obj = self.objects.get((bucket, key))
        if obj is None:
            raise client_error(code, operation)
        return obj

    def seed(self, key: str, body: bytes, **kwargs: Any) -> None:
        self.objects[(BUCKET, key)] = _StoredObject(body=body, **kwargs)

    def get_object(self, **params: Any) -> dict[str, Any]:
        self._record("get_object", params)
        obj = self._lookup(params["Bucket"], params["Key"], "GetObject", "NoSuchKey")
        return {
            "Body": StreamingBody(io.BytesIO(obj.body), len(obj.body)),
            "ContentLength": len(obj.body),
            "ContentType": obj.content_type,
            "Metadata": dict(obj.metadata),
        }

    def put_object(self, **params: Any) -> dict[str, Any]:
        self._record("put_object", params)
        obj = _StoredObject(
            body=_read_body(params.get("Body")),
            metadata=dict(params.get("Metadata") or {}),
            content_type=params.get("ContentType") or "binary/octet-stream",
            headers={k: params[k] for k in _SYSTEM_HEADERS if k in params},
        )
        self.objects[(params["Bucket"], params["Key"])] = obj
        return {"ETag": obj.etag}

    def delete_object(self, **params: Any) -> dict[str, Any]:
        self._record("delete_object", params)
        self.objects.pop((params["Bucket"], params["Key"]), None)
        return {}

    def copy_object(self, **params: Any) -> dict[str, Any]:
        self._record("copy_object", params)
        source = params["CopySource"]
        src = self._lookup(source["Bucket"], source["Key"], "CopyObject", "NoSuchKey")
        same = (source["Bucket"], source["Key"]) == (params["Bucket"], params["Key"])
        directive = params.get("MetadataDirective", "COPY")
        if same and directive != "REPLACE":
            raise client_error("InvalidRequest", "CopyObject", "copy onto itself")
        if directive == "REPLACE":
            metadata = dict(params.get("Metadata") or {})
            content_type = params.get("ContentType") or "binary/octet-stream"
            headers = {k: params[k] for k in _SYSTEM_HEADERS if k in params}
        else:
            metadata = dict(src.metadata)
            content_type = src.content_type
            headers = dict(src.headers)
        self.objects[(params["Bucket"], params["Key"])] = _StoredObject(
            body=src.body, metadata=metadata, content_type=content_type, headers=headers
        )
        return {"CopyObjectResult": {"ETag": src.etag}}

    def head_object(self, **params: Any) -> dict[str, Any]:
        self._record("head_object", params)
        obj = self._lookup(params["Bucket"], params["Key"], "HeadObject", "404")
        return {
            "ContentLength": len(obj.body),
            "ContentType": obj.content_type,
            "ETag": obj.etag,
            "LastModified": obj.last_modified,
            "Metadata": dict(obj.metadata),
            **obj.headers,
        }

    def list_objects(self, **params: Any) -> dict[str, Any]:
        self._record("list_objects", params)
        prefix = params.get("Prefix") or ""
        keys = sorted(
            key
            for bucket, key in self.objects
            if bucket == params["Bucket"] and key.startswith(prefix)
        )
        max_keys = int(params.get("MaxKeys", 1000))
        contents = []
        for key in keys[:max_keys]:
            obj = self.objects[(params["Bucket"], key)]
            contents.append(
                {
                    "Key": key,
                    "Size": len(obj.body),
                    "ETag": obj.etag,
                    "LastModified": obj.last_modified,
                    "StorageClass": "STANDARD",
                }
            )
        response: dict[str, Any] = {"IsTruncated": len(keys) > max_keys, "Name": params["Bucket"]}
        if contents:
            response["Contents"] = contents
        return response


class FakeSession:
    """Replacement for boto3.Session that hands out one shared FakeS3Client."""

    def __init__(self, client: FakeS3Client, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.client_kwargs: dict[str, Any] = {}
        self._client = client

    def client(self, service_name: str, **kwargs: Any) -> FakeS3Client:
        assert service_name == "s3"
        self.client_kwargs = kwargs
        return self._client


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def fake_boto_session(monkeypatch, s3_client):
    """Route boto3.Session used by s3conn to an in-memory client; returns created sessions."""
    sessions: list[FakeSession] = []

    def _factory(**kwargs: Any) -> FakeSession:
        session = FakeSession(s3_client, **kwargs)
        sessions.append(session)
        return session

    monkeypatch.setattr("s3conn.connection.boto3.Session", _factory)
    return sessions


@pytest.fixture
def conn(s3_client) -> BucketConnection:
    return BucketConnection(BUCKET, client=s3_client)


@pytest.fixture
def merging_conn(s3_client) -> BucketConnection:
    return BucketConnection(
        BUCKET, client=s3_client, config=ConnectionConfig(merge_metadata=shallow_merge)
    )
