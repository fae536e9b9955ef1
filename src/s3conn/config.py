"""Configuration for bucket connections."""

from __future__ import annotations

import os
from dataclasses import dataclass

from s3conn.metadata import MergeMetadata
from s3conn.urls import Credentials


@dataclass
class ConnectionConfig:
    """Configuration for a BucketConnection and the S3 client it builds."""

    region: str | None = None
    endpoint_url: str | None = None
    credentials: Credentials | None = None
    session_token: str | None = None
    request_timeout_s: float = 10.0
    max_attempts: int = 5
    addressing_style: str | None = None
    list_max_keys: int = 20
    merge_metadata: MergeMetadata | None = None


def _as_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    return float(value)


def _as_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


def config_from_env() -> ConnectionConfig:
    """Build connection config from S3CONN_* environment variables."""
    endpoint = os.getenv("S3CONN_ENDPOINT_URL") or os.getenv("S3CONN_ENDPOINT")
    access_key = os.getenv("S3CONN_ACCESS_KEY_ID")
    secret_key = os.getenv("S3CONN_SECRET_ACCESS_KEY")
    credentials = None
    if access_key and secret_key:
        credentials = Credentials(access_key=access_key, secret_key=secret_key)
    return ConnectionConfig(
        region=os.getenv("S3CONN_REGION") or None,
        endpoint_url=endpoint or None,
        credentials=credentials,
        session_token=os.getenv("S3CONN_SESSION_TOKEN") or None,
        request_timeout_s=_as_float(
            os.getenv("S3CONN_REQUEST_TIMEOUT_S"), ConnectionConfig.request_timeout_s
        ),
        max_attempts=_as_int(os.getenv("S3CONN_MAX_ATTEMPTS"), ConnectionConfig.max_attempts),
        addressing_style=os.getenv("S3CONN_ADDRESSING_STYLE") or None,
    )
