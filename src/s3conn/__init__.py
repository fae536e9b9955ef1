"""s3conn: typed convenience layer over S3-compatible object storage."""

__version__ = "0.1.0"

from s3conn.body import body_to_bytes, body_to_str, stream_to_bytes, stream_to_str
from s3conn.commands import Command
from s3conn.config import ConnectionConfig, config_from_env
from s3conn.connection import BucketConnection
from s3conn.errors import (
    InvalidUrlError,
    ObjectNotFoundError,
    S3ConnError,
    StorageBackendError,
)
from s3conn.metadata import MergeMetadata, shallow_merge, stringify_metadata
from s3conn.types import ObjectHead, ObjectSummary
from s3conn.urls import Credentials, ParsedUrl, build_url, parse_url

__all__ = [
    "__version__",
    "BucketConnection",
    "Command",
    "ConnectionConfig",
    "config_from_env",
    "Credentials",
    "ParsedUrl",
    "build_url",
    "parse_url",
    "ObjectHead",
    "ObjectSummary",
    "MergeMetadata",
    "shallow_merge",
    "stringify_metadata",
    "body_to_bytes",
    "body_to_str",
    "stream_to_bytes",
    "stream_to_str",
    "S3ConnError",
    "StorageBackendError",
    "ObjectNotFoundError",
    "InvalidUrlError",
]
