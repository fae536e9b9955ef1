"""Structured error types for s3conn."""

from __future__ import annotations


class S3ConnError(Exception):
    """Base error for all s3conn errors."""


class InvalidUrlError(S3ConnError):
    """Raised when a bucket URL cannot be parsed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(
            f"Invalid bucket URL '{url}'. Expected "
            "'<protocol>://[<access>:<secret>@]<bucket>.s3.amazonaws.com[/<key>]' "
            "or 's3://<bucket>[/<key>]'."
        )


class StorageBackendError(S3ConnError):
    """Raised when an object store request fails."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage backend error during {operation}: {detail}")


class ObjectNotFoundError(StorageBackendError):
    """Raised when the requested object (or its source, for copies) does not exist."""

    def __init__(self, key: str | None, operation: str) -> None:
        self.key = key
        super().__init__(operation, f"No such key: {key!r}")
