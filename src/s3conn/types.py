"""Typed views over object store responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ObjectHead:
    """Metadata from a HEAD object request."""

    key: str
    size_bytes: int
    etag: str | None
    content_type: str | None
    last_modified: datetime | None
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_response(cls, key: str, response: dict[str, Any]) -> ObjectHead:
        size = response.get("ContentLength")
        return cls(
            key=key,
            size_bytes=int(size) if size is not None else 0,
            etag=response.get("ETag"),
            content_type=response.get("ContentType"),
            last_modified=response.get("LastModified"),
            metadata=dict(response.get("Metadata") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "size_bytes": self.size_bytes,
            "etag": self.etag,
            "content_type": self.content_type,
            "last_modified": self.last_modified.isoformat() if self.last_modified else None,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class ObjectSummary:
    """One entry of a bucket listing."""

    key: str
    size_bytes: int
    etag: str | None = None
    last_modified: datetime | None = None
    storage_class: str | None = None

    @classmethod
    def from_listing(cls, entry: dict[str, Any]) -> ObjectSummary:
        size = entry.get("Size")
        return cls(
            key=str(entry["Key"]),
            size_bytes=int(size) if size is not None else 0,
            etag=entry.get("ETag"),
            last_modified=entry.get("LastModified"),
            storage_class=entry.get("StorageClass"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "size_bytes": self.size_bytes,
            "etag": self.etag,
            "last_modified": self.last_modified.isoformat() if self.last_modified else None,
            "storage_class": self.storage_class,
        }
