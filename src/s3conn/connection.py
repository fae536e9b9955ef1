"""Bucket-scoped connection over a boto3 S3 client."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Callable

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from s3conn import body as _body
from s3conn.commands import Command
from s3conn.config import ConnectionConfig
from s3conn.errors import InvalidUrlError, ObjectNotFoundError, StorageBackendError
from s3conn.metadata import stringify_metadata
from s3conn.types import ObjectHead, ObjectSummary
from s3conn.urls import Credentials, build_url, parse_url

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})

# System headers a REPLACE copy would otherwise reset to defaults.
_PRESERVED_HEADERS = (
    "ContentType",
    "ContentEncoding",
    "ContentDisposition",
    "ContentLanguage",
    "CacheControl",
    "Expires",
)


def _error_key(command: Command) -> str | None:
    source = command.params.get("CopySource")
    if isinstance(source, Mapping):
        return source.get("Key")
    return command.key


class BucketConnection:
    """Typed convenience layer over one bucket of an S3-compatible object store.

    Every operation is a single request to the underlying client, except ``rename``
    and ``put_head`` which chain two. Neither sequence is atomic: a failure part way
    leaves the earlier step applied.

    Example:
        ```python
        conn = BucketConnection.from_url("https://my-bucket.s3.amazonaws.com")
        conn.put("notes/a.txt", "hello", metadata={"author": "ada"})
        text = conn.get_str("notes/a.txt")
        conn.put_head("notes/a.txt", {"reviewed": True})
        conn.rename("notes/a.txt", "archive/a.txt")
        ```
    """

    def __init__(
        self,
        bucket_name: str,
        *,
        client: Any = None,
        config: ConnectionConfig | None = None,
    ) -> None:
        bucket_name = (bucket_name or "").strip()
        if not bucket_name:
            raise ValueError("bucket_name is required")

        self.bucket_name = bucket_name
        self.config = config or ConnectionConfig()
        self.client = client if client is not None else self._build_client(self.config)

    @staticmethod
    def _build_client(config: ConnectionConfig) -> Any:
        """Create a boto3 S3 client from config."""
        credentials: dict[str, Any] = {}
        if config.credentials is not None:
            credentials = {
                "aws_access_key_id": config.credentials.access_key,
                "aws_secret_access_key": config.credentials.secret_key,
                "aws_session_token": config.session_token,
            }

        s3_options = None
        if config.addressing_style:
            s3_options = {"addressing_style": config.addressing_style.strip().lower()}

        session = boto3.Session(region_name=config.region)
        return session.client(
            "s3",
            region_name=config.region,
            endpoint_url=config.endpoint_url,
            config=BotoConfig(
                connect_timeout=config.request_timeout_s,
                read_timeout=config.request_timeout_s,
                retries={"max_attempts": config.max_attempts, "mode": "standard"},
                s3=s3_options,
            ),
            **credentials,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        config: ConnectionConfig | None = None,
        client: Any = None,
        strict: bool = False,
    ) -> BucketConnection | None:
        """Open a connection for the bucket named in ``url``.

        Credentials embedded in the URL are used unless ``config.credentials`` is set.
        Returns None for an unparsable URL, or raises InvalidUrlError when ``strict``.
        """
        parsed = parse_url(url)
        if parsed is None:
            if strict:
                raise InvalidUrlError(url)
            return None

        config = config or ConnectionConfig()
        if client is None and config.credentials is None and parsed.credentials is not None:
            config = dataclasses.replace(config, credentials=parsed.credentials)
        return cls(parsed.bucket_name, client=client, config=config)

    def __repr__(self) -> str:
        return f"BucketConnection(bucket_name={self.bucket_name!r})"

    # -- URLs ---------------------------------------------------------------

    build_url = staticmethod(build_url)
    parse_url = staticmethod(parse_url)

    def url(
        self,
        *,
        key: str | None = None,
        protocol: str | None = None,
        credentials: Credentials | None = None,
    ) -> str:
        """URL of this bucket, optionally of one key in it."""
        return build_url(self.bucket_name, key=key, protocol=protocol, credentials=credentials)

    # -- Sending ------------------------------------------------------------

    def send(self, command: Command) -> dict[str, Any]:
        """Send a prepared command and return the raw client response."""
        method = getattr(self.client, command.operation)
        logger.debug(
            "Sending %s",
            command.operation,
            extra={"bucket": self.bucket_name, "key": command.key},
        )
        try:
            return method(**command.params)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(_error_key(command), command.operation) from exc
            raise StorageBackendError(command.operation, str(exc)) from exc
        except BotoCoreError as exc:
            raise StorageBackendError(command.operation, str(exc)) from exc

    # -- Objects ------------------------------------------------------------

    def get_command(self, key: str, **params: Any) -> Command:
        return Command("get_object", {"Bucket": self.bucket_name, "Key": key, **params})

    def get(self, key: str) -> Any:
        """Fetch an object body.

        Returns the streaming body (or None); use ``body_to_bytes`` / ``body_to_str``
        to consume it.
        """
        response = self.send(self.get_command(key))
        return response.get("Body")

    def get_bytes(self, key: str) -> bytes:
        return _body.body_to_bytes(self.get(key))

    def get_str(self, key: str) -> str:
        return _body.body_to_str(self.get(key))

    def put_command(self, key: str, data: Any, **params: Any) -> Command:
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        return Command(
            "put_object",
            {"Bucket": self.bucket_name, "Key": key, "Body": data, **params},
        )

    def put(
        self,
        key: str,
        data: Any,
        *,
        content_type: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """Store ``data`` (str, bytes-like, or readable file object) under ``key``."""
        extra: dict[str, Any] = {}
        if content_type:
            extra["ContentType"] = content_type
        if metadata:
            extra["Metadata"] = stringify_metadata(metadata)
        self.send(self.put_command(key, data, **extra))

    def delete_command(self, key: str, **params: Any) -> Command:
        return Command("delete_object", {"Bucket": self.bucket_name, "Key": key, **params})

    def delete(self, key: str) -> None:
        self.send(self.delete_command(key))

    def copy_command(self, old_key: str, new_key: str, **params: Any) -> Command:
        return Command(
            "copy_object",
            {
                "Bucket": self.bucket_name,
                "CopySource": {"Bucket": self.bucket_name, "Key": old_key},
                "Key": new_key,
                **params,
            },
        )

    def copy(self, old_key: str, new_key: str) -> None:
        self.send(self.copy_command(old_key, new_key))

    def rename(self, old_key: str, new_key: str) -> None:
        """Move an object by copying it to ``new_key`` and deleting ``old_key``."""
        if old_key == new_key:
            return
        self.send(self.copy_command(old_key, new_key))
        self.send(self.delete_command(old_key))
        logger.info(
            "Renamed object",
            extra={"bucket": self.bucket_name, "old_key": old_key, "new_key": new_key},
        )

    # -- Heads --------------------------------------------------------------

    def head_command(self, key: str, **params: Any) -> Command:
        return Command("head_object", {"Bucket": self.bucket_name, "Key": key, **params})

    def head(self, key: str) -> ObjectHead:
        """Size, ETag, content type and user metadata of an object."""
        return ObjectHead.from_response(key, self.send(self.head_command(key)))

    def get_head(self, key: str) -> dict[str, str]:
        """User metadata of an object; empty when it carries none."""
        response = self.send(self.head_command(key))
        return dict(response.get("Metadata") or {})

    def exists(self, key: str) -> bool:
        try:
            self.send(self.head_command(key))
        except ObjectNotFoundError:
            return False
        return True

    def list_heads_command(self, **params: Any) -> Command:
        return Command(
            "list_objects",
            {"Bucket": self.bucket_name, "MaxKeys": self.config.list_max_keys, **params},
        )

    def list_heads(
        self,
        *,
        predicate: Callable[[ObjectSummary], bool] | None = None,
        prefix: str | None = None,
        max_keys: int | None = None,
    ) -> list[ObjectSummary]:
        """List one page of objects, optionally narrowed by prefix and predicate."""
        extra: dict[str, Any] = {}
        if prefix:
            extra["Prefix"] = prefix
        if max_keys is not None:
            extra["MaxKeys"] = int(max_keys)

        response = self.send(self.list_heads_command(**extra))
        summaries: list[ObjectSummary] = []
        for entry in response.get("Contents") or []:
            if not entry.get("Key"):
                continue
            summary = ObjectSummary.from_listing(entry)
            if predicate is not None and not predicate(summary):
                continue
            summaries.append(summary)
        return summaries

    def put_head(self, key: str, metadata: Mapping[str, Any]) -> dict[str, str]:
        """Replace an object's user metadata by copying the object onto itself.

        With ``config.merge_metadata`` set, the new metadata is the merge of the
        current metadata and ``metadata``; otherwise ``metadata`` replaces it.
        Returns the metadata that was written.
        """
        response = self.send(self.head_command(key))
        current = dict(response.get("Metadata") or {})
        merge = self.config.merge_metadata
        if merge is not None:
            new_metadata = merge(current, dict(metadata))
        else:
            new_metadata = dict(metadata)

        written = stringify_metadata(new_metadata)
        extra: dict[str, Any] = {"MetadataDirective": "REPLACE", "Metadata": written}
        for name in _PRESERVED_HEADERS:
            if response.get(name):
                extra[name] = response[name]
        self.send(self.copy_command(key, key, **extra))
        logger.info(
            "Replaced object metadata",
            extra={"bucket": self.bucket_name, "key": key, "fields": sorted(written)},
        )
        return written

    # -- Body utilities -----------------------------------------------------

    body_to_bytes = staticmethod(_body.body_to_bytes)
    body_to_str = staticmethod(_body.body_to_str)
    stream_to_bytes = staticmethod(_body.stream_to_bytes)
    stream_to_str = staticmethod(_body.stream_to_str)

