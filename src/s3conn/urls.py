"""Bucket URL building and parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_PROTOCOL = "https://"
S3_HOST_SUFFIX = ".s3.amazonaws.com"
S3_SCHEME = "s3://"

_VIRTUAL_HOSTED_RE = re.compile(r"^(.+://)(?:([^:]+):([^@]+)@)?([^/]+)\.s3\.amazonaws\.com(/.*)?$")


@dataclass(frozen=True)
class Credentials:
    """Static access key pair."""

    access_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"Credentials(access_key={self.access_key!r}, secret_key='***')"


@dataclass(frozen=True)
class ParsedUrl:
    """Components recovered from a bucket URL."""

    bucket_name: str
    key: str | None
    access_key: str | None
    secret_key: str | None
    protocol: str

    @property
    def credentials(self) -> Credentials | None:
        if self.access_key and self.secret_key:
            return Credentials(access_key=self.access_key, secret_key=self.secret_key)
        return None


def build_url(
    bucket_name: str,
    *,
    key: str | None = None,
    protocol: str | None = None,
    credentials: Credentials | None = None,
) -> str:
    """Create a URL for a bucket with an optional key.

    ``https://<ACCESS_KEY>:<SECRET_KEY>@<BUCKET_NAME>.s3.amazonaws.com/optional/path``
    """
    uri = protocol or DEFAULT_PROTOCOL
    if credentials is not None:
        uri += f"{credentials.access_key}:{credentials.secret_key}@"
    uri += f"{bucket_name}{S3_HOST_SUFFIX}"
    if key:
        uri += f"/{key}"
    return uri


def _parse_s3_scheme(url: str) -> ParsedUrl | None:
    if not url.startswith(S3_SCHEME):
        return None
    # s3://bucket/a/b -> "a/b"; everything after the first slash is the key, verbatim
    bucket_name, _, key = url[len(S3_SCHEME) :].partition("/")
    if not bucket_name or any(c in bucket_name for c in "@:?#"):
        return None
    return ParsedUrl(
        bucket_name=bucket_name,
        key=key or None,
        access_key=None,
        secret_key=None,
        protocol=S3_SCHEME,
    )


def parse_url(url: str) -> ParsedUrl | None:
    """Parse a bucket URL into bucket name, key, credentials and protocol.

    Returns None when the URL is not a recognised bucket URL.
    """
    if not url:
        return None

    match = _VIRTUAL_HOSTED_RE.fullmatch(url)
    if match is None:
        return _parse_s3_scheme(url)

    protocol, access_key, secret_key, bucket_name, path = match.groups()
    key = path[1:] if path else None
    return ParsedUrl(
        bucket_name=bucket_name,
        key=key or None,
        access_key=access_key or None,
        secret_key=secret_key or None,
        protocol=protocol,
    )
