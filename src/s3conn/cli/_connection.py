"""CLI helpers for resolving the target bucket and opening a connection."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from s3conn.cli import _exitcodes as ec
from s3conn.cli._output import print_error
from s3conn.config import ConnectionConfig, config_from_env
from s3conn.connection import BucketConnection
from s3conn.errors import ObjectNotFoundError, S3ConnError, StorageBackendError
from s3conn.urls import parse_url


def resolve_bucket_name() -> str:
    """Return the bucket selected by --bucket / --url, exiting with a usage error if none."""
    from s3conn.cli import state

    if state.bucket:
        return state.bucket
    if state.url:
        parsed = parse_url(state.url)
        if parsed is not None:
            return parsed.bucket_name
    print_error("No bucket selected; pass --url or --bucket (or set S3CONN_URL / S3CONN_BUCKET)")
    raise typer.Exit(ec.USAGE_ERROR)


def open_connection(config: ConnectionConfig | None = None) -> BucketConnection:
    """Open a connection to the bucket selected on the command line."""
    from s3conn.cli import state

    config = config or config_from_env()
    if not state.bucket and state.url:
        conn = BucketConnection.from_url(state.url, config=config, strict=True)
        assert conn is not None
        return conn
    return BucketConnection(resolve_bucket_name(), config=config)


@contextmanager
def storage_errors() -> Iterator[None]:
    """Translate library errors into CLI messages and exit codes."""
    try:
        yield
    except ObjectNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(ec.NOT_FOUND)
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)
    except S3ConnError as e:
        print_error(str(e))
        raise typer.Exit(ec.GENERAL_ERROR)


def parse_pairs(pairs: list[str] | None) -> dict[str, str | None]:
    """Parse ``key=value`` arguments; ``key=`` yields None (remove on merge)."""
    parsed: dict[str, str | None] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Empty metadata key in '{pair}'")
        parsed[key] = value if value != "" else None
    return parsed
