"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from s3conn.cli import app
from tests.conftest import BUCKET

if TYPE_CHECKING:
    from click.testing import Result


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_client(fake_boto_session, s3_client, monkeypatch):
    """In-memory S3 client behind every connection the CLI opens."""
    for name in ("S3CONN_URL", "S3CONN_BUCKET", "S3CONN_ACCESS_KEY_ID"):
        monkeypatch.delenv(name, raising=False)
    return s3_client


def invoke(
    runner: CliRunner,
    args: list[str],
    bucket: str | None = BUCKET,
    input: bytes | str | None = None,
) -> "Result":
    """Invoke the CLI with the test bucket selected."""
    if bucket:
        args = ["--bucket", bucket] + args
    return runner.invoke(app, args, input=input, catch_exceptions=False)
