"""s3conn url — print the URL of the bucket or of one object."""

from __future__ import annotations

from typing import Optional

import typer

from s3conn.cli._connection import resolve_bucket_name
from s3conn.urls import build_url


def url_cmd(
    key: Optional[str] = typer.Argument(None, help="Object key"),
    protocol: str = typer.Option("https://", "--protocol", help="URL protocol prefix"),
) -> None:
    """Print the virtual-hosted URL of the selected bucket."""
    if "://" not in protocol:
        protocol = f"{protocol}://"
    typer.echo(build_url(resolve_bucket_name(), key=key, protocol=protocol))
