"""s3conn get / put / rm / cp / mv — object commands."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import List, Optional

import typer

from s3conn.cli._connection import open_connection, parse_pairs, storage_errors
from s3conn.cli._output import print_object
from s3conn.metadata import stringify_metadata


def get_cmd(
    key: str = typer.Argument(..., help="Object key"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the body to this file instead of stdout"
    ),
) -> None:
    """Download an object."""
    with storage_errors():
        conn = open_connection()
        data = conn.get_bytes(key)

    if output is None:
        typer.echo(data, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)


def put_cmd(
    key: str = typer.Argument(..., help="Object key"),
    source: typer.FileBinaryRead = typer.Argument(
        "-", help="File to upload ('-' reads stdin)"
    ),
    content_type: Optional[str] = typer.Option(
        None, "--content-type", help="MIME type (guessed from the key when omitted)"
    ),
    meta: Optional[List[str]] = typer.Option(
        None, "--meta", "-m", help="User metadata as key=value (repeatable)"
    ),
) -> None:
    """Upload an object."""
    from s3conn.cli import state

    metadata = stringify_metadata(parse_pairs(meta))
    if content_type is None:
        content_type, _ = mimetypes.guess_type(key)
    data = source.read()

    with storage_errors():
        conn = open_connection()
        conn.put(key, data, content_type=content_type, metadata=metadata)

    if state.json_output:
        print_object({"key": key, "size_bytes": len(data), "metadata": metadata}, json_mode=True)


def rm_cmd(key: str = typer.Argument(..., help="Object key")) -> None:
    """Delete an object."""
    with storage_errors():
        open_connection().delete(key)


def cp_cmd(
    source: str = typer.Argument(..., help="Source key"),
    destination: str = typer.Argument(..., help="Destination key"),
) -> None:
    """Copy an object within the bucket."""
    with storage_errors():
        open_connection().copy(source, destination)


def mv_cmd(
    source: str = typer.Argument(..., help="Source key"),
    destination: str = typer.Argument(..., help="Destination key"),
) -> None:
    """Rename an object (copy, then delete the source)."""
    with storage_errors():
        open_connection().rename(source, destination)
