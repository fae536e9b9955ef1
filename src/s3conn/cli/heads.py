"""s3conn head / ls / meta — object metadata commands."""

from __future__ import annotations

import dataclasses
import fnmatch
from typing import List, Optional

import typer

from s3conn.cli._connection import open_connection, parse_pairs, storage_errors
from s3conn.cli._output import print_object, print_table
from s3conn.config import config_from_env
from s3conn.metadata import shallow_merge
from s3conn.types import ObjectSummary

app = typer.Typer(no_args_is_help=True)


def head_cmd(key: str = typer.Argument(..., help="Object key")) -> None:
    """Show size, content type and user metadata of an object."""
    from s3conn.cli import state

    with storage_errors():
        head = open_connection().head(key)
    print_object(head.to_dict(), json_mode=state.json_output)


def ls_cmd(
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Only keys with this prefix"),
    max_keys: Optional[int] = typer.Option(
        None, "--max-keys", min=1, help="Page size (default: 20)"
    ),
    match: Optional[str] = typer.Option(
        None, "--match", help="Shell-style pattern the key must match"
    ),
) -> None:
    """List objects (one page)."""
    from s3conn.cli import state

    def matches(summary: ObjectSummary) -> bool:
        return match is None or fnmatch.fnmatchcase(summary.key, match)

    with storage_errors():
        summaries = open_connection().list_heads(
            predicate=matches, prefix=prefix, max_keys=max_keys
        )

    rows = [
        [s.key, s.size_bytes, s.last_modified.isoformat() if s.last_modified else None]
        for s in summaries
    ]
    print_table(["key", "size_bytes", "last_modified"], rows, json_mode=state.json_output)


@app.command("set")
def meta_set_cmd(
    key: str = typer.Argument(..., help="Object key"),
    pairs: List[str] = typer.Argument(..., help="Metadata as key=value; key= removes on merge"),
    replace: bool = typer.Option(
        False, "--replace", help="Replace all metadata instead of merging into it"
    ),
) -> None:
    """Update user metadata by copying the object onto itself."""
    from s3conn.cli import state

    update = parse_pairs(pairs)
    config = config_from_env()
    if not replace:
        config = dataclasses.replace(config, merge_metadata=shallow_merge)

    with storage_errors():
        written = open_connection(config).put_head(key, update)
    print_object({"key": key, "metadata": written}, json_mode=state.json_output)


@app.command("get")
def meta_get_cmd(key: str = typer.Argument(..., help="Object key")) -> None:
    """Show the user metadata of an object."""
    from s3conn.cli import state

    with storage_errors():
        metadata = open_connection().get_head(key)
    print_object(metadata, json_mode=state.json_output)
