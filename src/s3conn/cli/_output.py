"""Output formatting helpers for the CLI."""

from __future__ import annotations

import json
from typing import Any

import typer


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=True, default=str)


def print_table(headers: list[str], rows: list[list[Any]], *, json_mode: bool = False) -> None:
    """Print rows as aligned columns, or as a JSON array of objects."""
    if json_mode:
        typer.echo(_to_json([dict(zip(headers, row)) for row in rows]))
        return

    if not rows:
        return

    cells = [["" if v is None else str(v) for v in row] for row in rows]
    widths = [max(len(h), *(len(row[i]) for row in cells)) for i, h in enumerate(headers)]
    typer.echo("  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip())
    for row in cells:
        typer.echo("  ".join(v.ljust(w) for v, w in zip(row, widths)).rstrip())


def print_object(data: dict[str, Any], *, json_mode: bool = False) -> None:
    """Print a mapping as JSON or as ``key: value`` lines; nested mappings are indented."""
    if json_mode:
        typer.echo(_to_json(data))
        return

    for key, value in data.items():
        if isinstance(value, dict):
            typer.echo(f"{key}:")
            for inner_key, inner_value in sorted(value.items()):
                typer.echo(f"  {inner_key}: {inner_value}")
        else:
            typer.echo(f"{key}: {'' if value is None else value}")


def print_error(msg: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"Error: {msg}", err=True)
