"""s3conn CLI: operator console for one bucket of an S3-compatible object store."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from s3conn.cli import heads, objects, url_cmd

app = typer.Typer(
    name="s3conn",
    help="s3conn CLI — get, put, copy, rename and inspect objects in one bucket.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    url: str | None = None
    bucket: str | None = None
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        try:
            from importlib.metadata import version

            v = version("s3conn")
        except Exception:
            v = "unknown"
        typer.echo(f"s3conn {v}")
        raise typer.Exit()


def _from_command_line(ctx: typer.Context, name: str) -> bool:
    # Match by name; newer typer releases ship their own click and ParameterSource enum.
    source = ctx.get_parameter_source(name)
    return source is not None and source.name == "COMMANDLINE"

@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        envvar="S3CONN_URL",
        help="Bucket URL (https://[key:secret@]<bucket>.s3.amazonaws.com or s3://<bucket>)",
    ),
    bucket: Optional[str] = typer.Option(
        None,
        "--bucket",
        "-b",
        envvar="S3CONN_BUCKET",
        help="Bucket name",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output when supported"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr"),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all s3conn commands."""
    from s3conn.log import setup_logging
    from s3conn.urls import parse_url

    url_explicit = _from_command_line(ctx, "url")
    bucket_explicit = _from_command_line(ctx, "bucket")

    if url and bucket:
        if url_explicit and bucket_explicit:
            raise typer.BadParameter("Pass either --url or --bucket, not both")
        # Whichever was given on the command line wins over the environment.
        if url_explicit:
            bucket = None
        else:
            url = None

    if url and parse_url(url) is None:
        raise typer.BadParameter(f"Invalid bucket URL: {url}")

    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    state.url = url
    state.bucket = bucket.strip() if bucket else None
    state.json_output = json_output
    if ctx.invoked_subcommand is None and not version:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.add_typer(heads.app, name="meta", help="Read and update user metadata")

app.command(name="get")(objects.get_cmd)
app.command(name="put")(objects.put_cmd)
app.command(name="rm")(objects.rm_cmd)
app.command(name="cp")(objects.cp_cmd)
app.command(name="mv")(objects.mv_cmd)
app.command(name="head")(heads.head_cmd)
app.command(name="ls")(heads.ls_cmd)
app.command(name="url")(url_cmd.url_cmd)


def main() -> None:
    """Entry point for the s3conn CLI."""
    app()
