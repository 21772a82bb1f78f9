#!/usr/bin/env python3
"""
file_converter.cli.cli

Typer-based CLI for converting text, PDF and image files.

Examples
--------
Install core + CLI:

    uv pip install -e ".[cli]"

Convert an image and shrink it to 320px wide:

    convert-file convert photo.png --to jpeg --width 320 --quality 80

List what a file can become:

    convert-file targets notes.txt
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from file_converter.errors import ConversionError
from file_converter.logging_utils import configure_logging
from file_converter.settings import get_settings

app = typer.Typer(
    name="convert-file",
    help="Convert text, PDF and image files between formats.",
    no_args_is_help=True,
)

IMAGE_ONLY_NOTE = "Only used for image targets."


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log dispatch decisions."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log at DEBUG level.
    log_json : bool, default=False
        Whether to format logs as JSON.
    """
    settings = get_settings()
    level = logging.DEBUG if verbose else settings.log_level.upper()
    configure_logging(level, json_mode=log_json or settings.log_json)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="File to convert; its extension selects the source format.",
    ),
    target: str = typer.Option(..., "--to", "-t", help="Target extension, e.g. png or markdown."),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        file_okay=False,
        help="Directory for the converted file (default: next to the input).",
    ),
    quality: int | None = typer.Option(
        None,
        "--quality",
        min=10,
        max=100,
        help=f"Lossy quality 10-100 (JPEG default 90). {IMAGE_ONLY_NOTE}",
    ),
    width: int | None = typer.Option(
        None, "--width", min=1, help=f"Output width in pixels. {IMAGE_ONLY_NOTE}"
    ),
    height: int | None = typer.Option(
        None, "--height", min=1, help=f"Output height in pixels. {IMAGE_ONLY_NOTE}"
    ),
) -> None:
    """Convert a file into another format.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_path : Path
        Source file.
    target : str
        Target extension from ``convert-file targets INPUT``.
    output_dir : Path | None, default=None
        Output directory.
    quality, width, height : int | None
        Image options; ignored for text and PDF sources.

    Notes
    -----
    - WebP output falls back to PNG bytes when Pillow lacks a WebP encoder;
      the command still succeeds but prints a warning.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from file_converter.adapters.io import DirectoryOutputSink, FileInputSource
        from file_converter.application.use_cases import (
            build_conversion_options,
            convert_source,
        )
        options = build_conversion_options(quality=quality, width=width, height=height)
        result = convert_source(
            source=FileInputSource(input_path),
            target=target,
            options=options,
            sink=DirectoryOutputSink(output_dir or input_path.parent),
        )
        if result.used_fallback:
            typer.echo(f"[yellow]! Warning:[/yellow] {result.warning}", err=True)
        typer.echo(f"[green]✓ Saved:[/green] {result.location}")
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug))


@app.command("targets")
def targets_cmd(
    input_path: Path = typer.Argument(..., help="File name or path to inspect."),
) -> None:
    """List the formats a file can be converted to."""
    from file_converter.application.use_cases import list_targets
    from file_converter.formats import mime_type_for_path

    mime_type = mime_type_for_path(input_path)
    if mime_type is None:
        typer.echo(f"{input_path.name}: unknown format, no conversions available")
        raise typer.Exit(code=1)
    allowed = list_targets(str(input_path))
    typer.echo(f"{input_path.name} ({mime_type}): {', '.join(allowed) or '<none>'}")


@app.command("formats")
def formats_cmd() -> None:
    """Print the format registry."""
    from file_converter.formats import all_formats

    for fmt in all_formats():
        typer.echo(f"{fmt.extension:<10} {fmt.mime_type:<24} {fmt.display_name}")


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed codec versions and capability notes."""
    import importlib.metadata as metadata

    modules = ["pillow", "reportlab", "pydantic", "typer", "fastapi"]

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in modules:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        from file_converter.converters.image_converter import webp_supported

        webp = "native" if webp_supported() else "PNG fallback"
    except Exception:
        webp = "<unavailable>"
    typer.echo(f"webp encoding: {webp}")


if __name__ == "__main__":
    app()
