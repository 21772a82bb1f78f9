"""Top-level API for file format conversion."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from file_converter.application.results import ConversionResult

__version__ = "0.1.0"


def convert_file(
    input_path: Path,
    target: str,
    output_dir: Path | None = None,
    *,
    quality: int | None = None,
    width: int | None = None,
    height: int | None = None,
) -> Path:
    """Convert a file on disk.

    Parameters
    ----------
    input_path : Path
        Source file; its extension decides the source format.
    target : str
        Target extension, e.g. ``"png"`` or ``"markdown"``.
    output_dir : Path | None, default=None
        Directory for the output; defaults to the input's directory.
    quality : int | None, default=None
        Lossy image quality (0-100). JPEG defaults to 90.
    width, height : int | None, default=None
        Optional resize; a missing side keeps the aspect ratio.

    Returns
    -------
    Path
        Path to ``<input-stem>.<target>``.
    """
    from .api import convert_file as _impl

    return _impl(
        input_path=input_path,
        target=target,
        output_dir=output_dir,
        quality=quality,
        width=width,
        height=height,
    )


def convert_bytes(
    data: bytes,
    source_mime: str,
    target: str,
    *,
    source_name: str = "",
    quality: int | None = None,
    width: int | None = None,
    height: int | None = None,
) -> ConversionResult:
    """Convert an in-memory payload.

    Parameters
    ----------
    data : bytes
        Input payload.
    source_mime : str
        MIME type of ``data``.
    target : str
        Target extension.
    source_name : str, default=""
        Original file name used for the output name.

    Returns
    -------
    ConversionResult
        Output bytes, file name and status.
    """
    from .api import convert_bytes as _impl

    return _impl(
        data,
        source_mime,
        target,
        source_name=source_name,
        quality=quality,
        width=width,
        height=height,
    )


def available_targets(source_mime: str | None) -> tuple[str, ...]:
    """Return allowed target extensions for ``source_mime``."""
    from .rules import get_available_targets as _impl

    return _impl(source_mime)


__all__ = [
    "available_targets",
    "convert_bytes",
    "convert_file",
]
