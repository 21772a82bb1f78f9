"""Public file and bytes conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from file_converter.adapters.io import BytesInputSource, DirectoryOutputSink, FileInputSource
from file_converter.application.results import ConversionResult
from file_converter.application.use_cases import (
    build_conversion_options,
    convert_source,
    list_targets,
)


def convert_file(
    input_path: Path,
    target: str,
    output_dir: Optional[Path] = None,
    quality: Optional[int] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Path:
    """Convert a local file and write ``<stem>.<target>`` next to it or into ``output_dir``."""
    input_path = Path(input_path)
    options = build_conversion_options(quality=quality, width=width, height=height)
    result = convert_source(
        source=FileInputSource(input_path),
        target=target,
        options=options,
        sink=DirectoryOutputSink(output_dir or input_path.parent),
    )
    return Path(result.location or result.output_filename)


def convert_bytes(
    data: bytes,
    source_mime: str,
    target: str,
    *,
    source_name: str = "",
    quality: Optional[int] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    strict: bool = True,
) -> ConversionResult:
    """Convert an in-memory payload and return the full result."""
    options = build_conversion_options(quality=quality, width=width, height=height)
    return convert_source(
        source=BytesInputSource(name=source_name, data=data),
        target=target,
        options=options,
        source_mime=source_mime,
        strict=strict,
    )


def available_targets_for_file(path: Path | str) -> list[str]:
    """Return allowed target extensions for the file at ``path``."""
    return list(list_targets(str(path)))
