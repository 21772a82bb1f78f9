"""Application-layer use-cases and option objects."""

from __future__ import annotations

from file_converter.application.options import ConversionOptions
from file_converter.application.ports import InputSource, OutputSink
from file_converter.application.results import ConversionResult, ConversionStatus


def build_conversion_options(
    *,
    quality: int | None = None,
    width: int | None = None,
    height: int | None = None,
) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from file_converter.application.use_cases import build_conversion_options as _impl

    return _impl(quality=quality, width=width, height=height)


def convert_source(
    *,
    source: InputSource,
    target: str,
    options: ConversionOptions,
    sink: OutputSink | None = None,
    source_mime: str | None = None,
    strict: bool = True,
) -> ConversionResult:
    """Convert an input source via lazy use-case import."""
    from file_converter.application.use_cases import convert_source as _impl

    return _impl(
        source=source,
        target=target,
        options=options,
        sink=sink,
        source_mime=source_mime,
        strict=strict,
    )


__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "ConversionStatus",
    "InputSource",
    "OutputSink",
    "build_conversion_options",
    "convert_source",
]
