"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import dataclasses
import logging

from pydantic import ValidationError

from file_converter import formats, rules
from file_converter.application.options import ConversionOptions
from file_converter.application.ports import InputSource, OutputSink
from file_converter.application.results import ConversionResult
from file_converter.converter.core import ConversionRequest, convert
from file_converter.errors import (
    InvalidOptionsError,
    MissingFormatDescriptorError,
    UnsupportedConversionError,
)
from file_converter.logging_utils import log_event
from file_converter.schemas import ConversionOptionsConfig

logger = logging.getLogger(__name__)


def build_conversion_options(
    *,
    quality: int | None = None,
    width: int | None = None,
    height: int | None = None,
) -> ConversionOptions:
    """Build typed option object from command/API params.

    Raises
    ------
    InvalidOptionsError
        If quality is outside 0-100 or a dimension is not positive.
    """
    try:
        config = ConversionOptionsConfig(quality=quality, width=width, height=height)
    except ValidationError as exc:
        raise InvalidOptionsError(f"Invalid conversion options: {exc}") from exc
    return ConversionOptions(
        quality=config.quality,
        width=config.width,
        height=config.height,
    )


def detect_source_mime(name: str) -> str:
    """Use-case: detect the MIME type of a file from its name.

    Raises
    ------
    MissingFormatDescriptorError
        If the file extension is not in the format registry.
    """
    mime_type = formats.mime_type_for_path(name)
    if mime_type is None:
        raise MissingFormatDescriptorError(f"Cannot determine file type of '{name}'.")
    return mime_type


def list_targets(name: str) -> tuple[str, ...]:
    """Use-case: list allowed target extensions for a file name.

    Unknown file types yield an empty tuple so callers can disable
    conversion instead of failing.
    """
    return rules.get_available_targets(formats.mime_type_for_path(name))


def convert_source(
    *,
    source: InputSource,
    target: str,
    options: ConversionOptions,
    sink: OutputSink | None = None,
    source_mime: str | None = None,
    strict: bool = True,
) -> ConversionResult:
    """Use-case: read input, dispatch the conversion and deliver the output.

    Parameters
    ----------
    source : InputSource
        Provider of the input bytes and original file name.
    target : str
        Requested target extension.
    options : ConversionOptions
        Quality and resize options; dropped for non-image targets.
    sink : OutputSink | None, default=None
        Delivery adapter; when omitted the result is only returned.
    source_mime : str | None, default=None
        Explicit MIME type; detected from ``source.name`` when omitted.
    strict : bool, default=True
        Reject pairs that the conversion rule table does not list.

    Raises
    ------
    UnsupportedConversionError
        If ``strict`` and the pair is not in the rule table.
    """
    mime_type = source_mime or detect_source_mime(source.name)
    target_ext = formats.normalize_extension(target)
    if strict and not rules.is_supported_pair(mime_type, target_ext):
        allowed = ", ".join(rules.get_available_targets(mime_type)) or "none"
        raise UnsupportedConversionError(
            f"Unsupported conversion: {mime_type} to {target_ext} (allowed: {allowed})"
        )

    if not formats.is_image_target(target_ext) and (
        options.resizes or options.quality is not None
    ):
        log_event(logger, "options.ignored", target=target_ext)
        options = ConversionOptions()

    result = convert(
        ConversionRequest(
            input_bytes=source.read_bytes(),
            source_mime=mime_type,
            target_extension=target_ext,
            options=options,
            source_name=source.name,
        )
    )
    if sink is None:
        return result

    location = sink.deliver(result.output_filename, result.output_bytes)
    log_event(logger, "delivery.done", location=location, output_size=result.size_bytes)
    return dataclasses.replace(result, location=location)
