"""Conversion dispatcher shared by the API, CLI and HTTP transports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from hashlib import sha256
from pathlib import PurePath

from pydantic import ValidationError

from file_converter import converters
from file_converter.application.options import ConversionOptions
from file_converter.application.results import ConversionResult, ConversionStatus
from file_converter.errors import (
    ConversionError,
    InvalidOptionsError,
    UnsupportedConversionError,
    UnsupportedSourceFormatError,
)
from file_converter.logging_utils import log_event
from file_converter.schemas import ConversionOptionsConfig, ConversionRequestConfig
from file_converter.settings import get_settings
from file_converter.types import SourceCategory

logger = logging.getLogger(__name__)

DEFAULT_BASE_NAME = "converted"


@dataclass(frozen=True)
class ConversionRequest:
    """Single conversion request.

    Parameters
    ----------
    input_bytes : bytes
        Complete input payload.
    source_mime : str
        MIME type detected for the input.
    target_extension : str
        Requested output extension, e.g. ``"png"`` or ``"markdown"``.
    options : ConversionOptions, default=ConversionOptions()
        Optional quality and resize parameters.
    source_name : str | None, default=None
        Original file name, used to build the output file name.
    """

    input_bytes: bytes = field(repr=False)
    source_mime: str
    target_extension: str
    options: ConversionOptions = ConversionOptions()
    source_name: str | None = None


def digest_bytes(data: bytes) -> str:
    """Compute SHA-256 digest for byte payload."""
    return sha256(data).hexdigest()


def safe_input_filename(filename: str) -> str:
    """Return the bare file name of ``filename`` without any directories."""
    raw = filename.strip()
    if not raw:
        return ""
    # Normalize Windows-style separators before basename extraction.
    candidate = PurePath(raw.replace("\\", "/")).name
    if candidate in {"", ".", ".."}:
        return ""
    return candidate


def output_filename(source_name: str | None, target_extension: str) -> str:
    """Return ``<original-base-name>.<target-extension>``."""
    base = PurePath(safe_input_filename(source_name or "")).stem or DEFAULT_BASE_NAME
    return f"{base}.{target_extension}"


def resolve_category(source_mime: str) -> SourceCategory:
    """Map a MIME type onto a source category.

    Raises
    ------
    UnsupportedSourceFormatError
        If the MIME type is not plain text, PDF or an image.
    """
    essence = source_mime.split(";", 1)[0].strip().lower()
    if essence == "text/plain":
        return "text"
    if essence == "application/pdf":
        return "pdf"
    if essence.startswith("image/"):
        return "image"
    raise UnsupportedSourceFormatError(f"Unsupported source format: {source_mime}")


def validate_request(request: ConversionRequest) -> ConversionRequestConfig:
    """Validate and normalize request fields.

    Raises
    ------
    InvalidOptionsError
        If MIME type, target or options are invalid.
    """
    try:
        return ConversionRequestConfig(
            source_mime=request.source_mime,
            target_extension=request.target_extension,
            source_name=request.source_name,
            options=ConversionOptionsConfig(
                quality=request.options.quality,
                width=request.options.width,
                height=request.options.height,
            ),
        )
    except ValidationError as exc:
        raise InvalidOptionsError(f"Invalid conversion request: {exc}") from exc


def _dispatch(
    category: SourceCategory,
    data: bytes,
    target: str,
    options: ConversionOptionsConfig,
    default_quality: int,
) -> tuple[bytes, str, str | None]:
    if category == "text":
        return converters.convert_text(data, target), target, None
    if category == "pdf":
        return converters.convert_pdf(data, target), target, None
    if category == "image":
        encoded = converters.convert_image(
            data,
            target,
            quality=options.quality,
            width=options.width,
            height=options.height,
            default_quality=default_quality,
        )
        return encoded.data, encoded.extension, encoded.warning
    raise UnsupportedConversionError(f"Unsupported conversion: {category} to {target}")


def convert(request: ConversionRequest) -> ConversionResult:
    """Convert ``request`` and return the complete output in memory.

    The dispatcher branches on the source category and the target
    extension. It does not consult the rule table; callers that want to
    restrict conversions to allowed pairs check
    :func:`file_converter.rules.is_supported_pair` first.

    Raises
    ------
    UnsupportedSourceFormatError
        If the source MIME type has no converter.
    UnsupportedTargetFormatError
        If plain text is asked for a target other than pdf/html/markdown.
    UnsupportedConversionError
        For any other uncovered source/target combination.
    ImageDecodeError
        If image input cannot be decoded.
    PackagingError
        If the DOCX container cannot be built.
    InvalidOptionsError
        If options are out of range.
    """
    config = validate_request(request)
    target = config.target_extension
    log_event(
        logger,
        "dispatch.start",
        source_mime=config.source_mime,
        target=target,
        input_size=len(request.input_bytes),
    )
    try:
        category = resolve_category(config.source_mime)
        log_event(logger, "dispatch.route", category=category, target=target)
        output, encoded_extension, warning = _dispatch(
            category,
            request.input_bytes,
            target,
            config.options,
            get_settings().default_jpeg_quality,
        )
    except ConversionError as exc:
        log_event(
            logger,
            "dispatch.failed",
            level=logging.INFO,
            source_mime=config.source_mime,
            target=target,
            error=type(exc).__name__,
        )
        raise

    status = (
        ConversionStatus.SUCCEEDED
        if warning is None
        else ConversionStatus.SUCCEEDED_WITH_FALLBACK
    )
    result = ConversionResult(
        output_bytes=output,
        output_filename=output_filename(config.source_name, target),
        target_extension=target,
        encoded_extension=encoded_extension,
        status=status,
        warning=warning,
    )
    log_event(
        logger,
        "dispatch.done",
        level=logging.INFO if warning is None else logging.WARNING,
        target=target,
        encoded=encoded_extension,
        status=status.value,
        output_size=result.size_bytes,
    )
    return result


__all__ = [
    "ConversionRequest",
    "convert",
    "digest_bytes",
    "output_filename",
    "resolve_category",
    "safe_input_filename",
    "validate_request",
]
