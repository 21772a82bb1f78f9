"""Error taxonomy for format conversion.

Every error is local and non-retryable: conversions are CPU-bound encode or
decode work on in-memory buffers, so a failure means the caller should pick a
different target or file.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base error for all conversion failures.

    Attributes
    ----------
    exit_code : int
        Process exit code used by the CLI when this error escapes a command.
    """

    exit_code = 1


class UnsupportedSourceFormatError(ConversionError):
    """Source MIME type does not belong to any convertible category."""

    exit_code = 2


class UnsupportedConversionError(ConversionError):
    """Source/target combination is not covered by any encoder."""

    exit_code = 3


class UnsupportedTargetFormatError(UnsupportedConversionError):
    """Target extension is unknown for an otherwise supported source category."""


class ImageDecodeError(ConversionError):
    """Input bytes could not be decoded as an image."""

    exit_code = 4


class PackagingError(ConversionError):
    """DOCX container could not be produced."""

    exit_code = 5


class MissingFormatDescriptorError(ConversionError):
    """No registry entry exists for an extension or MIME type."""

    exit_code = 6


class InvalidOptionsError(ConversionError, ValueError):
    """Conversion options failed validation."""

    exit_code = 7


__all__ = [
    "ConversionError",
    "ImageDecodeError",
    "InvalidOptionsError",
    "MissingFormatDescriptorError",
    "PackagingError",
    "UnsupportedConversionError",
    "UnsupportedSourceFormatError",
    "UnsupportedTargetFormatError",
]
