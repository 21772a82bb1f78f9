"""Category converters with lazy imports so codecs load only when used."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from file_converter.converters.image_converter import EncodedImage


def convert_text(data: bytes, target: str) -> bytes:
    """Convert plain-text bytes via lazy backend import.

    Parameters
    ----------
    data : bytes
        Input text bytes.
    target : str
        ``pdf``, ``html`` or ``markdown``.

    Returns
    -------
    bytes
        Converted document bytes.
    """
    from .text_converter import convert_text as _impl

    return _impl(data, target)


def convert_pdf(data: bytes, target: str) -> bytes:
    """Convert PDF bytes via lazy backend import.

    Parameters
    ----------
    data : bytes
        Input PDF bytes.
    target : str
        ``text`` or ``docx``.

    Returns
    -------
    bytes
        Converted document bytes.
    """
    from .pdf_converter import convert_pdf as _impl

    return _impl(data, target)


def convert_image(
    data: bytes,
    target: str,
    *,
    quality: int | None = None,
    width: int | None = None,
    height: int | None = None,
    default_quality: int = 90,
) -> EncodedImage:
    """Convert image bytes via lazy backend import.

    Parameters
    ----------
    data : bytes
        Encoded input image.
    target : str
        ``png``, ``jpeg``, ``gif``, ``bmp`` or ``webp``.
    quality : int | None, default=None
        Lossy quality for JPEG/WebP.
    width, height : int | None, default=None
        Optional resize bounds; a missing side keeps the aspect ratio.
    default_quality : int, default=90
        JPEG quality used when ``quality`` is unset.

    Returns
    -------
    EncodedImage
        Encoded bytes and the format actually written.
    """
    from .image_converter import convert_image as _impl

    return _impl(
        data,
        target,
        quality=quality,
        width=width,
        height=height,
        default_quality=default_quality,
    )


__all__ = [
    "convert_image",
    "convert_pdf",
    "convert_text",
]
