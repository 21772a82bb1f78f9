"""Image decoding, resizing and re-encoding with Pillow."""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass

from PIL import Image, features

from file_converter.errors import ConversionError, ImageDecodeError, UnsupportedConversionError
from file_converter.types import ImageTarget

logger = logging.getLogger(__name__)

IMAGE_TARGETS: tuple[ImageTarget, ...] = ("png", "jpeg", "gif", "bmp", "webp")
DEFAULT_JPEG_QUALITY = 90

_PIL_FORMATS = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "gif": "GIF",
    "bmp": "BMP",
    "webp": "WEBP",
}

# Modes each encoder writes without conversion.
_WRITABLE_MODES = {
    "PNG": frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
    "JPEG": frozenset({"L", "RGB", "CMYK"}),
    "GIF": frozenset({"1", "L", "P", "RGB", "RGBA"}),
    "BMP": frozenset({"1", "L", "P", "RGB", "RGBA"}),
    "WEBP": frozenset({"RGB", "RGBA"}),
}

_RESAMPLE_MODES = frozenset({"L", "LA", "RGB", "RGBA", "I", "F"})


@dataclass(frozen=True)
class EncodedImage:
    """Encoded image bytes plus what was actually written.

    ``extension`` differs from the requested target when the encoder fell
    back to PNG; ``warning`` then explains why.
    """

    data: bytes
    extension: str
    width: int
    height: int
    warning: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.warning is not None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _has_alpha(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def decode_image(data: bytes) -> Image.Image:
    """Decode ``data`` into a fully loaded Pillow image.

    Raises
    ------
    ImageDecodeError
        If Pillow cannot identify or load the bytes.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Exception as exc:
        raise ImageDecodeError(f"Failed to decode input image: {exc}") from exc
    logger.debug("decoded %s image %dx%d mode=%s", image.format, image.width, image.height, image.mode)
    return image


def resize_dimensions(
    original_width: int,
    original_height: int,
    width: int | None,
    height: int | None,
) -> tuple[int, int]:
    """Return target dimensions, filling a missing side from the aspect ratio.

    The missing side is ``round(original_other * provided / original_provided)``
    with halves rounded up, and never drops below one pixel.
    """
    if width is None:
        if height is None:
            return original_width, original_height
        return max(1, _round_half_up(original_width * height / original_height)), height
    if height is None:
        return width, max(1, _round_half_up(original_height * width / original_width))
    return width, height


def resize_image(image: Image.Image, width: int | None, height: int | None) -> Image.Image:
    """Resize ``image`` with an averaging (box) filter when a size is given."""
    if width is None and height is None:
        return image
    size = resize_dimensions(image.width, image.height, width, height)
    if image.mode not in _RESAMPLE_MODES:
        image = image.convert("RGBA" if _has_alpha(image) else "RGB")
    logger.debug("resizing %dx%d -> %dx%d", image.width, image.height, *size)
    return image.resize(size, Image.Resampling.BOX)


def _prepare_mode(image: Image.Image, pil_format: str) -> Image.Image:
    allowed = _WRITABLE_MODES[pil_format]
    if image.mode in allowed:
        return image
    if "RGBA" in allowed and _has_alpha(image):
        return image.convert("RGBA")
    return image.convert("RGB")


def _save(image: Image.Image, pil_format: str, **params: object) -> bytes:
    buffer = io.BytesIO()
    _prepare_mode(image, pil_format).save(buffer, format=pil_format, **params)
    return buffer.getvalue()


def webp_supported() -> bool:
    """Return ``True`` when the installed Pillow can write WebP."""
    return bool(features.check("webp"))


def _encode_webp(image: Image.Image, quality: int | None) -> EncodedImage:
    reason = "WebP encoding is not supported by the installed Pillow build"
    if webp_supported():
        params: dict[str, object] = {}
        if quality is not None:
            params["quality"] = quality
        try:
            data = _save(image, "WEBP", **params)
        except (OSError, KeyError, ValueError) as exc:
            reason = f"WebP encoding failed: {exc}"
        else:
            if data:
                return EncodedImage(data, "webp", image.width, image.height)
            reason = "WebP encoder produced no output"
    logger.warning("%s; falling back to PNG", reason)
    try:
        fallback = _save(image, "PNG")
    except (OSError, KeyError, ValueError) as exc:
        raise ConversionError(f"Failed to encode PNG fallback for webp: {exc}") from exc
    return EncodedImage(
        fallback,
        "png",
        image.width,
        image.height,
        warning=f"{reason}; output was encoded as PNG instead.",
    )


def encode_image(
    image: Image.Image,
    target: str,
    quality: int | None = None,
    default_quality: int = DEFAULT_JPEG_QUALITY,
) -> EncodedImage:
    """Encode ``image`` into ``target``.

    Parameters
    ----------
    image : Image.Image
        Decoded (and optionally resized) image.
    target : str
        One of ``png``, ``jpeg``, ``gif``, ``bmp`` or ``webp``.
    quality : int | None, default=None
        Lossy quality. JPEG uses ``default_quality`` when unset.
    default_quality : int, default=90
        JPEG quality used when ``quality`` is unset.

    Raises
    ------
    UnsupportedConversionError
        If ``target`` is not an image format this module writes.
    ConversionError
        If the encoder fails, including the PNG fallback for WebP. The base
        class is the encode-failure signal; no subclass is raised for it.
    """
    if target == "webp":
        return _encode_webp(image, quality)
    pil_format = _PIL_FORMATS.get(target)
    if pil_format is None:
        raise UnsupportedConversionError(f"Unsupported image format: {target}")

    params: dict[str, object] = {}
    if pil_format == "JPEG":
        params["quality"] = default_quality if quality is None else quality
    try:
        data = _save(image, pil_format, **params)
    except (OSError, KeyError, ValueError) as exc:
        raise ConversionError(f"Failed to encode image as {target}: {exc}") from exc
    if not data:
        raise ConversionError(f"Encoder produced no output for {target}")
    return EncodedImage(data, target, image.width, image.height)


def convert_image(
    data: bytes,
    target: str,
    *,
    quality: int | None = None,
    width: int | None = None,
    height: int | None = None,
    default_quality: int = DEFAULT_JPEG_QUALITY,
) -> EncodedImage:
    """Decode, optionally resize, and re-encode image bytes."""
    if target not in _PIL_FORMATS:
        raise UnsupportedConversionError(f"Unsupported image format: {target}")
    image = decode_image(data)
    image = resize_image(image, width, height)
    return encode_image(image, target, quality=quality, default_quality=default_quality)
