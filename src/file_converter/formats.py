"""Static catalog of known file formats."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePath

from file_converter.errors import MissingFormatDescriptorError

logger = logging.getLogger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass(frozen=True)
class FormatDescriptor:
    """Descriptive metadata for a single file extension.

    Parameters
    ----------
    extension : str
        Lowercase extension without a leading dot.
    mime_type : str
        MIME type associated with the extension.
    display_name : str
        Human-readable format name.
    description : str
        Short description of the format.
    """

    extension: str
    mime_type: str
    display_name: str
    description: str

    def __post_init__(self) -> None:
        if not self.extension or self.extension != self.extension.lower():
            raise ValueError(f"extension must be lowercase and non-empty: {self.extension!r}")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def matches_file(self, path: str | PurePath) -> bool:
        """Return ``True`` when ``path`` ends with this format's extension."""
        return str(path).lower().endswith(f".{self.extension}")

    def __str__(self) -> str:
        return self.display_name


TXT = FormatDescriptor("txt", "text/plain", "Text File", "Plain text file")
MD = FormatDescriptor("md", "text/markdown", "Markdown", "Markdown document")
HTML = FormatDescriptor("html", "text/html", "HTML", "HTML document")
PDF = FormatDescriptor("pdf", "application/pdf", "PDF", "Portable Document Format")
DOCX = FormatDescriptor("docx", DOCX_MIME, "Word Document", "Microsoft Word Document")
JPEG = FormatDescriptor("jpeg", "image/jpeg", "JPEG Image", "JPEG image format")
JPG = FormatDescriptor("jpg", "image/jpeg", "JPEG Image", "JPEG image format")
PNG = FormatDescriptor("png", "image/png", "PNG Image", "Portable Network Graphics")
GIF = FormatDescriptor("gif", "image/gif", "GIF Image", "Graphics Interchange Format")
BMP = FormatDescriptor("bmp", "image/bmp", "BMP Image", "Bitmap image format")
WEBP = FormatDescriptor("webp", "image/webp", "WebP Image", "WebP image format")
# Conversion targets named ``text`` and ``markdown`` in the rule table.
TEXT = FormatDescriptor("text", "text/plain", "Plain Text", "Plain text conversion output")
MARKDOWN = FormatDescriptor(
    "markdown", "text/markdown", "Markdown", "Markdown conversion output"
)

_FORMATS: tuple[FormatDescriptor, ...] = (
    TXT,
    MD,
    HTML,
    PDF,
    DOCX,
    JPEG,
    JPG,
    PNG,
    GIF,
    BMP,
    WEBP,
    TEXT,
    MARKDOWN,
)

def _check_unique(formats: tuple[FormatDescriptor, ...]) -> None:
    seen: set[str] = set()
    for fmt in formats:
        if fmt.extension in seen:
            raise ValueError(f"duplicate extension in format registry: {fmt.extension}")
        seen.add(fmt.extension)


_check_unique(_FORMATS)


def normalize_extension(extension: str) -> str:
    """Strip whitespace and leading dots and lowercase ``extension``."""
    return extension.strip().lstrip(".").lower()


def all_formats() -> tuple[FormatDescriptor, ...]:
    """Return every registered format in catalog order."""
    return _FORMATS


def by_extension(extension: str) -> FormatDescriptor | None:
    """Look up a format by extension.

    ``"PNG"``, ``".png"`` and ``"png"`` resolve to the same descriptor.
    Returns ``None`` when the extension is unknown.
    """
    cleaned = normalize_extension(extension)
    for fmt in _FORMATS:
        if fmt.extension == cleaned:
            logger.debug("format lookup by extension %r -> %s", extension, fmt.mime_type)
            return fmt
    logger.debug("format lookup by extension %r -> not found", extension)
    return None


def by_mime_type(mime_type: str) -> FormatDescriptor | None:
    """Look up the first format with exactly ``mime_type``.

    No wildcard or prefix matching happens here.
    """
    for fmt in _FORMATS:
        if fmt.mime_type == mime_type:
            logger.debug("format lookup by MIME %r -> %s", mime_type, fmt.extension)
            return fmt
    logger.debug("format lookup by MIME %r -> not found", mime_type)
    return None


def require_extension(extension: str) -> FormatDescriptor:
    """Like :func:`by_extension` but raise when the extension is unknown.

    Raises
    ------
    MissingFormatDescriptorError
        If no descriptor exists for ``extension``.
    """
    fmt = by_extension(extension)
    if fmt is None:
        raise MissingFormatDescriptorError(f"Unknown file extension: {extension!r}")
    return fmt


def mime_type_for_path(path: str | PurePath) -> str | None:
    """Detect a MIME type from the suffix of ``path``."""
    suffix = PurePath(str(path).replace("\\", "/")).suffix
    if not suffix:
        return None
    fmt = by_extension(suffix)
    return fmt.mime_type if fmt is not None else None


def is_image_target(extension: str | None) -> bool:
    """Return ``True`` when ``extension`` names an image output format."""
    if not extension:
        return False
    fmt = by_extension(extension)
    return fmt is not None and fmt.is_image


__all__ = [
    "FormatDescriptor",
    "all_formats",
    "by_extension",
    "by_mime_type",
    "is_image_target",
    "mime_type_for_path",
    "normalize_extension",
    "require_extension",
]
