"""PDF conversions.

Text extraction is not implemented: both targets emit fixed placeholder text
instead of the document's content.
"""

from __future__ import annotations

from file_converter.errors import UnsupportedConversionError
from file_converter.infrastructure.docx_package import build_docx

PDF_TARGETS = ("text", "docx")

PDF_TO_TEXT_PLACEHOLDER = "PDF to text conversion is not fully implemented yet."
PDF_TO_DOCX_PLACEHOLDER = (
    "PDF to DOCX conversion (text extraction not available on this platform)."
)


def convert_pdf(data: bytes, target: str) -> bytes:
    """Convert PDF bytes to ``target`` using placeholder content.

    Raises
    ------
    UnsupportedConversionError
        If ``target`` is neither ``text`` nor ``docx``.
    """
    del data
    if target == "text":
        return PDF_TO_TEXT_PLACEHOLDER.encode("utf-8")
    if target == "docx":
        return build_docx(PDF_TO_DOCX_PLACEHOLDER)
    raise UnsupportedConversionError(f"Unsupported conversion: PDF to {target}")
