"""Plain-text conversions to PDF, HTML and Markdown."""

from __future__ import annotations

import io

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from file_converter.errors import UnsupportedTargetFormatError

TEXT_TARGETS = ("pdf", "html", "markdown")

_FONT_NAME = "Helvetica"
_FONT_SIZE = 12
_LEADING = 14.4


def decode_text(data: bytes) -> str:
    """Decode input bytes as UTF-8, replacing undecodable sequences."""
    return data.decode("utf-8", errors="replace")


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``; no other entities are produced."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def text_to_pdf(text: str) -> bytes:
    """Render ``text`` centered on a single A4 page.

    There is no pagination or wrapping: long lines run off the page edge and
    long documents overflow the single page. The standard Helvetica font has
    no glyphs outside Latin-1, so CJK or Cyrillic text renders as missing
    glyphs without raising.
    """
    buffer = io.BytesIO()
    page_width, page_height = A4
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle("Converted Text")
    pdf.setFont(_FONT_NAME, _FONT_SIZE)
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    y = page_height / 2 + (len(lines) - 1) * _LEADING / 2
    for line in lines:
        pdf.drawCentredString(page_width / 2, y, line)
        y -= _LEADING
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def text_to_html(text: str) -> bytes:
    """Wrap ``text`` in a minimal HTML5 document inside ``<pre>``."""
    document = (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="UTF-8">\n'
        "<title>Converted Text</title>\n"
        "</head>\n"
        "<body>\n"
        f"<pre>{escape_html(text)}</pre>\n"
        "</body>\n"
        "</html>\n"
    )
    return document.encode("utf-8")


def text_to_markdown(text: str) -> bytes:
    """Wrap ``text`` in one fenced code block."""
    return f"```\n{text}\n```".encode("utf-8")


def convert_text(data: bytes, target: str) -> bytes:
    """Convert plain-text bytes to ``target``.

    Raises
    ------
    UnsupportedTargetFormatError
        If ``target`` is not one of ``pdf``, ``html`` or ``markdown``.
    """
    text = decode_text(data)
    if target == "pdf":
        return text_to_pdf(text)
    if target == "html":
        return text_to_html(text)
    if target == "markdown":
        return text_to_markdown(text)
    raise UnsupportedTargetFormatError(f"Unsupported conversion: text to {target}")
