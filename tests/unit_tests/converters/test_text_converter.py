"""Unit tests for plain-text conversions."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from file_converter.converters import text_converter
from file_converter.errors import UnsupportedConversionError, UnsupportedTargetFormatError


def test_markdown_wraps_text_in_fence() -> None:
    """Produce exactly one fenced block around the input."""
    assert text_converter.convert_text(b"Hello", "markdown") == b"```\nHello\n```"


def test_markdown_of_empty_text() -> None:
    """An empty input still gets a fence."""
    assert text_converter.convert_text(b"", "markdown") == b"```\n\n```"


def test_html_document_shape() -> None:
    """Wrap escaped text in a pre block of a UTF-8 HTML5 page."""
    html = text_converter.convert_text(b"a < b & c > d", "html").decode("utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert '<meta charset="UTF-8">' in html
    assert "<title>Converted Text</title>" in html
    assert "<pre>a &lt; b &amp; c &gt; d</pre>" in html


def test_html_leaves_quotes_alone() -> None:
    """Only ``&``, ``<`` and ``>`` are escaped."""
    assert text_converter.escape_html("\"it's\"") == "\"it's\""


@given(st.text())
def test_escape_html_round_trips(text: str) -> None:
    """Escaped text contains no raw angle brackets and unescapes cleanly."""
    escaped = text_converter.escape_html(text)
    assert "<" not in escaped and ">" not in escaped
    restored = escaped.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")
    assert restored == text


def test_invalid_utf8_is_replaced() -> None:
    """Undecodable bytes become replacement characters instead of failing."""
    markdown = text_converter.convert_text(b"ok \xff\xfe", "markdown").decode("utf-8")
    assert "ok " in markdown
    assert "�" in markdown


def test_pdf_output_is_a_pdf_document() -> None:
    """Render a single-page PDF."""
    data = text_converter.convert_text(b"line one\nline two", "pdf")
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")
    assert b"/Count 1" in data


def test_pdf_never_paginates_long_text() -> None:
    """Hundreds of lines and a very long line still yield a single page."""
    lines = [f"line {n}" for n in range(400)]
    lines.append("x" * 5000)
    data = text_converter.convert_text("\n".join(lines).encode("utf-8"), "pdf")
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")
    assert b"/Count 1" in data


def test_pdf_accepts_text_outside_latin1() -> None:
    """Missing glyphs do not fail the conversion."""
    data = text_converter.convert_text("Привет 你好".encode("utf-8"), "pdf")
    assert data.startswith(b"%PDF")
    assert b"/Count 1" in data


@pytest.mark.parametrize("target", ["docx", "png", "text", ""])
def test_unknown_target_raises(target: str) -> None:
    """Reject targets outside pdf/html/markdown."""
    with pytest.raises(UnsupportedTargetFormatError, match="Unsupported conversion"):
        text_converter.convert_text(b"hi", target)


def test_target_error_is_an_unsupported_conversion() -> None:
    """Keep the target error catchable as an unsupported conversion."""
    assert issubclass(UnsupportedTargetFormatError, UnsupportedConversionError)
