"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from file_converter.cli import cli as cli_module
from file_converter.converters import image_converter
from file_converter.errors import ConversionError, PackagingError

runner = CliRunner()


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the conversion subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "convert" in result.output
    assert "targets" in result.output
    assert "formats" in result.output


def test_convert_text_to_html(tmp_path: Path) -> None:
    """Write ``<stem>.<target>`` next to the input by default."""
    source = tmp_path / "notes.txt"
    source.write_text("a < b", encoding="utf-8")

    result = runner.invoke(cli_module.app, ["convert", str(source), "--to", "html"])

    assert result.exit_code == 0, result.output
    output = tmp_path / "notes.html"
    assert "Saved" in result.output
    assert str(output) in result.output
    assert "<pre>a &lt; b</pre>" in output.read_text(encoding="utf-8")


def test_convert_image_with_options(tmp_path: Path, make_image) -> None:
    """Forward quality and size to the image path."""
    source = tmp_path / "photo.png"
    source.write_bytes(make_image("png", size=(40, 20)))
    out_dir = tmp_path / "out"

    result = runner.invoke(
        cli_module.app,
        ["convert", str(source), "-t", "JPEG", "-o", str(out_dir), "--quality", "60", "--width", "20"],
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "photo.jpeg").read_bytes().startswith(b"\xff\xd8\xff")


def test_image_options_ignored_for_document_targets(tmp_path: Path) -> None:
    """Quality and size have no effect on text conversions."""
    source = tmp_path / "notes.txt"
    source.write_text("hi", encoding="utf-8")

    result = runner.invoke(
        cli_module.app, ["convert", str(source), "--to", "markdown", "--width", "5"]
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "notes.markdown").read_bytes() == b"```\nhi\n```"


def test_quality_range_enforced(tmp_path: Path) -> None:
    """Reject quality below the slider minimum."""
    source = tmp_path / "photo.png"
    source.write_bytes(b"x")
    result = runner.invoke(
        cli_module.app, ["convert", str(source), "--to", "jpeg", "--quality", "5"]
    )
    assert result.exit_code == 2


def test_unsupported_pair_exit_code(tmp_path: Path, make_image) -> None:
    """Map unsupported conversions to their exit code."""
    source = tmp_path / "photo.png"
    source.write_bytes(make_image("png"))

    result = runner.invoke(cli_module.app, ["convert", str(source), "--to", "png"])

    assert result.exit_code == 3
    assert "UnsupportedConversionError" in result.output
    assert not (tmp_path / "photo.png.png").exists()


def test_decode_error_exit_code(tmp_path: Path) -> None:
    """Report broken images."""
    source = tmp_path / "photo.gif"
    source.write_bytes(b"definitely not a gif")

    result = runner.invoke(cli_module.app, ["convert", str(source), "--to", "png"])

    assert result.exit_code == 4
    assert "ImageDecodeError" in result.output


def test_unknown_extension_exit_code(tmp_path: Path) -> None:
    """Files outside the registry cannot be converted."""
    source = tmp_path / "data.xyz"
    source.write_bytes(b"x")

    result = runner.invoke(cli_module.app, ["convert", str(source), "--to", "pdf"])

    assert result.exit_code == 6
    assert "Cannot determine file type" in result.output


def test_webp_fallback_warns(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_image
) -> None:
    """Succeed with a warning when WebP falls back to PNG."""
    monkeypatch.setattr(image_converter, "webp_supported", lambda: False)
    source = tmp_path / "photo.jpg"
    source.write_bytes(make_image("jpeg"))

    result = runner.invoke(cli_module.app, ["convert", str(source), "--to", "webp"])

    assert result.exit_code == 0, result.output
    assert "Warning" in result.output
    assert (tmp_path / "photo.webp").read_bytes().startswith(b"\x89PNG")


def test_debug_prints_traceback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Show the traceback only with --debug."""
    source = tmp_path / "scan.pdf"
    source.write_bytes(b"%PDF-1.4")

    def fail(**kwargs: object) -> object:
        raise PackagingError("zip write failed")

    monkeypatch.setattr("file_converter.application.use_cases.convert_source", fail)

    plain = runner.invoke(cli_module.app, ["convert", str(source), "--to", "docx"])
    debug = runner.invoke(cli_module.app, ["--debug", "convert", str(source), "--to", "docx"])

    assert plain.exit_code == debug.exit_code == 5
    assert "Traceback" not in plain.output
    assert "Traceback" in debug.output


def test_print_conversion_error_defaults_to_one() -> None:
    """Errors without an exit code map to 1."""
    assert cli_module._print_conversion_error(RuntimeError("boom"), debug=False) == 1
    assert cli_module._print_conversion_error(ConversionError("boom"), debug=False) == 1


def test_targets_command(tmp_path: Path) -> None:
    """List allowed targets for a file name."""
    result = runner.invoke(cli_module.app, ["targets", "photo.webp"])
    assert result.exit_code == 0
    assert "photo.webp (image/webp): png, jpeg, gif, bmp" in result.output

    none = runner.invoke(cli_module.app, ["targets", "readme.md"])
    assert none.exit_code == 0
    assert "<none>" in none.output

    unknown = runner.invoke(cli_module.app, ["targets", "blob.xyz"])
    assert unknown.exit_code == 1
    assert "unknown format" in unknown.output


def test_formats_command() -> None:
    """Print one line per registry entry."""
    result = runner.invoke(cli_module.app, ["formats"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 13
    assert lines[0].split()[:2] == ["txt", "text/plain"]


def test_doctor_command() -> None:
    """Report library versions and WebP capability."""
    result = runner.invoke(cli_module.app, ["doctor"])
    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "pillow:" in result.output
    assert "webp encoding:" in result.output
