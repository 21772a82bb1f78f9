"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import subprocess
from pathlib import Path

import file_converter


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert file_converter.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["convert-file", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Convert text, PDF and image files" in result.stdout


def test_cli_missing_input_fails_cleanly() -> None:
    """Ensure CLI returns a user-facing validation error for a missing input."""
    result = subprocess.run(
        ["convert-file", "convert", "/nope.png", "--to", "jpeg"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode != 0
    assert "does not exist" in result.stderr.lower()


def test_cli_converts_text_file(tmp_path: Path) -> None:
    """Run a full conversion through the installed entrypoint."""
    source = tmp_path / "hello.txt"
    source.write_text("Hello", encoding="utf-8")

    result = subprocess.run(
        ["convert-file", "convert", str(source), "--to", "markdown"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "hello.markdown").read_text(encoding="utf-8") == "```\nHello\n```"
