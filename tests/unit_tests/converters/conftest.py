"""Shared test helpers for converter tests."""

from __future__ import annotations

import pytest

from file_converter.converters import image_converter


@pytest.fixture
def no_webp_encoder(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the installed Pillow cannot write WebP."""
    monkeypatch.setattr(image_converter, "webp_supported", lambda: False)


@pytest.fixture
def webp_encoder() -> None:
    """Skip unless the installed Pillow can write WebP."""
    if not image_converter.webp_supported():
        pytest.skip("Pillow built without WebP support")
