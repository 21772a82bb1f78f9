"""Shared pytest configuration, marker assignment and image fixtures."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from PIL import Image

from file_converter.logging_utils import ROOT_LOGGER
from file_converter.settings import get_settings

_PIL_FORMATS = {
    "png": "PNG",
    "jpeg": "JPEG",
    "gif": "GIF",
    "bmp": "BMP",
    "webp": "WEBP",
}

type ImageFactory = Callable[..., bytes]


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Re-read settings per test so monkeypatched env vars apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo handler changes made by CLI logging configuration."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def encode_test_image(
    fmt: str = "png",
    size: tuple[int, int] = (40, 20),
    mode: str = "RGB",
    color: tuple[int, ...] | int = (200, 30, 30),
) -> bytes:
    """Return a solid-color image encoded as ``fmt``."""
    image = Image.new(mode, size, color)
    buffer = io.BytesIO()
    image.save(buffer, format=_PIL_FORMATS[fmt])
    return buffer.getvalue()


@pytest.fixture
def make_image() -> ImageFactory:
    """Factory fixture producing encoded test images."""
    return encode_test_image
