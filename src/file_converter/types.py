"""Shared type aliases for converter modules."""

from __future__ import annotations

from typing import Literal

type SourceCategory = Literal["text", "pdf", "image"]

type ImageTarget = Literal["png", "jpeg", "gif", "bmp", "webp"]
