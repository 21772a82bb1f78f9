"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionOptions:
    """Optional image parameters.

    ``quality`` applies to lossy encoders; ``width``/``height`` request a
    resize, with a missing side derived from the aspect ratio.
    """

    quality: int | None = None
    width: int | None = None
    height: int | None = None

    @property
    def resizes(self) -> bool:
        return self.width is not None or self.height is not None
