"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConversionStatus(str, Enum):
    """Outcome variants of a successful conversion."""

    SUCCEEDED = "succeeded"
    SUCCEEDED_WITH_FALLBACK = "succeeded_with_fallback"


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome.

    ``output_filename`` always carries the requested target extension.
    ``encoded_extension`` names the format actually written, which differs
    only for fallback results.
    """

    output_bytes: bytes
    output_filename: str
    target_extension: str
    encoded_extension: str
    status: ConversionStatus = ConversionStatus.SUCCEEDED
    warning: str | None = None
    location: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.status is ConversionStatus.SUCCEEDED_WITH_FALLBACK

    @property
    def size_bytes(self) -> int:
        return len(self.output_bytes)
