"""Application ports for reading input and delivering output."""

from __future__ import annotations

from typing import Protocol


class InputSource(Protocol):
    """Provide the bytes of a file chosen by the caller."""

    name: str

    def read_bytes(self) -> bytes:
        """Return the complete input payload."""


class OutputSink(Protocol):
    """Deliver converted bytes (file write, download response, ...)."""

    def deliver(self, filename: str, data: bytes) -> str:
        """Persist or hand off ``data`` and return where it went."""
