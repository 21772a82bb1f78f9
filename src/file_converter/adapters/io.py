"""Input sources and output sinks implementing application ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


class FileInputSource:
    """Read input bytes from a local file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.name = self.path.name

    def read_bytes(self) -> bytes:
        """Return file content.

        Returns
        -------
        bytes
            Complete file payload.
        """
        return self.path.read_bytes()


@dataclass
class BytesInputSource:
    """Serve input bytes already held in memory (e.g. an upload)."""

    name: str
    data: bytes = field(repr=False)

    def read_bytes(self) -> bytes:
        return self.data


class DirectoryOutputSink:
    """Write converted bytes into a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def deliver(self, filename: str, data: bytes) -> str:
        """Write ``data`` to ``directory / filename``.

        Parameters
        ----------
        filename : str
            Output file name; any directory part is ignored.
        data : bytes
            Converted payload.

        Returns
        -------
        str
            Path of the written file.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / Path(filename).name
        path.write_bytes(data)
        return str(path)


@dataclass
class MemoryOutputSink:
    """Keep delivered payloads in memory for download-style delivery."""

    delivered: dict[str, bytes] = field(default_factory=dict)

    def deliver(self, filename: str, data: bytes) -> str:
        self.delivered[filename] = data
        return f"memory://{filename}"
