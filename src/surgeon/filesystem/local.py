"""File system backend over the local disk."""

from __future__ import annotations

import logging
from pathlib import Path

from surgeon.filesystem.base import FileSystem

logger = logging.getLogger(__name__)


class LocalFileSystem(FileSystem):
    """Reads and writes files directly on the local disk as UTF-8 text."""

    encoding = "utf-8"

    def read_dir(self, path: str) -> list[str]:
        entries = sorted(child.name for child in Path(path).iterdir())
        logger.debug(f"Read {len(entries)} entries from {path}")
        return entries

    def read_file(self, path: str) -> str:
        # newline="" keeps CRLF line endings so edit offsets stay valid
        with open(path, encoding=self.encoding, newline="") as f:
            return f.read()

    def write_file(self, path: str, content: str) -> None:
        with open(path, "w", encoding=self.encoding, newline="") as f:
            f.write(content)
        logger.debug(f"Wrote {len(content)} chars to {path}")

    def remove(self, path: str) -> None:
        Path(path).unlink()
        logger.debug(f"Removed {path}")

    def __repr__(self) -> str:
        return "LocalFileSystem()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LocalFileSystem)

    def __hash__(self) -> int:
        return hash(LocalFileSystem)
