"""File system abstraction used by sessions and transformations."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FileSystem(ABC):
    """
    Backend a session reads source files from and writes artifacts to.

    Paths are plain strings; backends decide how they are interpreted.
    Every method raises ``OSError`` (or a subclass) on failure; reading
    a file that is not valid text also raises ``UnicodeDecodeError``.
    """

    @abstractmethod
    def read_dir(self, path: str) -> list[str]:
        """
        List the entries of a directory.

        Args:
            path: Directory to list.

        Returns:
            Sorted entry names (not full paths).
        """

    @abstractmethod
    def read_file(self, path: str) -> str:
        """
        Return the text content of a file.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the content is not text in the backend's encoding.
        """

    @abstractmethod
    def write_file(self, path: str, content: str) -> None:
        """Create or overwrite a file with the given text."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Delete a file."""

    def exists(self, path: str) -> bool:
        """Check whether a file can be read."""
        try:
            self.read_file(path)
        except (OSError, UnicodeDecodeError):
            return False
        return True
