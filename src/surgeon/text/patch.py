"""Unified diff patches built from edit sets."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from surgeon.text.edits import EditSet

if TYPE_CHECKING:
    from surgeon.filesystem.base import FileSystem


@dataclass
class Patch:
    """Original and edited text for one file, rendered as a unified diff."""

    original: str
    edited: str

    @property
    def is_empty(self) -> bool:
        """True when the edits leave the text unchanged."""
        return self.original == self.edited

    def render(self, old_name: str, new_name: str, context: int = 3) -> str:
        """
        Render as unified diff text.

        Args:
            old_name: Name written on the ``---`` header line.
            new_name: Name written on the ``+++`` header line.
            context: Lines of unchanged context around each hunk.

        Returns:
            The diff text; empty when there is nothing to change.
        """
        lines = difflib.unified_diff(
            self.original.splitlines(keepends=True),
            self.edited.splitlines(keepends=True),
            fromfile=old_name,
            tofile=new_name,
            n=context,
        )
        out: list[str] = []
        for line in lines:
            out.append(line)
            if not line.endswith("\n"):
                # difflib leaves the last line bare when the file lacks a newline
                out.append("\n\\ No newline at end of file\n")
        return "".join(out)


def create_patch(edits: EditSet, original: str) -> Patch:
    """Build a patch by applying ``edits`` to ``original``."""
    return Patch(original=original, edited=edits.apply_to_string(original))


def create_patch_for_file(edits: EditSet, path: str, fs: "FileSystem") -> Patch:
    """
    Build a patch for a file read through ``fs``.

    Raises:
        OSError: If the file cannot be read.
        EditRangeError: If an edit does not fit the file's content.
    """
    return create_patch(edits, fs.read_file(path))


def apply_to_file(edits: EditSet, path: str, fs: "FileSystem") -> str:
    """Return the content of ``path`` with ``edits`` applied, without writing it."""
    return edits.apply_to_string(fs.read_file(path))
