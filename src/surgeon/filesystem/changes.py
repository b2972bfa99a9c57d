"""File system changes requested by a transformation.

Transformations never touch the disk themselves for anything other than
text edits; creating, deleting and renaming files is reported back to the
client as one of these records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class CreateFile:
    """A new file with the given contents."""

    path: str
    contents: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {"change": "create", "file": self.path, "content": self.contents}


@dataclass(frozen=True)
class Remove:
    """Deletion of an existing file or directory."""

    path: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {"change": "delete", "path": self.path}


@dataclass(frozen=True)
class Rename:
    """Rename of ``path`` to ``new_name`` within the same directory."""

    path: str
    new_name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {"change": "rename", "from": self.path, "to": self.new_name}


FSChange = Union[CreateFile, Remove, Rename]
