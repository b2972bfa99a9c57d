"""Edit sets: non-overlapping text replacements against one file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


class EditConflictError(Exception):
    """Raised when an edit overlaps one already in the set."""

    def __init__(self, existing: "Edit", new: "Edit"):
        self.existing = existing
        self.new = new
        super().__init__(f"Edit {new} overlaps existing edit {existing}")


class EditRangeError(Exception):
    """Raised when an edit extends past the end of the text it is applied to."""

    def __init__(self, edit: "Edit", length: int):
        self.edit = edit
        self.length = length
        super().__init__(f"Edit {edit} is out of range for text of length {length}")


@dataclass(frozen=True, order=True)
class Edit:
    """
    Replacement of ``length`` characters at ``offset`` with ``replacement``.

    A zero length is an insertion; an empty replacement is a deletion.
    """

    offset: int
    length: int
    replacement: str = ""

    def __post_init__(self):
        if self.offset < 0 or self.length < 0:
            raise ValueError(f"Edit offset and length must be >= 0: {self!r}")

    @property
    def end(self) -> int:
        """Offset one past the last replaced character."""
        return self.offset + self.length

    def overlaps(self, other: "Edit") -> bool:
        """Check whether two edits touch the same characters or insertion point."""
        if self.offset == other.offset:
            return True
        first, second = (self, other) if self.offset < other.offset else (other, self)
        return first.end > second.offset

    def __str__(self) -> str:
        return f"@{self.offset}:{self.end}->{self.replacement!r}"


class EditSet:
    """
    An ordered collection of non-overlapping edits.

    Edits are kept sorted by offset so they can be applied in a single
    forward pass over the original text.
    """

    def __init__(self, edits: Iterable[Edit] = ()):
        self._edits: list[Edit] = []
        for edit in edits:
            self.add(edit)

    def add(self, edit: Edit) -> None:
        """
        Add an edit.

        Raises:
            EditConflictError: If the edit overlaps one already present.
        """
        for existing in self._edits:
            if existing.overlaps(edit):
                raise EditConflictError(existing, edit)
        self._edits.append(edit)
        self._edits.sort()

    def replace(self, offset: int, length: int, replacement: str) -> None:
        """Shorthand for ``add(Edit(offset, length, replacement))``."""
        self.add(Edit(offset, length, replacement))

    def __iter__(self) -> Iterator[Edit]:
        return iter(self._edits)

    def __len__(self) -> int:
        return len(self._edits)

    def apply_to_string(self, text: str) -> str:
        """
        Apply every edit to ``text`` and return the result.

        Raises:
            EditRangeError: If an edit reaches past the end of ``text``.
        """
        parts: list[str] = []
        cursor = 0
        for edit in self._edits:
            if edit.end > len(text):
                raise EditRangeError(edit, len(text))
            parts.append(text[cursor:edit.offset])
            parts.append(edit.replacement)
            cursor = edit.end
        parts.append(text[cursor:])
        return "".join(parts)

    def size_change(self) -> int:
        """Net change in length after applying the set."""
        return sum(len(edit.replacement) - edit.length for edit in self._edits)

    def __str__(self) -> str:
        return "EditSet(" + ", ".join(str(edit) for edit in self._edits) + ")"
