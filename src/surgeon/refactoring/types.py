"""Data passed to and returned from transformations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

from surgeon.filesystem.changes import FSChange
from surgeon.text.edits import EditSet

if TYPE_CHECKING:
    from surgeon.filesystem.base import FileSystem


class Quality(Enum):
    """Maturity of a transformation."""

    IN_TESTING = "in_testing"
    IN_DEVELOPMENT = "in_development"
    PRODUCTION = "production"


class Severity(Enum):
    """Severity of a transformation log entry."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """A single message reported by a transformation."""

    severity: Severity
    message: str


@dataclass
class Log:
    """Ordered messages collected while a transformation runs."""

    entries: list[LogEntry] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.entries.append(LogEntry(Severity.INFO, message))

    def warn(self, message: str) -> None:
        self.entries.append(LogEntry(Severity.WARNING, message))

    def error(self, message: str) -> None:
        self.entries.append(LogEntry(Severity.ERROR, message))

    @property
    def contains_errors(self) -> bool:
        """Check whether any entry has ERROR severity."""
        return any(entry.severity is Severity.ERROR for entry in self.entries)


@dataclass(frozen=True)
class Selection:
    """
    A range of text in one file.

    Lines and columns are 1-based; the end position is exclusive, so a
    selection of ``foo`` at the very start of a file is (1, 1)-(1, 4).
    """

    filename: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def to_offsets(self, text: str) -> tuple[int, int]:
        """
        Convert to a half-open character range within ``text``.

        Raises:
            ValueError: If either position lies outside ``text``.
        """
        return (
            _offset(text, self.start_line, self.start_col),
            _offset(text, self.end_line, self.end_col),
        )

    def __str__(self) -> str:
        return (
            f"{self.filename}:{self.start_line},{self.start_col}"
            f":{self.end_line},{self.end_col}"
        )


def _offset(text: str, line: int, col: int) -> int:
    if line < 1 or col < 1:
        raise ValueError(f"Position {line},{col} is not 1-based")
    lines = text.splitlines(keepends=True) or [""]
    if line > len(lines):
        raise ValueError(f"Line {line} is past the end of the file ({len(lines)} lines)")
    start = sum(len(prior) for prior in lines[: line - 1])
    if col - 1 > len(lines[line - 1]):
        raise ValueError(f"Column {col} is past the end of line {line}")
    return start + col - 1


@dataclass
class Config:
    """Arguments handed unmodified to ``Transformation.run``."""

    file_system: "FileSystem | None"
    scope: list[str] | None
    selection: Selection
    args: list[Any] = field(default_factory=list)


@dataclass
class Result:
    """
    Everything a transformation produced.

    ``edits`` maps absolute filenames to the edits for that file; files
    to create, delete or rename are listed separately in ``fs_changes``.
    """

    log: Log = field(default_factory=Log)
    edits: dict[str, EditSet] = field(default_factory=dict)
    fs_changes: list[FSChange] = field(default_factory=list)


@dataclass(frozen=True)
class Parameter:
    """A value the client must prompt for before running a transformation."""

    label: str
    prompt: str
    default: Any = ""


@dataclass(frozen=True)
class Description:
    """Static metadata about a transformation."""

    name: str
    params: tuple[Parameter, ...] = ()
    quality: Quality = Quality.PRODUCTION
    synopsis: str = ""
