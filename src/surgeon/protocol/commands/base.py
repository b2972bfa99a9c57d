"""Command contract shared by every protocol command."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, Iterable, TypeVar

from surgeon.config import SurgeonConfig
from surgeon.filesystem.base import FileSystem
from surgeon.filesystem.local import LocalFileSystem
from surgeon.protocol.errors import ProtocolError
from surgeon.protocol.messages import Reply
from surgeon.protocol.state import SessionStage, SessionState
from surgeon.refactoring.registry import TransformationRegistry, default_registry

# Typed request envelope produced by validate() and consumed by run()
E = TypeVar("E")


@dataclass
class CommandContext:
    """Process-wide collaborators shared by the commands of a session."""

    registry: TransformationRegistry = field(default_factory=default_registry)
    """Transformations available to list, params and xrun."""

    config: SurgeonConfig = field(default_factory=SurgeonConfig)
    """Engine settings."""

    local_filesystem: Callable[[], FileSystem] = LocalFileSystem
    """Factory for the backend bound by ``setdir`` in local mode."""


class Command(ABC, Generic[E]):
    """
    A protocol command.

    Commands are two-phase. ``validate`` checks the session stage and the
    raw input and parses the input into a typed envelope; it must not
    change the session. ``run`` receives that envelope and performs the
    command. The dispatcher guarantees ``run`` is only called with an
    envelope from a successful ``validate`` against the same state.

    Both phases raise ProtocolError on failure.
    """

    name: ClassVar[str]

    def __init__(self, context: CommandContext | None = None):
        self.context = context or CommandContext()

    @abstractmethod
    def validate(self, state: SessionState, payload: dict[str, Any]) -> E:
        """
        Check preconditions and parse ``payload``.

        Args:
            state: Current session state (read only).
            payload: Raw command input.

        Returns:
            The parsed envelope passed to run().

        Raises:
            ProtocolError: If the command is not valid now.
        """

    @abstractmethod
    def run(self, state: SessionState, envelope: E) -> Reply:
        """
        Execute the command.

        Raises:
            ProtocolError: If execution fails. No session change may have
                been made when this is raised.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def require_stage(state: SessionState, minimum: SessionStage, message: str) -> None:
    """Raise a precondition error unless the session is at least ``minimum``."""
    if state.stage < minimum:
        raise ProtocolError.state_precondition(message, int(state.stage))


def require_key(payload: dict[str, Any], key: str, message: str | None = None) -> Any:
    """Return ``payload[key]``, raising MissingKey if absent."""
    if key not in payload:
        raise ProtocolError.missing_key(key, message)
    return payload[key]


def require_choice(key: str, value: Any, allowed: Iterable[str]) -> str:
    """Return ``value`` if it is one of ``allowed``, raising InvalidEnum otherwise."""
    allowed = frozenset(allowed)
    if not isinstance(value, str) or value not in allowed:
        raise ProtocolError.invalid_enum(key, allowed)
    return value
