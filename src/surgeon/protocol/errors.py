"""Protocol error types and error codes."""

from dataclasses import dataclass
from typing import Any, Iterable

# Request framing errors (JSON-RPC compatible values)
INVALID_REQUEST = -32600
UNKNOWN_COMMAND = -32601
INTERNAL_ERROR = -32603

# Command errors (-32000 to -32099 reserved for implementation)
STATE_PRECONDITION = -32010
MISSING_KEY = -32011
INVALID_ENUM = -32012
UNKNOWN_TRANSFORMATION = -32013
INVALID_ARGUMENT = -32014
IO_FAILURE = -32015
UNSUPPORTED_MODE = -32016


def _quote_choices(allowed: Iterable[str]) -> str:
    return "|".join(sorted(allowed))


@dataclass
class ProtocolError(Exception):
    """
    Error raised while validating or running a command.

    The dispatcher converts every ProtocolError into an Error reply whose
    ``message`` is the error's message; the code is kept for logging and
    for callers embedding the engine directly.
    """

    code: int
    message: str
    data: dict[str, Any] | None = None

    def __post_init__(self):
        # Set exception message
        super().__init__(self.message)

    @classmethod
    def invalid_request(cls, details: str | None = None) -> "ProtocolError":
        """Create an invalid request error."""
        message = "Invalid request"
        if details:
            message = f"{message}: {details}"
        return cls(code=INVALID_REQUEST, message=message)

    @classmethod
    def unknown_command(cls, command: str) -> "ProtocolError":
        """Create an unknown command error."""
        return cls(
            code=UNKNOWN_COMMAND,
            message=f"Unknown command: {command}",
            data={"command": command},
        )

    @classmethod
    def internal_error(cls, details: str | None = None) -> "ProtocolError":
        """Create an internal error."""
        return cls(
            code=INTERNAL_ERROR,
            message=details or "Internal error",
        )

    @classmethod
    def state_precondition(cls, message: str, stage: int) -> "ProtocolError":
        """Create an error for a command issued in too early a stage."""
        return cls(code=STATE_PRECONDITION, message=message, data={"stage": stage})

    @classmethod
    def missing_key(cls, key: str, message: str | None = None) -> "ProtocolError":
        """Create an error for a required input key that is absent."""
        return cls(
            code=MISSING_KEY,
            message=message or f'"{key}" key is required',
            data={"key": key},
        )

    @classmethod
    def invalid_enum(cls, key: str, allowed: Iterable[str]) -> "ProtocolError":
        """Create an error for a value outside its allowed set."""
        choices = _quote_choices(allowed)
        return cls(
            code=INVALID_ENUM,
            message=f'"{key}" key must be "{choices}"',
            data={"key": key, "allowed": choices.split("|")},
        )

    @classmethod
    def unknown_transformation(cls, name: str) -> "ProtocolError":
        """Create an error for a transformation missing from the registry."""
        return cls(
            code=UNKNOWN_TRANSFORMATION,
            message=f"Transformation given is not a valid refactoring name: {name}",
            data={"transformation": name},
        )

    @classmethod
    def invalid_argument(cls, details: str) -> "ProtocolError":
        """Create an invalid argument error."""
        return cls(code=INVALID_ARGUMENT, message=details)

    @classmethod
    def io_failure(cls, details: str) -> "ProtocolError":
        """Create an I/O failure error."""
        return cls(code=IO_FAILURE, message=details)

    @classmethod
    def unsupported_mode(cls, mode: str) -> "ProtocolError":
        """Create an error for a recognised but unimplemented mode."""
        return cls(
            code=UNSUPPORTED_MODE,
            message=f"{mode.capitalize()} mode not supported",
            data={"mode": mode},
        )

    def __str__(self) -> str:
        return f"ProtocolError({self.code}): {self.message}"

    def __repr__(self) -> str:
        return f"ProtocolError(code={self.code}, message={self.message!r}, data={self.data})"
