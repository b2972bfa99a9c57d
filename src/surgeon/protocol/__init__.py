"""
Command protocol core.

Implements the session state machine, the validate-then-run command
contract, dispatch, and translation of transformation results into replies.
"""

from surgeon.protocol.messages import Request, Reply, REPLY_OK, REPLY_ERROR
from surgeon.protocol.errors import (
    ProtocolError,
    INVALID_REQUEST,
    UNKNOWN_COMMAND,
    INTERNAL_ERROR,
    STATE_PRECONDITION,
    MISSING_KEY,
    INVALID_ENUM,
    UNKNOWN_TRANSFORMATION,
    INVALID_ARGUMENT,
    IO_FAILURE,
    UNSUPPORTED_MODE,
)
from surgeon.protocol.state import (
    SessionStage,
    SessionState,
    InvalidStageTransition,
)
from surgeon.protocol.commands import COMMANDS, Command, CommandContext
from surgeon.protocol.dispatch import Dispatcher, Session

__all__ = [
    # Messages
    "Request",
    "Reply",
    "REPLY_OK",
    "REPLY_ERROR",
    # Errors
    "ProtocolError",
    "INVALID_REQUEST",
    "UNKNOWN_COMMAND",
    "INTERNAL_ERROR",
    "STATE_PRECONDITION",
    "MISSING_KEY",
    "INVALID_ENUM",
    "UNKNOWN_TRANSFORMATION",
    "INVALID_ARGUMENT",
    "IO_FAILURE",
    "UNSUPPORTED_MODE",
    # State
    "SessionStage",
    "SessionState",
    "InvalidStageTransition",
    # Commands and dispatch
    "COMMANDS",
    "Command",
    "CommandContext",
    "Dispatcher",
    "Session",
]
