"""Command dispatch and per-session serialization."""

from __future__ import annotations

import logging
import threading
from typing import Any

from surgeon.protocol.commands import COMMANDS, Command, CommandContext
from surgeon.protocol.errors import ProtocolError
from surgeon.protocol.messages import Reply, Request
from surgeon.protocol.state import SessionState

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Resolves commands by name and runs the validate-then-run contract.

    The dispatcher is stateless apart from its command instances; the
    session state is passed in on every call. No exception escapes
    dispatch(): every failure becomes an Error reply.
    """

    def __init__(self, context: CommandContext | None = None):
        """
        Initialize dispatcher.

        Args:
            context: Registry, config and file system factory shared by
                the commands. Defaults to the built-in registry.
        """
        self.context = context or CommandContext()
        self._commands: dict[str, Command] = {
            name: command_cls(self.context) for name, command_cls in COMMANDS.items()
        }

    @property
    def command_names(self) -> list[str]:
        """Names of every command this dispatcher accepts."""
        return sorted(self._commands)

    def dispatch(self, state: SessionState, command: str, payload: dict[str, Any] | None = None) -> Reply:
        """
        Validate and run one command.

        Args:
            state: Session state; mutated only by a successful run.
            command: Command name, e.g. "xrun".
            payload: Command input.

        Returns:
            The command's reply, or an Error reply describing why the
            command was rejected or failed.
        """
        payload = payload or {}
        handler = self._commands.get(command)
        if handler is None:
            return self._error(command, ProtocolError.unknown_command(command))

        try:
            envelope = handler.validate(state, payload)
        except ProtocolError as e:
            return self._error(command, e)
        except Exception as e:
            logger.exception(f"Validation of {command} raised")
            return self._error(command, ProtocolError.internal_error(str(e)))

        try:
            reply = handler.run(state, envelope)
        except ProtocolError as e:
            return self._error(command, e)
        except OSError as e:
            return self._error(command, ProtocolError.io_failure(str(e)))
        except Exception as e:
            logger.exception(f"Command {command} raised")
            return self._error(command, ProtocolError.internal_error(str(e)))

        logger.debug(f"{command} -> {reply}")
        return reply

    def handle(self, state: SessionState, request: Request) -> Reply:
        """Dispatch a parsed request."""
        return self.dispatch(state, request.command, request.input)

    @staticmethod
    def _error(command: str, error: ProtocolError) -> Reply:
        logger.info(f"{command} rejected: {error}")
        return Reply.from_error(error)


class Session:
    """
    One client's session: its state plus a dispatcher.

    Commands against a session are serialized with a lock, so a command's
    validate and run happen as one unit even if callers share the session
    across threads. Independent sessions share nothing but the dispatcher's
    context.
    """

    def __init__(self, dispatcher: Dispatcher | None = None, state: SessionState | None = None):
        self.dispatcher = dispatcher or Dispatcher()
        self.state = state or SessionState()
        self._lock = threading.Lock()

    def handle(self, command: str, payload: dict[str, Any] | None = None) -> Reply:
        """Run one command against this session."""
        with self._lock:
            return self.dispatcher.dispatch(self.state, command, payload)

    def handle_request(self, request: Request) -> Reply:
        """Run a parsed request against this session."""
        return self.handle(request.command, request.input)

    def __str__(self) -> str:
        return f"Session({self.state})"
