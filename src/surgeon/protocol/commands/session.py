"""Session lifecycle commands: open, about and setdir."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from surgeon.protocol.commands.base import (
    Command,
    require_choice,
    require_key,
    require_stage,
)
from surgeon.protocol.errors import ProtocolError
from surgeon.protocol.messages import Reply
from surgeon.protocol.state import LOCAL_MODE, WEB_MODE, SessionStage, SessionState

logger = logging.getLogger(__name__)

SETDIR_MODES = frozenset({LOCAL_MODE, WEB_MODE})


@dataclass(frozen=True)
class OpenRequest:
    version: float | None = None


class Open(Command[OpenRequest]):
    """Starts a session. Re-opening an opened session keeps its stage."""

    name = "open"

    def validate(self, state: SessionState, payload: dict[str, Any]) -> OpenRequest:
        version = payload.get("version")
        if isinstance(version, bool) or not isinstance(version, (int, float)):
            version = None
        return OpenRequest(version=version)

    def run(self, state: SessionState, envelope: OpenRequest) -> Reply:
        if envelope.version is not None:
            logger.info(f"Client opened session with protocol version {envelope.version}")
        state.advance(max(state.stage, SessionStage.OPENED))
        return Reply.ok()


@dataclass(frozen=True)
class AboutRequest:
    pass


class About(Command[AboutRequest]):
    """Returns descriptive text about the engine."""

    name = "about"

    def validate(self, state: SessionState, payload: dict[str, Any]) -> AboutRequest:
        require_stage(state, SessionStage.OPENED, "The about command requires a state of non-zero")
        return AboutRequest()

    def run(self, state: SessionState, envelope: AboutRequest) -> Reply:
        return Reply.ok({"text": self.context.config.about_text})


@dataclass(frozen=True)
class SetDirRequest:
    mode: str
    directory: str | None = None


class SetDir(Command[SetDirRequest]):
    """
    Binds the session's working directory and file system.

    Only local mode is implemented. Web mode is accepted by validation so
    that clients get a specific "not supported" error rather than a
    generic invalid-value one.
    """

    name = "setdir"

    def validate(self, state: SessionState, payload: dict[str, Any]) -> SetDirRequest:
        require_stage(state, SessionStage.OPENED, 'State must be non-zero for "setdir" command')
        mode = require_choice("mode", require_key(payload, "mode"), SETDIR_MODES)
        if mode != LOCAL_MODE:
            return SetDirRequest(mode=mode)

        directory = require_key(
            payload, "directory", '"directory" key required if "mode" is local'
        )
        if not isinstance(directory, str) or not directory:
            raise ProtocolError.invalid_argument('"directory" key must be a non-empty string')
        directory = os.path.abspath(directory)

        # Probe readability with the same kind of backend run() will bind
        try:
            self.context.local_filesystem().read_dir(directory)
        except OSError as e:
            reason = e.strerror or str(e)
            raise ProtocolError.io_failure(f"Cannot read directory {directory}: {reason}")
        return SetDirRequest(mode=mode, directory=directory)

    def run(self, state: SessionState, envelope: SetDirRequest) -> Reply:
        if envelope.mode == WEB_MODE:
            raise ProtocolError.unsupported_mode(WEB_MODE)

        state.configure(
            mode=envelope.mode,
            working_dir=envelope.directory,
            filesystem=self.context.local_filesystem(),
        )
        logger.info(f"Session configured for {envelope.mode} mode in {envelope.directory}")
        return Reply.ok()
