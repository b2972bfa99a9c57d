"""The xrun command: run a transformation and report its changes."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from surgeon.protocol.commands.base import (
    Command,
    require_choice,
    require_key,
    require_stage,
)
from surgeon.protocol.errors import ProtocolError
from surgeon.protocol.messages import Reply
from surgeon.protocol.state import SessionStage, SessionState
from surgeon.protocol.translate import OUTPUT_MODES, PATCH_MODE, translate_result
from surgeon.refactoring.base import Transformation
from surgeon.refactoring.types import Config, Selection

logger = logging.getLogger(__name__)

SELECTION_COORDINATES = ("startline", "startcol", "endline", "endcol")


@dataclass(frozen=True)
class TextSelection:
    """A textselection input with its filename still relative to the working directory."""

    filename: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def resolve(self, working_dir: str | None) -> Selection:
        """Build a Selection whose filename is joined onto ``working_dir``."""
        filename = os.path.join(working_dir, self.filename) if working_dir else self.filename
        return Selection(
            filename=filename,
            start_line=self.start_line,
            start_col=self.start_col,
            end_line=self.end_line,
            end_col=self.end_col,
        )

    @classmethod
    def from_dict(cls, data: Any) -> "TextSelection":
        """
        Parse a ``textselection`` input.

        Coordinates may be any JSON number; fractional values are truncated.

        Raises:
            ProtocolError: If the value is not a complete selection.
        """
        if not isinstance(data, dict):
            raise ProtocolError.invalid_argument('"textselection" key must be an object')
        filename = require_key(data, "filename", '"textselection" requires a "filename" key')
        if not isinstance(filename, str) or not filename:
            raise ProtocolError.invalid_argument('"textselection.filename" must be a non-empty string')

        coordinates = []
        for key in SELECTION_COORDINATES:
            value = require_key(data, key, f'"textselection" requires a "{key}" key')
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ProtocolError.invalid_argument(f'"textselection.{key}" must be a number')
            coordinates.append(int(value))
        return cls(filename, *coordinates)


@dataclass(frozen=True)
class XRunRequest:
    transformation_name: str
    transformation: Transformation
    selection: TextSelection
    arguments: list[Any] = field(default_factory=list)
    limit: int | None = None
    mode: str = PATCH_MODE


def _parse_limit(value: Any) -> int:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or value < 0
        or not float(value).is_integer()
    ):
        raise ProtocolError.invalid_argument('"limit" key must be a non-negative integer')
    return int(value)


class XRun(Command[XRunRequest]):
    """
    Runs a transformation on a text selection.

    In patch mode (the default) one ``<file>.diff`` is written beside each
    edited file; in text mode the edited content is returned inline. Source
    files are never modified either way.
    """

    name = "xrun"

    def validate(self, state: SessionState, payload: dict[str, Any]) -> XRunRequest:
        require_stage(
            state, SessionStage.CONFIGURED, "State of 2 (file system configured) is required"
        )

        limit = _parse_limit(payload["limit"]) if "limit" in payload else None
        mode = PATCH_MODE
        if "mode" in payload:
            mode = require_choice("mode", payload["mode"], OUTPUT_MODES)

        name = require_key(payload, "transformation", "Transformation key not found")
        transformation = (
            self.context.registry.lookup(name) if isinstance(name, str) else None
        )
        if transformation is None:
            raise ProtocolError.unknown_transformation(str(name))

        selection = TextSelection.from_dict(require_key(payload, "textselection"))

        arguments = payload.get("arguments")
        if arguments is None:
            arguments = []
        if not isinstance(arguments, list):
            raise ProtocolError.invalid_argument('"arguments" key must be a list')

        return XRunRequest(
            transformation_name=name,
            transformation=transformation,
            selection=selection,
            arguments=list(arguments),
            limit=limit,
            mode=mode,
        )

    def run(self, state: SessionState, envelope: XRunRequest) -> Reply:
        config = Config(
            file_system=state.filesystem,
            scope=None,
            selection=envelope.selection.resolve(state.working_dir),
            args=envelope.arguments,
        )

        logger.info(f"Running {envelope.transformation_name} on {config.selection}")
        try:
            result = envelope.transformation.run(config)
        except Exception as e:
            logger.exception(f"Transformation {envelope.transformation_name} raised")
            raise ProtocolError.internal_error(
                f"Transformation {envelope.transformation_name} failed: {e}"
            )

        fields = translate_result(
            result,
            description=envelope.transformation.description().name,
            fs=state.filesystem,
            mode=envelope.mode,
            working_dir=state.working_dir,
            diff_suffix=self.context.config.diff_suffix,
        )
        logger.debug(
            f"{envelope.transformation_name} produced {len(fields['files'])} file(s), "
            f"{len(fields['log'])} log entries"
        )
        return Reply.ok(fields)
