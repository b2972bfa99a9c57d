"""Commands that describe the available transformations: list and params."""

from __future__ import annotations

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
from surgeon.protocol.state import SessionStage, SessionState
from surgeon.refactoring.base import Transformation
from surgeon.refactoring.types import Quality

QUALITIES = frozenset(q.value for q in Quality)

# Names reported for parameter default types
TYPE_NAMES: dict[type, str] = {
    str: "string",
    bool: "bool",
    int: "int",
    float: "float",
}


def type_name(value: Any) -> str:
    """Name the type of a parameter's default value for the client."""
    return TYPE_NAMES.get(type(value), type(value).__name__)


@dataclass(frozen=True)
class ListRequest:
    quality: Quality


class List(Command[ListRequest]):
    """Lists every registered transformation."""

    name = "list"

    def validate(self, state: SessionState, payload: dict[str, Any]) -> ListRequest:
        require_stage(state, SessionStage.OPENED, "The list command requires a state of non-zero")
        quality = require_key(payload, "quality", "Quality key not found")
        return ListRequest(quality=Quality(require_choice("quality", quality, QUALITIES)))

    def run(self, state: SessionState, envelope: ListRequest) -> Reply:
        names = [
            {"shortName": short_name, "name": transformation.description().name}
            for short_name, transformation in self.context.registry.all_registered().items()
        ]
        return Reply.ok({"transformations": names})


@dataclass(frozen=True)
class ParamsRequest:
    transformation: Transformation


class Params(Command[ParamsRequest]):
    """Describes the parameters a transformation prompts for."""

    name = "params"

    def validate(self, state: SessionState, payload: dict[str, Any]) -> ParamsRequest:
        require_stage(
            state, SessionStage.CONFIGURED, "State of 2 (file system configured) is required"
        )
        name = require_key(payload, "transformation", "Transformation key not found")
        transformation = (
            self.context.registry.lookup(name) if isinstance(name, str) else None
        )
        if transformation is None:
            raise ProtocolError.unknown_transformation(str(name))
        return ParamsRequest(transformation=transformation)

    def run(self, state: SessionState, envelope: ParamsRequest) -> Reply:
        params = [
            {
                "label": param.label,
                "prompt": param.prompt,
                "type": type_name(param.default),
                "default": param.default,
            }
            for param in envelope.transformation.description().params
        ]
        return Reply.ok({"params": params})
