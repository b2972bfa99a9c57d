"""Request and reply messages exchanged with the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from surgeon.protocol.errors import ProtocolError

REPLY_OK = "OK"
REPLY_ERROR = "Error"


@dataclass
class Request:
    """
    A single command submitted by the client.

    Wire form: ``{"command": "xrun", "input": {...}}``. ``input`` may be
    omitted for commands that take no arguments.
    """

    command: str
    input: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"command": self.command, "input": self.input}

    @classmethod
    def from_dict(cls, data: Any) -> "Request":
        """
        Create from a decoded JSON value.

        Raises:
            ProtocolError: If the value is not a well-formed request.
        """
        if not isinstance(data, dict):
            raise ProtocolError.invalid_request("request must be a JSON object")
        command = data.get("command")
        if not isinstance(command, str) or not command:
            raise ProtocolError.invalid_request('"command" must be a non-empty string')
        payload = data.get("input", {})
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ProtocolError.invalid_request('"input" must be a JSON object')
        return cls(command=command, input=payload)

    def __str__(self) -> str:
        return f"Request({self.command})"


@dataclass
class Reply:
    """
    The answer to one request.

    ``fields`` holds the wire keys other than ``reply``. Error replies keep
    the originating ProtocolError in ``error``; it is never serialized.
    """

    status: str
    fields: dict[str, Any] = field(default_factory=dict)
    error: ProtocolError | None = field(default=None, compare=False)

    @property
    def is_ok(self) -> bool:
        """Check if this is a success reply."""
        return self.status == REPLY_OK

    @property
    def is_error(self) -> bool:
        """Check if this is an error reply."""
        return self.status == REPLY_ERROR

    @property
    def message(self) -> str | None:
        """Error message, present only on error replies."""
        return self.fields.get("message")

    def __getitem__(self, key: str) -> Any:
        if key == "reply":
            return self.status
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key == "reply" or key in self.fields

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"reply": self.status, **self.fields}

    @classmethod
    def ok(cls, fields: dict[str, Any] | None = None) -> "Reply":
        """Create a success reply."""
        return cls(status=REPLY_OK, fields=dict(fields or {}))

    @classmethod
    def from_error(cls, error: ProtocolError) -> "Reply":
        """Create an error reply carrying the error's message."""
        return cls(status=REPLY_ERROR, fields={"message": error.message}, error=error)

    def __str__(self) -> str:
        if self.is_error:
            return f"Reply(Error, {self.message!r})"
        return f"Reply(OK, keys={sorted(self.fields)})"
