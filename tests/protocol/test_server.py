"""Tests for the line-delimited JSON server."""

import io

import orjson
import pytest

from surgeon.protocol.dispatch import Dispatcher, Session
from surgeon.protocol.server import (
    decode_request,
    encode_reply,
    serve,
    stream_lines,
    stream_writer,
)
from surgeon.protocol.errors import ProtocolError
from surgeon.protocol.messages import Reply
from surgeon.protocol.state import SessionStage


async def lines_of(*items):
    for item in items:
        yield item


class Collector:
    def __init__(self):
        self.replies = []

    async def __call__(self, data: bytes) -> None:
        assert data.endswith(b"\n")
        self.replies.append(orjson.loads(data))


class TestCodec:
    """Tests for request decoding and reply encoding."""

    def test_decode(self):
        request = decode_request(b'{"command": "open", "input": {"version": 1}}\n')
        assert request.command == "open"
        assert request.input == {"version": 1}

    def test_decode_malformed_json(self):
        with pytest.raises(ProtocolError, match="malformed JSON"):
            decode_request(b"{not json")

    def test_encode(self):
        assert encode_reply(Reply.ok({"text": "hi"})) == b'{"reply":"OK","text":"hi"}\n'


class TestServe:
    """Tests for the serve loop."""

    @pytest.mark.asyncio
    async def test_session_over_lines(self, context, project):
        session = Session(Dispatcher(context))
        emit = Collector()
        setdir = orjson.dumps(
            {"command": "setdir", "input": {"mode": "local", "directory": str(project)}}
        )
        count = await serve(
            lines_of(
                b'{"command": "open"}\n',
                b"\n",
                setdir + b"\n",
                b'{"command": "about"}\n',
            ),
            emit,
            session,
        )
        assert count == 3
        assert emit.replies == [
            {"reply": "OK"},
            {"reply": "OK"},
            {"reply": "OK", "text": "about surgeon"},
        ]
        assert session.state.stage == SessionStage.CONFIGURED

    @pytest.mark.asyncio
    async def test_bad_lines_get_error_replies(self, context):
        session = Session(Dispatcher(context))
        emit = Collector()
        await serve(
            lines_of(b"[1, 2]\n", b"garbage\n", b'{"command": "open"}\n'),
            emit,
            session,
        )
        assert [reply["reply"] for reply in emit.replies] == ["Error", "Error", "OK"]
        assert emit.replies[0]["message"].startswith("Invalid request")
        assert session.state.stage == SessionStage.OPENED

    @pytest.mark.asyncio
    async def test_default_session(self):
        emit = Collector()
        await serve(lines_of(b'{"command": "about"}\n'), emit)
        assert emit.replies[0]["reply"] == "Error"

    @pytest.mark.asyncio
    async def test_stream_helpers(self, context):
        stdin = io.BytesIO(b'{"command": "open"}\n{"command": "about"}\n')
        stdout = io.BytesIO()
        count = await serve(stream_lines(stdin), stream_writer(stdout), Session(Dispatcher(context)))
        assert count == 2
        assert stdout.getvalue().splitlines() == [
            b'{"reply":"OK"}',
            b'{"reply":"OK","text":"about surgeon"}',
        ]
