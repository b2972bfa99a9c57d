"""Line-delimited JSON server for one session over a pair of byte streams."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import AsyncIterator, Awaitable, BinaryIO, Callable

from surgeon.lib import oj
from surgeon.protocol.dispatch import Session
from surgeon.protocol.errors import ProtocolError
from surgeon.protocol.messages import Reply, Request

logger = logging.getLogger(__name__)

# Type alias for reply writers
Emit = Callable[[bytes], Awaitable[None]]


def decode_request(line: bytes) -> Request:
    """
    Parse one request line.

    Raises:
        ProtocolError: If the line is not valid JSON or not a request.
    """
    try:
        data = oj.loads(line)
    except ValueError as e:
        raise ProtocolError.invalid_request(f"malformed JSON ({e})")
    return Request.from_dict(data)


def encode_reply(reply: Reply) -> bytes:
    """Serialize a reply as one JSON line."""
    return oj.dumps_line(reply.to_dict())


async def serve(lines: AsyncIterator[bytes], emit: Emit, session: Session | None = None) -> int:
    """
    Answer requests until the input ends.

    Each request is handled to completion before the next line is read,
    and commands run in a worker thread so a slow transformation does not
    block the event loop.

    Args:
        lines: Request lines, one JSON object each. Blank lines are skipped.
        emit: Coroutine that writes one encoded reply.
        session: Session to run commands against; a fresh one by default.

    Returns:
        Number of replies written.
    """
    session = session or Session()
    count = 0
    async for line in lines:
        if not line.strip():
            continue
        try:
            request = decode_request(line)
        except ProtocolError as e:
            logger.info(f"Rejected request line: {e}")
            reply = Reply.from_error(e)
        else:
            reply = await asyncio.to_thread(session.handle_request, request)
        await emit(encode_reply(reply))
        count += 1
    logger.debug(f"Input closed after {count} replies")
    return count


async def stream_lines(stream: BinaryIO) -> AsyncIterator[bytes]:
    """Yield lines from a blocking binary stream without blocking the loop."""
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            return
        yield line


def stream_writer(stream: BinaryIO) -> Emit:
    """Build an emit coroutine that writes and flushes ``stream``."""

    async def emit(data: bytes) -> None:
        stream.write(data)
        stream.flush()

    return emit


async def serve_stdio(session: Session | None = None) -> int:
    """Serve one session over this process's stdin and stdout."""
    return await serve(
        stream_lines(sys.stdin.buffer),
        stream_writer(sys.stdout.buffer),
        session,
    )
