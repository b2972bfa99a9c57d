"""orjson helpers used for config files and the stdio wire format."""

from typing import Any

import orjson


def loads(data: bytes | str) -> Any:
    """Decode JSON from bytes or str."""
    return orjson.loads(data)


def dumps_line(obj: Any) -> bytes:
    """Encode to JSON bytes terminated by a newline."""
    return orjson.dumps(obj, default=str, option=orjson.OPT_APPEND_NEWLINE)
