"""Compact jq-flavoured JSON encoding and truncated previews of values."""

from __future__ import annotations

import math
import re
import sys
from collections.abc import Iterator
from decimal import Decimal
from typing import Any

_LIMIT_BYTES = 32
_MAX_PREVIEW_BYTES = 30
_MAX_FLOAT = sys.float_info.max

_ESCAPE = re.compile('[\x00-\x1f"\\\\\x7f\ud800-\udfff]')
_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def preview(v: Any) -> str:
    """Return the encoding of ``v``, truncated to at most 30 bytes.

    A truncated preview ends with `` ..."``, `` ...]``, `` ...}`` or `` ...``
    depending on the type of the value.
    """
    data = _limited_bytes(v, _LIMIT_BYTES)
    if len(data) <= _MAX_PREVIEW_BYTES:
        return data.decode("utf-8")
    if isinstance(v, str):
        trailing = ' ..."'
    elif isinstance(v, list):
        trailing = " ...]"
    elif isinstance(v, dict):
        trailing = " ...}"
    else:
        trailing = " ..."
    text = data.decode("utf-8", "ignore")
    budget = _MAX_PREVIEW_BYTES - len(trailing)
    while len(text.encode("utf-8")) > budget:
        text = text[:-1]
    return text + trailing


def encode_json(v: Any) -> str:
    """Encode a value as compact JSON with object keys sorted."""
    return "".join(_encode(v))


def encode_string(s: str) -> str:
    """Encode a string as a quoted JSON string."""
    return "".join(_encode_string(s))


def _limited_bytes(v: Any, limit: int) -> bytes:
    buf = bytearray()
    for chunk in _encode(v):
        buf += chunk.encode("utf-8")
        if len(buf) >= limit:
            return bytes(buf[:limit])
    return bytes(buf)


def _encode(v: Any) -> Iterator[str]:
    if v is None:
        yield "null"
    elif isinstance(v, bool):
        yield "true" if v else "false"
    elif isinstance(v, int):
        yield str(v)
    elif isinstance(v, float):
        yield _format_float(v)
    elif isinstance(v, str):
        yield from _encode_string(v)
    elif isinstance(v, list):
        yield "["
        for i, x in enumerate(v):
            if i:
                yield ","
            yield from _encode(x)
        yield "]"
    elif isinstance(v, dict):
        yield "{"
        for i, key in enumerate(sorted(v, key=_key_order)):
            if i:
                yield ","
            yield from _encode_string(key)
            yield ":"
            yield from _encode(v[key])
        yield "}"
    else:
        raise TypeError(f"invalid type: {type(v).__name__} ({v!r})")


def _key_order(key: Any) -> bytes:
    if not isinstance(key, str):
        raise TypeError(f"invalid object key: {type(key).__name__} ({key!r})")
    return key.encode("utf-8", "surrogatepass")


def _format_float(f: float) -> str:
    if math.isnan(f):
        return "null"
    f = min(max(f, -_MAX_FLOAT), _MAX_FLOAT)
    x = abs(f)
    digits = Decimal(repr(f))
    if x != 0 and x < 1e-6 or x >= 1e21:
        return format(digits, "e")
    text = format(digits, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _escape(c: str) -> str:
    short = _SHORT_ESCAPES.get(c)
    if short is not None:
        return short
    if "\ud800" <= c <= "\udfff":
        return "\\ufffd"
    return f"\\u{ord(c):04x}"


def _encode_string(s: str) -> Iterator[str]:
    yield '"'
    start = 0
    for m in _ESCAPE.finditer(s):
        if start < m.start():
            yield s[start:m.start()]
        yield _escape(m.group())
        start = m.end()
    if start < len(s):
        yield s[start:]
    yield '"'