"""Command line splitting and integer argument decoding for a serial terminal."""

from __future__ import annotations

import re
import string

_NUL = "\0"
_DECIMAL = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)", re.ASCII)


def _c_string(text: str) -> str:
    return text.split(_NUL, 1)[0]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _atox(text: str) -> int:
    """Accumulate hexadecimal digits, ignoring any other character."""
    result = 0
    for ch in text:
        if ch in string.hexdigits:
            result = (result * 16 + int(ch, 16)) & 0xFFFFFFFF
    return result


def _atoi(text: str) -> int:
    match = _DECIMAL.match(text)
    return _to_int32(int(match.group(1))) if match else 0


def _is_hex(text: str) -> bool:
    return len(text) >= 3 and text[0] == "0" and text[1] in "xX"


def segment(cmd: str, max_args: int = 8) -> list[str]:
    """Split a command line into at most ``max_args`` arguments.

    Spaces separate arguments; an argument that starts with a double quote
    runs until a closing quote followed by a space or the end of the line.
    An unterminated quoted argument is dropped.
    """
    if max_args < 0:
        raise ValueError(f"max_args must not be negative, got {max_args}")

    text = _c_string(cmd)
    buf = list(text) + [_NUL]
    starts: list[int] = []
    candidate: int | None = None
    at_start = True
    quoted = False
    prev_quote = False

    def close(pos: int) -> None:
        nonlocal candidate
        buf[pos - 1 if prev_quote else pos] = _NUL
        if candidate is not None:
            start = candidate + (1 if quoted else 0)
            if len(starts) < max_args:
                starts.append(start)
        candidate = None

    for pos, ch in enumerate(text):
        if ch == '"':
            if at_start:
                quoted = True
                candidate = pos
            at_start = False
            prev_quote = True
        elif ch == " ":
            if not quoted or prev_quote:
                close(pos)
                quoted = False
                at_start = True
            prev_quote = False
        else:
            if candidate is None:
                candidate = pos
            at_start = False
            prev_quote = False

    if not quoted or prev_quote:
        close(len(text))

    return ["".join(buf[start:buf.index(_NUL, start)]) for start in starts]


def arg_to_int(text: str | None) -> int:
    """Convert decimal or ``0x``-prefixed hexadecimal text to a signed 32-bit int."""
    if not text:
        return 0
    text = _c_string(text)
    if _is_hex(text):
        return _to_int32(_atox(text[2:]))
    return _atoi(text)


def arg_to_uint(text: str | None) -> int:
    """Convert decimal or ``0x``-prefixed hexadecimal text to an unsigned 32-bit int."""
    if not text:
        return 0
    text = _c_string(text)
    if _is_hex(text):
        return _atox(text[2:])
    return _atoi(text) & 0xFFFFFFFF