"""Small string helpers: path-segment escaping, concatenation, host names and lines."""

from __future__ import annotations

_HEX = "0123456789ABCDEF"
_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    b"abcdefghijklmnopqrstuvwxyz"
    b"0123456789"
    b"_-~."
)


def should_escape(c: int | str) -> bool:
    """Return True if the byte (or single character) must be percent-encoded."""
    code = ord(c) if isinstance(c, str) else c
    return code not in _UNRESERVED


def escape(s: str) -> str:
    """Percent-encode every byte of the UTF-8 form of ``s`` except unreserved ones."""
    data = s.encode("utf-8")
    if not any(should_escape(byte) for byte in data):
        return s
    parts = []
    for byte in data:
        if should_escape(byte):
            parts.append("%" + _HEX[byte >> 4] + _HEX[byte & 15])
        else:
            parts.append(chr(byte))
    return "".join(parts)


def write_string(*args: str) -> str:
    """Concatenate all given strings."""
    return "".join(args)


def to_hostname(url: str) -> str:
    """Reduce a URL with an optional https scheme to its host name."""
    stripped = url.removeprefix("https://")
    return stripped.split("/")[0]


def split_lines(s: str) -> list[str]:
    """Split a string into lines by CRLF if present, otherwise by LF."""
    if "\r\n" in s:
        return s.split("\r\n")
    return s.split("\n")