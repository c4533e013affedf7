"""In-memory log buffer and JSON results for the web interface."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MAX_LOGS = 50


def _go_json(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return text


@dataclass
class MemoryLogs:
    """Keeps the most recent log lines, at most ``max_num`` of them."""

    max_num: int = DEFAULT_MAX_LOGS
    logs: list[str] = field(default_factory=list)

    def write(self, text: str) -> int:
        """Store one log entry and drop the oldest beyond the limit."""
        self.logs.append(text)
        if len(self.logs) > self.max_num:
            del self.logs[: len(self.logs) - self.max_num]
        return len(text)

    def clear(self) -> None:
        """Forget all stored entries."""
        self.logs.clear()

    def to_json(self) -> str:
        """Return the stored entries as a JSON array."""
        return _go_json(self.logs)


@dataclass
class Result:
    """A status code, a message and optional data returned to the browser."""

    code: int
    msg: str
    data: Any = None

    def to_json(self) -> str:
        """Serialise the result as one line of JSON."""
        return _go_json({"Code": self.code, "Msg": self.msg, "Data": self.data}) + "\n"


def error_result(msg: str) -> Result:
    """Build a failure result."""
    return Result(500, msg)


def ok_result(msg: str, data: Any) -> Result:
    """Build a success result."""
    return Result(200, msg, data)


MEMORY_LOGS = MemoryLogs()

_formatter = logging.Formatter("%(asctime)s %(message)s", "%Y/%m/%d %H:%M:%S")
_logger = logging.getLogger("ddnskit")
for _stream in (MEMORY_LOGS, sys.stdout):
    _handler = logging.StreamHandler(_stream)
    _handler.setFormatter(_formatter)
    _logger.addHandler(_handler)
_logger.setLevel(logging.INFO)