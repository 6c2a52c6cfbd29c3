"""
Entry formatters.

A formatter turns a stamped entry into newline-terminated bytes. Two are
provided: ``TextFormatter`` (logfmt-style, optionally coloured) and
``JSONFormatter`` (one orjson object per line).
"""

from __future__ import annotations

import re
import time
from typing import TYPE_CHECKING, Any, Protocol

import orjson

from .levels import Level

if TYPE_CHECKING:
    from .entry import Entry

FIELD_TIME = "time"
FIELD_LEVEL = "level"
FIELD_MSG = "msg"

_SAFE_VALUE = re.compile(r"^[A-Za-z0-9\-._/@^+]+$")
_BASE_TIMESTAMP = time.time()


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


class Formatter(Protocol):
    def format(self, entry: "Entry") -> bytes:
        ...


def prefix_field_clashes(fields: dict[str, Any]) -> dict[str, Any]:
    """Move user fields named like a reserved key to ``fields.<key>``."""
    for key in (FIELD_TIME, FIELD_MSG, FIELD_LEVEL):
        if key in fields:
            fields["fields." + key] = fields.pop(key)
    return fields


def format_timestamp(entry: "Entry", timestamp_format: str | None) -> str:
    if entry.time is None:
        return ""
    if timestamp_format is None:
        return entry.time.isoformat(timespec="seconds")
    return entry.time.strftime(timestamp_format)


def _value_text(value: Any) -> str:
    if isinstance(value, BaseException):
        return str(value) or type(value).__name__
    return str(value)


# =============================================================================
# Text Formatter
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "gray": "\033[37m",
}

_LEVEL_COLORS = {
    Level.DEBUG: "gray",
    Level.INFO: "blue",
    Level.WARN: "yellow",
    Level.ERROR: "red",
    Level.FATAL: "red",
    Level.PANIC: "red",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class TextFormatter:
    """Renders ``key=value`` pairs, or a coloured layout on terminals.

    Args:
        disable_colors: Never colour, even on a terminal.
        force_colors: Colour even when the output is not a terminal.
        timestamp_format: ``strftime`` format; ``None`` means ISO 8601.
        full_timestamp: In coloured mode, print the timestamp instead of
            seconds elapsed since start.
        disable_timestamp: Omit the timestamp in plain mode.
        disable_sorting: Keep field insertion order instead of sorting keys.
    """

    def __init__(
        self,
        *,
        disable_colors: bool = False,
        force_colors: bool = False,
        timestamp_format: str | None = None,
        full_timestamp: bool = False,
        disable_timestamp: bool = False,
        disable_sorting: bool = False,
    ):
        self.disable_colors = disable_colors
        self.force_colors = force_colors
        self.timestamp_format = timestamp_format
        self.full_timestamp = full_timestamp
        self.disable_timestamp = disable_timestamp
        self.disable_sorting = disable_sorting

    def _is_colored(self, entry: "Entry") -> bool:
        if self.disable_colors:
            return False
        if self.force_colors:
            return True
        out = getattr(entry.logger, "out", None)
        return bool(getattr(out, "isatty", lambda: False)())

    @staticmethod
    def _quote(value: str) -> str:
        if _SAFE_VALUE.match(value):
            return value
        return orjson_dumps(value)

    def format(self, entry: "Entry") -> bytes:
        fields = prefix_field_clashes(dict(entry.fields))
        keys = list(fields) if self.disable_sorting else sorted(fields)

        if self._is_colored(entry):
            line = self._format_colored(entry, keys, fields)
        else:
            pairs = []
            if not self.disable_timestamp:
                pairs.append((FIELD_TIME, format_timestamp(entry, self.timestamp_format)))
            pairs.append((FIELD_LEVEL, entry.level.label))
            if entry.message:
                pairs.append((FIELD_MSG, entry.message))
            pairs.extend((key, _value_text(fields[key])) for key in keys)
            line = " ".join(f"{key}={self._quote(value)}" for key, value in pairs)

        return (line + "\n").encode("utf-8")

    def _format_colored(self, entry: "Entry", keys: list[str], fields: dict[str, Any]) -> str:
        color = _LEVEL_COLORS.get(entry.level, "blue")
        level_text = colorize(entry.level.label.upper()[:4], color)
        if self.full_timestamp:
            stamp = format_timestamp(entry, self.timestamp_format)
        else:
            elapsed = entry.time.timestamp() - _BASE_TIMESTAMP if entry.time else 0
            stamp = f"{int(elapsed):04d}"
        parts = [f"{level_text}[{stamp}] {entry.message:<44}"]
        for key in keys:
            parts.append(f"{colorize(key, color)}={_value_text(fields[key])}")
        return " ".join(parts)


# =============================================================================
# JSON Formatter
# =============================================================================


class JSONFormatter:
    """Renders each entry as a single-line JSON object."""

    def __init__(self, *, timestamp_format: str | None = None):
        self.timestamp_format = timestamp_format

    def format(self, entry: "Entry") -> bytes:
        data: dict[str, Any] = {}
        for key, value in entry.fields.items():
            data[key] = _value_text(value) if isinstance(value, BaseException) else value
        data = prefix_field_clashes(data)
        data[FIELD_TIME] = format_timestamp(entry, self.timestamp_format)
        data[FIELD_MSG] = entry.message
        data[FIELD_LEVEL] = entry.level.label
        return (orjson_dumps(data, default=str) + "\n").encode("utf-8")
