"""
Severity levels and the level gate.

Levels are ordered from most severe (lowest value) to least severe. A logger
admits a call when its threshold is greater than or equal to the call's level.
"""

from __future__ import annotations

from enum import IntEnum

from .errors import InvalidLevelError


class Level(IntEnum):
    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5

    @property
    def label(self) -> str:
        """Lowercase name used when rendering entries."""
        if self is Level.WARN:
            return "warning"
        return self.name.lower()

    def __str__(self) -> str:
        return self.label


_ALIASES = {
    "panic": Level.PANIC,
    "fatal": Level.FATAL,
    "error": Level.ERROR,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "info": Level.INFO,
    "debug": Level.DEBUG,
}


def normalize_level(raw: int) -> Level:
    """Wrap an arbitrary integer into the level range."""
    return Level(int(raw) % len(Level))


def parse_level(value: str | int | Level) -> Level:
    """Convert a level name, integer or Level into a Level.

    Integers are wrapped, names are matched case-insensitively.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, int):
        return normalize_level(value)
    level = _ALIASES.get(str(value).strip().lower())
    if level is None:
        raise InvalidLevelError(value)
    return level


def enabled(threshold: int, level: int) -> bool:
    return threshold >= level
