"""
Log entries and the per-level logging API.

An ``Entry`` is an immutable bundle of structured fields bound to a logger.
Adding fields returns a new entry; nothing is written until one of the level
methods is called.
"""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping

from .formatters import orjson_dumps
from .levels import Level, enabled

if TYPE_CHECKING:
    from .logger import Logger

ERROR_KEY = "error"
JSON_KEY = "json"


# =============================================================================
# Message rendering
# =============================================================================


def sprint(args: tuple[Any, ...]) -> str:
    """Concatenate operands, spacing two adjacent non-string operands."""
    parts: list[str] = []
    for i, arg in enumerate(args):
        if i and not isinstance(arg, str) and not isinstance(args[i - 1], str):
            parts.append(" ")
        parts.append(str(arg))
    return "".join(parts)


def sprintf(template: str, args: tuple[Any, ...]) -> str:
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError):
        return f"{template} (bad format args: {args!r})"


def sprintln(args: tuple[Any, ...]) -> str:
    """Space-join operands. The line terminator comes from the formatter."""
    return " ".join(str(arg) for arg in args)


# =============================================================================
# Level methods
# =============================================================================


class LevelMethods:
    """Entry points shared by ``Logger`` and ``Entry``.

    Subclasses provide ``_owner()`` (the logger that gates and writes) and
    ``_base_entry()`` (the entry whose fields are logged).
    """

    def _owner(self) -> "Logger":
        raise NotImplementedError

    def _base_entry(self) -> "Entry":
        raise NotImplementedError

    def _log(self, level: Level, render: Callable[..., str], *parts: Any) -> None:
        logger = self._owner()
        if enabled(logger.level, level):
            logger.emit(self._base_entry(), level, render(*parts))
        if level == Level.FATAL:
            logger.terminate()

    def log(self, level: Level, *args: Any) -> None:
        self._log(Level(level), sprint, args)

    def logf(self, level: Level, template: str, *args: Any) -> None:
        self._log(Level(level), sprintf, template, args)

    def logln(self, level: Level, *args: Any) -> None:
        self._log(Level(level), sprintln, args)

    # positional

    def debug(self, *args: Any) -> None:
        self._log(Level.DEBUG, sprint, args)

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, sprint, args)

    def print(self, *args: Any) -> None:
        self._log(Level.INFO, sprint, args)

    def warn(self, *args: Any) -> None:
        self._log(Level.WARN, sprint, args)

    def warning(self, *args: Any) -> None:
        self._log(Level.WARN, sprint, args)

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, sprint, args)

    def fatal(self, *args: Any) -> None:
        self._log(Level.FATAL, sprint, args)

    def panic(self, *args: Any) -> None:
        self._log(Level.PANIC, sprint, args)

    # template

    def debugf(self, template: str, *args: Any) -> None:
        self._log(Level.DEBUG, sprintf, template, args)

    def infof(self, template: str, *args: Any) -> None:
        self._log(Level.INFO, sprintf, template, args)

    def printf(self, template: str, *args: Any) -> None:
        self._log(Level.INFO, sprintf, template, args)

    def warnf(self, template: str, *args: Any) -> None:
        self._log(Level.WARN, sprintf, template, args)

    def warningf(self, template: str, *args: Any) -> None:
        self._log(Level.WARN, sprintf, template, args)

    def errorf(self, template: str, *args: Any) -> None:
        self._log(Level.ERROR, sprintf, template, args)

    def fatalf(self, template: str, *args: Any) -> None:
        self._log(Level.FATAL, sprintf, template, args)

    def panicf(self, template: str, *args: Any) -> None:
        self._log(Level.PANIC, sprintf, template, args)

    # line

    def debugln(self, *args: Any) -> None:
        self._log(Level.DEBUG, sprintln, args)

    def infoln(self, *args: Any) -> None:
        self._log(Level.INFO, sprintln, args)

    def println(self, *args: Any) -> None:
        self._log(Level.INFO, sprintln, args)

    def warnln(self, *args: Any) -> None:
        self._log(Level.WARN, sprintln, args)

    def warningln(self, *args: Any) -> None:
        self._log(Level.WARN, sprintln, args)

    def errorln(self, *args: Any) -> None:
        self._log(Level.ERROR, sprintln, args)

    def fatalln(self, *args: Any) -> None:
        self._log(Level.FATAL, sprintln, args)

    def panicln(self, *args: Any) -> None:
        self._log(Level.PANIC, sprintln, args)


# =============================================================================
# Entry
# =============================================================================


class Entry(LevelMethods):
    """Immutable record of one log call.

    ``time``, ``level`` and ``message`` are only set on the stamped copy that
    is handed to hooks and the formatter.
    """

    __slots__ = ("logger", "fields", "time", "level", "message")

    def __init__(
        self,
        logger: "Logger",
        fields: Mapping[str, Any] | None = None,
        *,
        time: datetime | None = None,
        level: Level = Level.PANIC,
        message: str = "",
    ):
        object.__setattr__(self, "logger", logger)
        object.__setattr__(self, "fields", MappingProxyType(dict(fields or {})))
        object.__setattr__(self, "time", time)
        object.__setattr__(self, "level", level)
        object.__setattr__(self, "message", message)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Entry is immutable, cannot set {name!r}")

    def __repr__(self) -> str:
        return f"Entry(level={self.level.label!r}, message={self.message!r}, fields={dict(self.fields)!r})"

    def _owner(self) -> "Logger":
        return self.logger

    def _base_entry(self) -> "Entry":
        return self

    def with_field(self, key: str, value: Any) -> "Entry":
        return self.with_fields({key: value})

    def with_fields(self, fields: Mapping[str, Any]) -> "Entry":
        merged = dict(self.fields)
        merged.update(fields)
        return Entry(self.logger, merged)

    def with_error(self, err: BaseException) -> "Entry":
        return self.with_field(ERROR_KEY, err)

    def with_json(self, value: Any) -> "Entry":
        """Attach ``value`` serialised as JSON, or its ``str()`` if it cannot be."""
        try:
            rendered = orjson_dumps(value)
        except TypeError:
            rendered = str(value)
        return self.with_field(JSON_KEY, rendered)

    def stamped(self, level: Level, message: str, time: datetime | None = None) -> "Entry":
        """Copy carrying the level, message and emission time of a log call."""
        return Entry(
            self.logger,
            self.fields,
            time=time or datetime.now().astimezone(),
            level=level,
            message=message,
        )
