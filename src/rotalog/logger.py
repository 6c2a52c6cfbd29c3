"""
The Logger: level gate, hook dispatch and serialised writes.

Level checks, entry construction and hooks run without a lock. Only the write
of rendered bytes to ``out`` is serialised, so a rotating sink's size-triggered
rotation is serialised with writes too.
"""

from __future__ import annotations

import io
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping

from .diagnostics import record_failure
from .entry import Entry, LevelMethods
from .errors import PanicError, RotalogError
from .formatters import Formatter, TextFormatter
from .hooks import Hook, LevelHooks
from .io import LoggerWriter
from .levels import Level, parse_level
from .retention import RetentionFunc, RetentionPolicy
from .sinks import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_RETAINED, RotatingFileSink

ROTATING_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logger(LevelMethods):
    """Leveled logger writing formatted entries to ``out``.

    Args:
        out: Destination stream. Text streams receive decoded text, anything
            else receives bytes. Defaults to ``sys.stderr``.
        formatter: Renders entries; defaults to ``TextFormatter()``.
        hooks: Hook registry; a fresh one by default.
        level: Threshold. Integers are wrapped into range, names are parsed.
        exit_func: Called with status 1 after every fatal call.
    """

    def __init__(
        self,
        out: Any = None,
        *,
        formatter: Formatter | None = None,
        hooks: LevelHooks | None = None,
        level: Level | int | str = Level.INFO,
        exit_func: Callable[[int], Any] = sys.exit,
    ):
        self.out = out if out is not None else sys.stderr
        self.formatter: Formatter = formatter or TextFormatter()
        self.hooks = hooks if hooks is not None else LevelHooks()
        self.level = level
        self.exit_func = exit_func
        self.terminated = False
        self._lock = threading.Lock()

    @classmethod
    def rotating(
        cls,
        folder: str,
        name: str,
        level: Level | int | str = Level.INFO,
        *,
        max_retained: int = DEFAULT_MAX_RETAINED,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        retention: RetentionPolicy | None = None,
        formatter: Formatter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "Logger":
        """Create a logger writing to rotated files beside the executable.

        Raises:
            ExecutablePathError: ``sys.argv[0]`` cannot be resolved.
            SinkConstructionError: The log directory or first file cannot be created.
        """
        sink = RotatingFileSink(
            folder,
            name,
            max_retained=max_retained,
            max_file_size=max_file_size,
            retention=retention,
            clock=clock,
        )
        return cls(
            sink,
            formatter=formatter
            or TextFormatter(disable_colors=True, timestamp_format=ROTATING_TIMESTAMP_FORMAT),
            level=level,
        )

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def level(self) -> Level:
        return self._level

    @level.setter
    def level(self, value: Level | int | str) -> None:
        self._level = parse_level(value)

    def set_level(self, value: Level | int | str) -> None:
        self.level = value

    def add_hook(self, hook: Hook) -> None:
        self.hooks.add(hook)

    def set_output(self, out: Any) -> None:
        with self._lock:
            self.out = out

    def _rotating_sink(self) -> RotatingFileSink:
        if not isinstance(self.out, RotatingFileSink):
            raise RotalogError(
                "logger output is not a rotating file sink",
                code="NOT_ROTATING",
                details={"out": repr(self.out)},
            )
        return self.out

    def set_retention_policy(self, policy: RetentionPolicy) -> None:
        with self._lock:
            self._rotating_sink().retention = policy

    def set_retention_func(self, func: Callable[[Path], object]) -> None:
        self.set_retention_policy(RetentionFunc(func))

    def rotate(self) -> None:
        """Rotate the output sink, serialised with writes."""
        with self._lock:
            self._rotating_sink().rotate()

    def writer(self, level: Level = Level.INFO) -> LoggerWriter:
        return LoggerWriter(self, level)

    def close(self) -> None:
        """Close the output if this logger owns it (a rotating sink)."""
        with self._lock:
            if isinstance(self.out, RotatingFileSink):
                self.out.close()

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    def _owner(self) -> "Logger":
        return self

    def _base_entry(self) -> Entry:
        return Entry(self)

    def with_field(self, key: str, value: Any) -> Entry:
        return Entry(self).with_field(key, value)

    def with_fields(self, fields: Mapping[str, Any]) -> Entry:
        return Entry(self).with_fields(fields)

    def with_error(self, err: BaseException) -> Entry:
        return Entry(self).with_error(err)

    def with_json(self, value: Any) -> Entry:
        return Entry(self).with_json(value)

    # -------------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------------

    def emit(self, entry: Entry, level: Level, message: str) -> None:
        """Run hooks, render and write one admitted call.

        Raises:
            PanicError: After the write, when ``level`` is PANIC.
        """
        entry = entry.stamped(level, message)
        self.hooks.fire(level, entry)

        try:
            data = self.formatter.format(entry)
        except Exception as exc:
            record_failure("format_failures", "format failed", entry_level=level.label, error=repr(exc))
        else:
            with self._lock:
                try:
                    self._write(data)
                except Exception as exc:
                    record_failure("write_failures", "write failed", out=repr(self.out), error=repr(exc))

        if level == Level.PANIC:
            raise PanicError(entry)

    def _write(self, data: bytes) -> None:
        out = self.out
        if isinstance(out, io.TextIOBase):
            out.write(data.decode("utf-8"))
        else:
            out.write(data)
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def terminate(self) -> None:
        self.terminated = True
        self.exit_func(1)
