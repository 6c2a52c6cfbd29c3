"""
Process-wide default logger.

The default is created lazily on first use and can be replaced with
``init()``. Module-level functions forward to whichever logger is current.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping

from .entry import Entry
from .hooks import Hook
from .levels import Level
from .logger import Logger

_lock = threading.Lock()
_default: Logger | None = None


def init(logger: Logger) -> Logger:
    """Install ``logger`` as the process-wide default."""
    global _default
    with _lock:
        _default = logger
    return logger


def get_logger() -> Logger:
    global _default
    with _lock:
        if _default is None:
            _default = Logger()
        return _default


def set_level(level: Level | int | str) -> None:
    get_logger().set_level(level)


def add_hook(hook: Hook) -> None:
    get_logger().add_hook(hook)


def set_output(out: Any) -> None:
    get_logger().set_output(out)


def with_field(key: str, value: Any) -> Entry:
    return get_logger().with_field(key, value)


def with_fields(fields: Mapping[str, Any]) -> Entry:
    return get_logger().with_fields(fields)


def with_error(err: BaseException) -> Entry:
    return get_logger().with_error(err)


def debug(*args: Any) -> None:
    get_logger().debug(*args)


def info(*args: Any) -> None:
    get_logger().info(*args)


def print(*args: Any) -> None:  # noqa: A001
    get_logger().print(*args)


def warn(*args: Any) -> None:
    get_logger().warn(*args)


def warning(*args: Any) -> None:
    get_logger().warning(*args)


def error(*args: Any) -> None:
    get_logger().error(*args)


def fatal(*args: Any) -> None:
    get_logger().fatal(*args)


def panic(*args: Any) -> None:
    get_logger().panic(*args)


def debugf(template: str, *args: Any) -> None:
    get_logger().debugf(template, *args)


def infof(template: str, *args: Any) -> None:
    get_logger().infof(template, *args)


def printf(template: str, *args: Any) -> None:
    get_logger().printf(template, *args)


def warnf(template: str, *args: Any) -> None:
    get_logger().warnf(template, *args)


def warningf(template: str, *args: Any) -> None:
    get_logger().warningf(template, *args)


def errorf(template: str, *args: Any) -> None:
    get_logger().errorf(template, *args)


def fatalf(template: str, *args: Any) -> None:
    get_logger().fatalf(template, *args)


def panicf(template: str, *args: Any) -> None:
    get_logger().panicf(template, *args)


def debugln(*args: Any) -> None:
    get_logger().debugln(*args)


def infoln(*args: Any) -> None:
    get_logger().infoln(*args)


def println(*args: Any) -> None:
    get_logger().println(*args)


def warnln(*args: Any) -> None:
    get_logger().warnln(*args)


def warningln(*args: Any) -> None:
    get_logger().warningln(*args)


def errorln(*args: Any) -> None:
    get_logger().errorln(*args)


def fatalln(*args: Any) -> None:
    get_logger().fatalln(*args)


def panicln(*args: Any) -> None:
    get_logger().panicln(*args)
