"""
Observability side-channel for rotalog's own failures.

A logging library cannot report its problems through itself, so disposal,
hook, formatter, write and rotation failures are sent to a separate structlog
logger bound to stderr and counted in ``counters``.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections import Counter
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "rotalog")
    return event_dict


_PROCESSORS = [
    structlog.stdlib.add_log_level,
    add_timestamp,
    add_logger_name,
    structlog.processors.format_exc_info,
    structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "logger", "event"]),
]


def get_logger(name: str = "rotalog") -> Any:
    """Get the diagnostics logger for a rotalog component."""
    return structlog.wrap_logger(
        structlog.PrintLogger(file=sys.stderr),
        processors=_PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        _name=name,
    )


# =============================================================================
# Failure counters
# =============================================================================


class FailureCounters:
    """Thread-safe counters of non-fatal failures."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()

    def incr(self, key: str) -> None:
        with self._lock:
            self._counts[key] += 1

    def __getitem__(self, key: str) -> int:
        with self._lock:
            return self._counts[key]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


counters = FailureCounters()


def record_failure(kind: str, event: str, **details: object) -> None:
    """Count a failure of ``kind`` and report it on the side-channel."""
    counters.incr(kind)
    get_logger().warning(event, kind=kind, **details)
