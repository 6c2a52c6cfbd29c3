"""
Exception hierarchy for rotalog.

Every error carries a machine-readable ``code`` and a ``details`` dict so that
callers can branch on the failure kind without parsing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .entry import Entry


class RotalogError(Exception):
    """Root of all rotalog errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidLevelError(RotalogError, ValueError):
    """Raised when a level name cannot be parsed."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"not a valid log level: {value!r}",
            code="INVALID_LEVEL",
            details={"value": value},
        )


# ================================
# Sink errors
# ================================


class SinkError(RotalogError):
    """Base class for failures of the rotating file sink."""

    pass


class ExecutablePathError(SinkError):
    """The running program's own path could not be resolved."""

    def __init__(self, argv0: str) -> None:
        super().__init__(
            "cannot resolve the executable directory from sys.argv[0]",
            code="EXECUTABLE_PATH_UNRESOLVED",
            details={"argv0": argv0},
        )


class SinkConstructionError(SinkError):
    """The sink could not create its directory or open its first file."""

    def __init__(self, *, folder: str, name: str, reason: str) -> None:
        super().__init__(
            f"cannot create rotating sink {folder!r}/{name!r}: {reason}",
            code="SINK_CONSTRUCTION_FAILED",
            details={"folder": folder, "name": name, "reason": reason},
        )


class RotationError(SinkError):
    """A rotation step failed; the previously active file is untouched."""

    def __init__(self, *, path: str, reason: str) -> None:
        super().__init__(
            f"cannot rotate to {path!r}: {reason}",
            code="ROTATION_FAILED",
            details={"path": path, "reason": reason},
        )


# ================================
# Control flow
# ================================


class PanicError(RotalogError):
    """Raised after a panic-level entry has been written.

    The entry that triggered it is available as ``entry``.
    """

    def __init__(self, entry: "Entry") -> None:
        super().__init__(entry.message, code="PANIC", details=dict(entry.fields))
        self.entry = entry
