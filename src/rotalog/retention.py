"""
Retention policies for files evicted from a rotating sink.

A policy is any object with a ``dispose(path)`` method that raises on failure.
Design Pattern: Strategy Pattern, so the sink never needs to know whether an
evicted file is deleted, archived or kept.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class RetentionPolicy(Protocol):
    """Disposes of a file that has left the retained set."""

    def dispose(self, path: Path) -> None:
        ...


class DeleteFile:
    """Default policy: remove the file from disk."""

    def dispose(self, path: Path) -> None:
        Path(path).unlink()

    def __repr__(self) -> str:
        return "DeleteFile()"


class KeepFile:
    """Leave evicted files where they are."""

    def dispose(self, path: Path) -> None:
        return None

    def __repr__(self) -> str:
        return "KeepFile()"


class ArchiveFile:
    """Move evicted files into ``destination``, creating it on demand."""

    def __init__(self, destination: str | Path):
        self._destination = Path(destination)

    @property
    def destination(self) -> Path:
        return self._destination

    def dispose(self, path: Path) -> None:
        self._destination.mkdir(parents=True, exist_ok=True)
        shutil.move(str(path), str(self._destination / Path(path).name))

    def __repr__(self) -> str:
        return f"ArchiveFile({str(self._destination)!r})"


class RetentionFunc:
    """Adapt a plain callable into a retention policy."""

    def __init__(self, func: Callable[[Path], object]):
        self._func = func

    def dispose(self, path: Path) -> None:
        self._func(path)

    def __repr__(self) -> str:
        return f"RetentionFunc({self._func!r})"
