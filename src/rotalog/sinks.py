"""
Self-managed rotating file sink.

Files live under ``<executable dir>/<folder>/<timestamp>/`` and are named
``<stem>-<timestamp><ext>``. At most ``max_retained`` files are kept; the
oldest is handed to the retention policy when a new one pushes the count over
the bound.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable

from .diagnostics import get_logger, record_failure
from .errors import ExecutablePathError, RotationError, SinkConstructionError
from .retention import DeleteFile, RetentionPolicy

DEFAULT_MAX_RETAINED = 10
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
SEQUENCE_WIDTH = 6


def executable_dir() -> Path:
    """Directory of the running program, from ``sys.argv[0]`` (not the cwd)."""
    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0:
        raise ExecutablePathError(argv0)
    try:
        return Path(argv0).resolve().parent
    except (OSError, RuntimeError) as exc:
        raise ExecutablePathError(argv0) from exc


def split_name(name: str) -> tuple[str, str]:
    """Split ``name`` at its last dot: ``app.log`` -> ``("app", ".log")``."""
    index = name.rfind(".")
    if index == -1:
        return name, ""
    return name[:index], name[index:]


class RotatingFileSink:
    """Writable byte stream backed by a bounded set of rotated files.

    ``rotate()`` is not synchronised. Size-triggered rotation happens inside
    ``write()``, which the owning logger only calls while holding its write
    lock.

    Args:
        folder: Directory, relative to the executable's directory.
        name: Logical file name, optionally with an extension.
        max_retained: Upper bound on the number of files kept.
        max_file_size: Rotate before a write would grow the active file past
            this many bytes. ``0`` disables size-triggered rotation.
        retention: Policy applied to evicted files.
        clock: Source of rotation timestamps.
    """

    def __init__(
        self,
        folder: str,
        name: str,
        *,
        max_retained: int = DEFAULT_MAX_RETAINED,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        retention: RetentionPolicy | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if max_retained < 1:
            raise ValueError("max_retained must be at least 1")
        if max_file_size < 0:
            raise ValueError("max_file_size must be non-negative")

        self.folder = folder
        self.name = name
        self.max_retained = max_retained
        self.max_file_size = max_file_size
        self.retention: RetentionPolicy = retention or DeleteFile()
        self._clock = clock

        self._retained: list[Path] = []
        self._stream: BinaryIO | None = None
        self._size = 0
        self._last_stamp = ""
        self._sequence = 0

        self._proc_dir = executable_dir()
        try:
            self.rotate()
        except RotationError as exc:
            raise SinkConstructionError(folder=folder, name=name, reason=exc.details["reason"]) from exc

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    @property
    def retained_files(self) -> tuple[Path, ...]:
        return tuple(self._retained)

    @property
    def current_path(self) -> Path | None:
        return self._retained[-1] if self._retained else None

    @property
    def log_directory(self) -> Path | None:
        return self._retained[0].parent if self._retained else None

    def _open_next(self, directory: Path, timestamp: str) -> tuple[Path, int, BinaryIO]:
        """Create the first unused ``<stem>-<timestamp>[_NNNNNN]<ext>`` file.

        A repeated timestamp (same second, or a clock that went back) takes the
        next free sequence number. Lexical order matches creation order for up
        to 999999 rotations within one second.
        """
        sequence = self._sequence + 1 if timestamp == self._last_stamp else 0
        stem, ext = split_name(self.name)
        while True:
            stamp = f"{timestamp}_{sequence:0{SEQUENCE_WIDTH}d}" if sequence else timestamp
            path = directory / f"{stem}-{stamp}{ext}"
            if path not in self._retained:
                try:
                    return path, sequence, open(path, "x+b")
                except FileExistsError:
                    pass
            sequence += 1

    def rotate(self) -> BinaryIO:
        """Open a new file, make it the active stream and evict the oldest.

        Raises:
            RotationError: The directory or file could not be created. The
                previously active stream stays open and active.
        """
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        if self._retained:
            directory = self._retained[0].parent
        else:
            directory = self._proc_dir / self.folder / timestamp

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RotationError(path=str(directory), reason=str(exc)) from exc

        try:
            path, sequence, stream = self._open_next(directory, timestamp)
        except OSError as exc:
            raise RotationError(path=str(getattr(exc, "filename", None) or directory), reason=str(exc)) from exc
        self._last_stamp, self._sequence = timestamp, sequence

        self._retained.append(path)
        if len(self._retained) > self.max_retained:
            self._evict(self._retained.pop(0))

        previous, self._stream, self._size = self._stream, stream, 0
        if previous is not None:
            previous.close()
        get_logger("rotalog.sinks").debug("rotated", path=str(path), retained=len(self._retained))
        return stream

    def _evict(self, path: Path) -> None:
        try:
            self.retention.dispose(path)
        except Exception as exc:
            record_failure("disposal_failures", "dispose failed", path=str(path), error=repr(exc))

    # -------------------------------------------------------------------------
    # Stream interface
    # -------------------------------------------------------------------------

    def write(self, data: bytes) -> int:
        if self._stream is None:
            raise ValueError("write to closed rotating sink")
        if self.max_file_size and self._size and self._size + len(data) > self.max_file_size:
            try:
                self.rotate()
            except RotationError as exc:
                record_failure("rotation_failures", "size rotation failed", error=str(exc))
        written = self._stream.write(data)
        self._size += written
        return written

    def flush(self) -> None:
        if self._stream is not None:
            self._stream.flush()

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    @property
    def closed(self) -> bool:
        return self._stream is None

    def __repr__(self) -> str:
        return f"RotatingFileSink(folder={self.folder!r}, name={self.name!r}, current={str(self.current_path)!r})"
