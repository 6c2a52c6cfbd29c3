"""
I/O redirection utilities.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .levels import Level

if TYPE_CHECKING:
    from .logger import Logger


class LoggerWriter:
    """File-like object that logs every complete line written to it.

    Useful as a target for ``print(file=...)``, ``contextlib.redirect_stdout``
    or third-party code that only accepts a stream.
    """

    encoding = "utf-8"

    def __init__(self, logger: "Logger", level: Level = Level.INFO):
        self.logger = logger
        self.level = Level(level)
        self.linebuf = ""

    def write(self, buf: str | bytes) -> int:
        if isinstance(buf, bytes):
            buf = buf.decode(self.encoding, errors="replace")

        for line in buf.splitlines(True):
            # If the line ends with a newline, log it immediately
            if line.endswith("\n"):
                self.linebuf += line.rstrip("\r\n")
                if self.linebuf:
                    self.logger.log(self.level, self.linebuf)
                self.linebuf = ""
            else:
                self.linebuf += line
        return len(buf)

    def flush(self) -> None:
        if self.linebuf:
            self.logger.log(self.level, self.linebuf)
            self.linebuf = ""

    def close(self) -> None:
        self.flush()

    def isatty(self) -> bool:
        return False

    def writable(self) -> bool:
        return True
