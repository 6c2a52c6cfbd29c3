from __future__ import annotations

import contextlib

from rotalog.io import LoggerWriter
from rotalog.levels import Level
from rotalog.logger import Logger


def test_complete_lines_are_logged(recording_formatter):
    logger = Logger(formatter=recording_formatter, out=_Sink())
    writer = LoggerWriter(logger, Level.WARN)

    writer.write("first\nsecond\npartial")

    assert [(e.level, e.message) for e in recording_formatter.rendered] == [
        (Level.WARN, "first"),
        (Level.WARN, "second"),
    ]
    writer.flush()
    assert recording_formatter.rendered[-1].message == "partial"


def test_bytes_and_blank_lines(recording_formatter):
    logger = Logger(formatter=recording_formatter, out=_Sink())
    writer = logger.writer()

    writer.write(b"caf\xc3\xa9\r\n\n")

    assert [e.message for e in recording_formatter.rendered] == ["café"]


def test_redirect_stdout(recording_formatter):
    logger = Logger(formatter=recording_formatter, out=_Sink())

    with contextlib.redirect_stdout(logger.writer(Level.INFO)):
        print("captured", 42)

    assert recording_formatter.rendered[0].message == "captured 42"


def test_writer_respects_threshold(recording_formatter):
    logger = Logger(formatter=recording_formatter, out=_Sink(), level=Level.INFO)
    writer = logger.writer(Level.DEBUG)
    writer.write("hidden\n")
    writer.close()

    assert recording_formatter.rendered == []
    assert not writer.isatty()


class _Sink:
    def __init__(self) -> None:
        self.data = b""

    def write(self, data: bytes) -> int:
        self.data += data
        return len(data)
