import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from rotalog import diagnostics
from rotalog.entry import Entry
from rotalog.levels import Level


class StepClock:
    """Deterministic clock advancing by ``step`` on every call."""

    def __init__(self, start: datetime = datetime(2026, 10, 19, 8, 0, 0), step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


class RecordingFormatter:
    """Formatter stub that counts renders."""

    def __init__(self) -> None:
        self.rendered: list[Entry] = []

    def format(self, entry: Entry) -> bytes:
        self.rendered.append(entry)
        return f"{entry.level.label}:{entry.message}\n".encode()


class RecordingHook:
    def __init__(self, levels=tuple(Level), fail: bool = False) -> None:
        self._levels = tuple(levels)
        self.fail = fail
        self.entries: list[Entry] = []

    def levels(self):
        return self._levels

    def fire(self, entry: Entry) -> None:
        self.entries.append(entry)
        if self.fail:
            raise RuntimeError("hook exploded")


@pytest.fixture
def exe_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Pretend the running program lives in ``tmp_path/bin``."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setattr(sys, "argv", [str(bin_dir / "app")])
    return bin_dir


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def frozen_clock() -> StepClock:
    return StepClock(step=timedelta(0))


@pytest.fixture
def recording_formatter() -> RecordingFormatter:
    return RecordingFormatter()


@pytest.fixture
def hook_factory():
    return RecordingHook


@pytest.fixture(autouse=True)
def reset_failure_counters():
    diagnostics.counters.reset()
    yield
    diagnostics.counters.reset()
