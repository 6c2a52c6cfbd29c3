"""Verify that logging settings load from the environment and build loggers."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from rotalog.config import LogFormat, LoggingSettings, RetentionKind, build_logger
from rotalog.formatters import JSONFormatter, TextFormatter
from rotalog.levels import Level
from rotalog.retention import ArchiveFile, DeleteFile, KeepFile
from rotalog.sinks import DEFAULT_MAX_FILE_SIZE, RotatingFileSink


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("FOLDER", "NAME", "LEVEL", "MAX_RETAINED", "MAX_FILE_SIZE", "FORMAT", "RETENTION", "ARCHIVE_DIR"):
        monkeypatch.delenv(f"ROTALOG_{key}", raising=False)


def test_defaults():
    settings = LoggingSettings()
    assert settings.folder == "logs"
    assert settings.name == "app.log"
    assert settings.level is Level.INFO
    assert settings.max_retained == 10
    assert settings.max_file_size == DEFAULT_MAX_FILE_SIZE == 10 * 1024 * 1024
    assert settings.format is LogFormat.TEXT
    assert settings.retention is RetentionKind.DELETE


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ROTALOG_FOLDER", "var/log")
    monkeypatch.setenv("ROTALOG_LEVEL", "debug")
    monkeypatch.setenv("ROTALOG_MAX_RETAINED", "3")
    monkeypatch.setenv("ROTALOG_FORMAT", "json")

    settings = LoggingSettings()

    assert settings.folder == "var/log"
    assert settings.level is Level.DEBUG
    assert settings.max_retained == 3
    assert isinstance(settings.formatter(), JSONFormatter)


@pytest.mark.parametrize(("raw", "expected"), [("6", Level.PANIC), (6, Level.PANIC), ("-1", Level.DEBUG), ("Warning", Level.WARN)])
def test_level_is_parsed_and_wrapped(raw, expected):
    assert LoggingSettings(level=raw).level is expected


def test_level_from_environment_wraps(monkeypatch):
    monkeypatch.setenv("ROTALOG_LEVEL", "6")
    assert LoggingSettings().level is Level.PANIC


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        LoggingSettings(level="verbose")
    with pytest.raises(ValidationError):
        LoggingSettings(max_retained=0)
    with pytest.raises(ValidationError):
        LoggingSettings(max_file_size=-1)


def test_settings_are_frozen():
    settings = LoggingSettings()
    with pytest.raises(ValidationError):
        settings.level = Level.DEBUG


def test_retention_policies(tmp_path: Path):
    assert isinstance(LoggingSettings().retention_policy(), DeleteFile)
    assert isinstance(LoggingSettings(retention="keep").retention_policy(), KeepFile)

    archive = LoggingSettings(retention="archive", archive_dir=str(tmp_path)).retention_policy()
    assert isinstance(archive, ArchiveFile)
    assert archive.destination == tmp_path

    with pytest.raises(ValueError, match="archive_dir"):
        LoggingSettings(retention="archive").retention_policy()


def test_build_logger(exe_dir: Path):
    logger = build_logger(LoggingSettings(folder="out", name="svc.log", level="error", max_retained=4))

    assert isinstance(logger.out, RotatingFileSink)
    assert isinstance(logger.formatter, TextFormatter)
    assert logger.level is Level.ERROR
    assert logger.out.max_retained == 4
    assert logger.out.current_path.is_relative_to(exe_dir / "out")
    assert logger.out.current_path.name.startswith("svc-")
    logger.close()
