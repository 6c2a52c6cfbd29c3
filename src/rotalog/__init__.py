"""
Leveled logging with structured fields, per-level hooks and a self-managed
rotating file sink.

Quick start:
    from rotalog import Logger

    log = Logger.rotating("logs", "app.log", "debug")
    log.with_field("user", "ada").info("signed in")

Library: orjson for JSON rendering, structlog for rotalog's own diagnostics,
pydantic-settings for environment configuration.
"""

from .config import LoggingSettings, build_logger
from .entry import Entry
from .errors import (
    ExecutablePathError,
    InvalidLevelError,
    PanicError,
    RotalogError,
    RotationError,
    SinkConstructionError,
    SinkError,
)
from .formatters import Formatter, JSONFormatter, TextFormatter
from .hooks import FuncHook, Hook, LevelHooks
from .io import LoggerWriter
from .levels import Level, enabled, normalize_level, parse_level
from .logger import Logger
from .retention import ArchiveFile, DeleteFile, KeepFile, RetentionFunc, RetentionPolicy
from .sinks import RotatingFileSink

__all__ = [
    "ArchiveFile",
    "DeleteFile",
    "Entry",
    "ExecutablePathError",
    "Formatter",
    "FuncHook",
    "Hook",
    "InvalidLevelError",
    "JSONFormatter",
    "KeepFile",
    "Level",
    "LevelHooks",
    "Logger",
    "LoggerWriter",
    "LoggingSettings",
    "PanicError",
    "RetentionFunc",
    "RetentionPolicy",
    "RotalogError",
    "RotatingFileSink",
    "RotationError",
    "SinkConstructionError",
    "SinkError",
    "TextFormatter",
    "build_logger",
    "enabled",
    "normalize_level",
    "parse_level",
]
