"""
Logging Configuration.

Settings are read from ``ROTALOG_*`` environment variables and an optional
``.env`` file, e.g. ``ROTALOG_LEVEL=debug`` or ``ROTALOG_MAX_RETAINED=5``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .formatters import Formatter, JSONFormatter, TextFormatter
from .levels import Level, parse_level
from .logger import ROTATING_TIMESTAMP_FORMAT, Logger
from .retention import ArchiveFile, DeleteFile, KeepFile, RetentionPolicy
from .sinks import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_RETAINED


class LogFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class RetentionKind(str, Enum):
    DELETE = "delete"
    ARCHIVE = "archive"
    KEEP = "keep"


class LoggingSettings(BaseSettings):
    """Construction options for a rotating logger."""

    model_config = SettingsConfigDict(
        env_prefix="ROTALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    folder: str = Field(default="logs", description="Log folder, relative to the executable's directory")
    name: str = Field(default="app.log", description="Logical file name, optionally with an extension")
    level: Level = Field(default=Level.INFO, description="Threshold (name, or integer wrapped into range)")
    max_retained: int = Field(default=DEFAULT_MAX_RETAINED, ge=1, description="Number of files kept")
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        ge=0,
        description="Rotate when a file would exceed this size in bytes (0 disables)",
    )
    format: LogFormat = Field(default=LogFormat.TEXT, description="Output format")
    retention: RetentionKind = Field(default=RetentionKind.DELETE, description="What to do with evicted files")
    archive_dir: str | None = Field(default=None, description="Destination for the archive retention policy")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            value = int(value)
        return parse_level(value)

    def retention_policy(self) -> RetentionPolicy:
        if self.retention is RetentionKind.KEEP:
            return KeepFile()
        if self.retention is RetentionKind.ARCHIVE:
            if not self.archive_dir:
                raise ValueError("archive_dir is required for the archive retention policy")
            return ArchiveFile(self.archive_dir)
        return DeleteFile()

    def formatter(self) -> Formatter:
        if self.format is LogFormat.JSON:
            return JSONFormatter(timestamp_format=ROTATING_TIMESTAMP_FORMAT)
        return TextFormatter(disable_colors=True, timestamp_format=ROTATING_TIMESTAMP_FORMAT)


def build_logger(settings: LoggingSettings | None = None) -> Logger:
    """Create a rotating logger from settings (read from the environment by default)."""
    settings = settings or LoggingSettings()
    return Logger.rotating(
        settings.folder,
        settings.name,
        settings.level,
        max_retained=settings.max_retained,
        max_file_size=settings.max_file_size,
        retention=settings.retention_policy(),
        formatter=settings.formatter(),
    )
