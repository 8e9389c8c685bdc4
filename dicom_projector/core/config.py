"""Configuration Management - Projection Settings.

Defaults for the command line and for callers that want projection
options driven by the environment. Values load from environment
variables prefixed ``DICOM_PROJECTOR_`` and from a ``.env`` file.
"""

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_MAX_DEPTH, MIN_MAX_DEPTH
from .types import NameStyle


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Read from DICOM_PROJECTOR_LOG_LEVEL, DICOM_PROJECTOR_LOG_FORMAT and
    DICOM_PROJECTOR_LOG_FILE.
    """

    model_config = SettingsConfigDict(
        env_prefix="DICOM_PROJECTOR_", case_sensitive=False, extra="ignore"
    )

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")
    log_file: Path | None = Field(default=None, description="Optional log file")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept level names in any case."""
        if isinstance(v, str):
            v = v.upper()
        return v

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Only json and console renderers exist."""
        v = v.lower()
        if v not in {"json", "console"}:
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


class ProjectionSettings(BaseSettings):
    """Projection settings.

    Usage:
        from dicom_projector.core.config import get_settings
        settings = get_settings()
    """

    model_config = SettingsConfigDict(
        env_prefix="DICOM_PROJECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    omit_binary_values: bool = Field(
        default=False, description="Leave OB/OW values out of documents"
    )
    add_names: bool = Field(default=False, description="Annotate entries with tag names")
    name_style: NameStyle = Field(
        default=NameStyle.KEYWORD, description="Tag name style: keyword or description"
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=MIN_MAX_DEPTH,
        le=1000,
        description="Maximum sequence nesting depth",
    )
    json_indent: int | None = Field(
        default=None, ge=0, le=16, description="JSON indent, compact when unset"
    )
    use_default_filter: bool = Field(
        default=False, description="Restrict output to the header-summary tags"
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get_summary(self) -> str:
        """Get configuration summary."""
        return f"""
DICOM Projector Configuration
=============================
Omit Binary Values: {self.omit_binary_values}
Add Names: {self.add_names} ({self.name_style.value})
Max Depth: {self.max_depth}
JSON Indent: {self.json_indent}
Default Filter: {self.use_default_filter}

Logging:
  - Level: {self.logging.log_level.value}
  - Format: {self.logging.log_format}
  - File: {self.logging.log_file}
"""


# Global settings instance (singleton pattern)
_settings: ProjectionSettings | None = None


def get_settings(force_reload: bool = False) -> ProjectionSettings:
    """Get projection settings (singleton).

    Args:
        force_reload: Force reload settings from environment

    Returns:
        ProjectionSettings instance

    """
    global _settings
    if _settings is None or force_reload:
        _settings = ProjectionSettings()
    return _settings
