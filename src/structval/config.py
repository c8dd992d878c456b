"""Configuration management for structval using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class ValidatorConfig(BaseModel):
    """Complete validator configuration model."""
    tag_name: str = Field(alias="tagName", default="validate")
    skip_marker: str = Field(alias="skipMarker", default="-")
    separator: str = ": "
    nested: bool = True
    max_depth: int | None = Field(alias="maxDepth", default=256)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("tag_name")
    @classmethod
    def validate_tag_name(cls, v):
        if not v.strip():
            raise ValueError("tag_name must not be empty")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v):
        if v is not None and v < 1:
            raise ValueError("max_depth must be >= 1")
        return v

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


def load_config(config_path: str | Path | None = None) -> ValidatorConfig:
    """Load configuration from a JSON file with fallback to defaults.

    Args:
        config_path: Optional path to a JSON configuration file

    Returns:
        ValidatorConfig: Loaded and validated configuration

    Raises:
        ValueError: If the file is not valid JSON or the configuration is invalid
    """
    if config_path is None:
        return ValidatorConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        return ValidatorConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e

    try:
        return ValidatorConfig(**config_data)
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def configure_logging(config: ValidatorConfig) -> None:
    """Apply the configured level to the ``structval`` logger."""
    logging.getLogger("structval").setLevel(_LEVELS[LogLevel(config.logging.level)])
