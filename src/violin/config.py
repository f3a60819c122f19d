"""Configuration management for violin using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".violin.json"


class UnknownFieldPolicy(str, Enum):
    """What to do with input fields that have no rule chain."""
    ERROR = "error"
    SKIP = "skip"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class MessagesConfig(BaseModel):
    """Message template configuration section."""
    rules: dict[str, str] = Field(default_factory=dict)
    fields: dict[str, dict[str, str]] = Field(default_factory=dict)

    @field_validator("rules")
    @classmethod
    def validate_rule_templates(cls, v):
        for rule, template in v.items():
            if not template.strip():
                raise ValueError(f"message template for rule '{rule}' must not be empty")
        return v


class ValidationSettings(BaseModel):
    """Validation behavior configuration section."""
    unknown_fields: UnknownFieldPolicy = Field(alias="unknownFields", default=UnknownFieldPolicy.ERROR)

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class ViolinConfig(BaseModel):
    """Complete violin configuration model."""
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ViolinConfig:
    """Load a ViolinConfig from JSON, or the defaults when no file exists.

    Without an explicit path, the nearest .violin.json up from the working
    directory is used.

    Raises:
        ValueError: If the file is not valid JSON or not a valid configuration
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None or not path.exists():
        return create_default_config()

    try:
        config_data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    try:
        return ViolinConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the closest .violin.json in start_dir or one of its parents."""
    start = Path(start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def create_default_config() -> ViolinConfig:
    """Create default configuration: built-in messages, strict field handling."""
    return ViolinConfig()
