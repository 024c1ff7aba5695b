"""Process-level settings for the fabric CLI."""

import typing as t
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Runtime environment for the application."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Log levels accepted by the logging setup."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ShutdownOutput(str, Enum):
    """Where shutdown coordinator messages are written.

    LOG sends them through the application logger; STREAM writes them to the
    command's diagnostic stream alongside other command output.
    """

    LOG = "log"
    STREAM = "stream"


def default_home() -> Path:
    """Default configuration root, ``~/.fabric``."""
    return Path.home() / ".fabric"


class Settings(BaseSettings):
    """Settings resolved once per process invocation.

    Values come from ``FABRIC_*`` environment variables, falling back to the
    defaults below. CLI flags override both through build_settings().
    """

    model_config = SettingsConfigDict(env_prefix="FABRIC_", frozen=True)

    home: Path = Field(default_factory=default_home)
    environment: Environment = Environment.PRODUCTION
    log_level: LogLevel = LogLevel.INFO
    shutdown_output: ShutdownOutput = ShutdownOutput.LOG


def build_settings(**overrides: t.Any) -> Settings:
    """Build Settings, ignoring overrides that were not provided.

    Args:
        **overrides: Field values, typically CLI flags. None values are
            dropped so environment variables and defaults still apply.

    Returns:
        Resolved Settings instance
    """
    return Settings(**{key: value for key, value in overrides.items() if value is not None})
