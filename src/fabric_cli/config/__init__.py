"""Application settings."""

from .settings import (
    Environment,
    LogLevel,
    Settings,
    ShutdownOutput,
    build_settings,
    default_home,
)

__all__ = [
    "Environment",
    "LogLevel",
    "Settings",
    "ShutdownOutput",
    "build_settings",
    "default_home",
]
