"""Output formatting for CLI commands."""

from .console import display_error, display_yaml

__all__ = ["display_error", "display_yaml"]
