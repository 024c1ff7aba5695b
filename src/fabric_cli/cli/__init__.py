"""Typer command-line interface for the fabric network administration tool."""

from .app import create_cli_app

__all__ = ["create_cli_app", "cli"]


def cli() -> None:
    """Entry point for the ``fabric`` console script."""
    create_cli_app()(prog_name="fabric")
