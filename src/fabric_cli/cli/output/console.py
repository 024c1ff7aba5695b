"""Console display helpers for CLI commands."""

import typing as t

import typer
import yaml


def display_error(message: str) -> None:
    """Display a one-line error on stderr.

    Args:
        message: Error message, shown without traceback
    """
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)


def display_yaml(data: t.Any, file: t.TextIO | None = None) -> None:
    """Display structured data as YAML.

    Args:
        data: Plain data (dicts, lists, scalars)
        file: Destination stream, stdout if None
    """
    typer.echo(yaml.safe_dump(data, sort_keys=False).rstrip("\n"), file=file)
