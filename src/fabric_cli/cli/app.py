"""CLI application factory."""

from pathlib import Path
from typing import Optional

import typer

from ..app import create_app
from ..config.settings import LogLevel, Settings, build_settings
from ..environment.store import ConfigStore
from .commands import (
    chaincode_app,
    channel_app,
    context_app,
    lifecycle_app,
    network_app,
)
from .commands.base import exit_on_error
from .state import CLIState


def create_cli_app(
    settings: Settings | None = None,
    state: CLIState | None = None,
) -> typer.Typer:
    """Create CLI application with optional settings or state override.

    Args:
        settings: Optional Settings override for testing
        state: Optional fully built CLIState for testing; when given, no
            configuration is read from disk

    Returns:
        Configured Typer application with commands registered
    """
    app = typer.Typer(
        name="fabric",
        help="Administer channels and chaincode on a permissioned ledger network",
        no_args_is_help=True,
    )

    @app.callback()
    def setup(
        ctx: typer.Context,
        home: Optional[Path] = typer.Option(
            None,
            "--home",
            help="Configuration directory (default: ~/.fabric)",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose output (DEBUG logging)",
        ),
    ) -> None:
        """Global options available to all commands."""
        if state is not None:
            ctx.obj = state
            return

        if settings is not None:
            resolved_settings = settings
        else:
            resolved_settings = build_settings(
                home=home,
                log_level=LogLevel.DEBUG if verbose else None,
            )
        create_app(resolved_settings)

        store = ConfigStore(resolved_settings.home)
        with exit_on_error():
            config = store.load()

        ctx.obj = CLIState(resolved_settings, config=config, store=store)

    app.add_typer(channel_app, name="channel")
    app.add_typer(lifecycle_app, name="lifecycle")
    app.add_typer(chaincode_app, name="chaincode")
    app.add_typer(context_app, name="context")
    app.add_typer(network_app, name="network")
    return app
