"""Network commands: edit the gateway definitions in the configuration."""

import typing as t
from pathlib import Path

import typer
from pydantic import ValidationError

from ...domain.exceptions import InvalidArgumentError
from ...environment.config import Network
from ..output import display_yaml
from ..state import CLIState
from .base import exit_on_error, require

network_app = typer.Typer(name="network", help="Manage networks", no_args_is_help=True)


@network_app.command("list")
def list_networks(ctx: typer.Context) -> None:
    """List configured networks."""
    state: CLIState = ctx.obj
    with exit_on_error():
        for name, network in sorted(state.require_config().networks.items()):
            state.echo(f"{name}: {network.url}")


@network_app.command("view", options_metavar="")
def view(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<network-name>", show_default=False),
) -> None:
    """Show a network."""
    state: CLIState = ctx.obj
    with exit_on_error():
        require(name, "network name not specified")
        network = state.require_config().get_network(name)
        display_yaml(network.model_dump(mode="json", exclude_none=True), file=state.out)


@network_app.command("set", options_metavar="")
def set_network(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<network-name>", show_default=False),
    url: str = typer.Option("", "--url", help="Gateway URL"),
    tls_ca_cert: t.Optional[Path] = typer.Option(
        None, "--tls-ca-cert", help="CA certificate used to verify the gateway"
    ),
    timeout: t.Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds"
    ),
) -> None:
    """Create or replace a network."""
    state: CLIState = ctx.obj
    with exit_on_error():
        require(name, "network name not specified")
        require(url, "network url not specified")
        try:
            network = Network(url=url, tls_ca_cert=tls_ca_cert, timeout=timeout)
        except ValidationError as e:
            raise InvalidArgumentError(f"invalid network: {e.errors()[0]['msg']}") from e
        state.require_config().set_network(name, network)
        state.save_config()
        state.echo(f"successfully set network '{name}'")


@network_app.command("delete", options_metavar="")
def delete(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<network-name>", show_default=False),
) -> None:
    """Delete a network no context uses."""
    state: CLIState = ctx.obj
    with exit_on_error():
        require(name, "network name not specified")
        state.require_config().delete_network(name)
        state.save_config()
        state.echo(f"successfully deleted network '{name}'")
