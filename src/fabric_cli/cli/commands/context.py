"""Context commands: select and edit the named contexts in the configuration."""

import typing as t

import typer

from ...environment.config import Context
from ..output import display_yaml
from ..state import CLIState
from .base import exit_on_error, peers_option, require, split_list

context_app = typer.Typer(name="context", help="Manage contexts", no_args_is_help=True)


@context_app.command("list")
def list_contexts(ctx: typer.Context) -> None:
    """List contexts, marking the current one with '*'."""
    state: CLIState = ctx.obj
    with exit_on_error():
        config = state.require_config()
        for name in sorted(config.contexts):
            marker = "*" if name == config.current_context else " "
            state.echo(f"{marker} {name}")


@context_app.command("view", options_metavar="")
def view(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="[<context-name>]", show_default=False),
) -> None:
    """Show a context, the current one by default."""
    state: CLIState = ctx.obj
    with exit_on_error():
        config = state.require_config()
        context = config.get_context(name) if name else config.get_current_context()
        display_yaml(context.model_dump(mode="json"), file=state.out)


@context_app.command("use", options_metavar="")
def use(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<context-name>", show_default=False),
) -> None:
    """Switch the current context."""
    state: CLIState = ctx.obj
    with exit_on_error():
        require(name, "context name not specified")
        state.require_config().use_context(name)
        state.save_config()
        state.echo(f"successfully switched to context '{name}'")


@context_app.command("set", options_metavar="")
def set_context(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<context-name>", show_default=False),
    network: t.Optional[str] = typer.Option(None, "--network", help="Network name"),
    organization: t.Optional[str] = typer.Option(
        None, "--organization", help="Organization name"
    ),
    user: t.Optional[str] = typer.Option(None, "--user", help="User name"),
    channel: t.Optional[str] = typer.Option(None, "--channel", help="Channel name"),
    peers: t.Optional[t.List[str]] = peers_option(),
    orderers: t.Optional[t.List[str]] = typer.Option(
        None, "--orderers", help="Orderers (repeat or comma-separate)"
    ),
) -> None:
    """Create or update a context.

    Only the given fields change; an existing context keeps the others.
    """
    state: CLIState = ctx.obj
    with exit_on_error():
        require(name, "context name not specified")
        config = state.require_config()
        existing = config.contexts.get(name, Context())
        updates: dict[str, t.Any] = {
            "network": network,
            "organization": organization,
            "user": user,
            "channel": channel,
            "peers": split_list(peers) if peers is not None else None,
            "orderers": split_list(orderers) if orderers is not None else None,
        }
        context = existing.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )
        config.set_context(name, context)
        state.save_config()
        state.echo(f"successfully set context '{name}'")


@context_app.command("delete", options_metavar="")
def delete(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<context-name>", show_default=False),
) -> None:
    """Delete a context."""
    state: CLIState = ctx.obj
    with exit_on_error():
        require(name, "context name not specified")
        state.require_config().delete_context(name)
        state.save_config()
        state.echo(f"successfully deleted context '{name}'")
