"""Channel commands: create, update, join, list and config."""

import typing as t
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles
import typer

from ...domain.exceptions import OperationError
from ...infrastructure.logging import get_logger
from ..output import display_yaml
from ..state import CLIState
from .base import (
    BaseCommand,
    peers_option,
    require,
    resolve_peer,
    resolve_peers,
    run_command,
    split_list,
)

logger = get_logger(__name__)

channel_app = typer.Typer(name="channel", help="Manage channels", no_args_is_help=True)


async def read_envelope(path: str) -> bytes:
    """Read a channel transaction envelope from disk."""
    try:
        async with aiofiles.open(Path(path), "rb") as f:
            return await f.read()
    except OSError as e:
        raise OperationError(f"failed to read channel tx: {e}") from e


@dataclass
class CreateCommand:
    """Create a channel from a channel creation transaction."""

    base: BaseCommand
    channel_id: str = ""
    tx_path: str = ""

    def validate(self) -> None:
        require(self.channel_id, "channel name not specified")
        require(self.tx_path, "channel tx not specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        envelope = await read_envelope(self.tx_path)

        try:
            tx_id = await client.save_channel(self.channel_id, envelope, context.orderer)
        except Exception as e:
            raise OperationError(f"failed to create channel: {e}") from e

        logger.debug(f"Channel '{self.channel_id}' created in transaction {tx_id}")
        self.base.echo(f"successfully created channel '{self.channel_id}'")


@dataclass
class UpdateCommand:
    """Update a channel with a configuration update transaction."""

    base: BaseCommand
    channel_id: str = ""
    tx_path: str = ""

    def validate(self) -> None:
        require(self.channel_id, "channel name not specified")
        require(self.tx_path, "channel tx not specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        envelope = await read_envelope(self.tx_path)

        try:
            tx_id = await client.save_channel(self.channel_id, envelope, context.orderer)
        except Exception as e:
            raise OperationError(f"failed to update channel: {e}") from e

        logger.debug(f"Channel '{self.channel_id}' updated in transaction {tx_id}")
        self.base.echo(f"successfully updated channel '{self.channel_id}'")


@dataclass
class JoinCommand:
    """Join peers to a channel."""

    base: BaseCommand
    channel_id: str = ""
    peers: list[str] = field(default_factory=list)

    def validate(self) -> None:
        require(self.channel_id, "channel name not specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        peers = resolve_peers(self.peers, context)

        try:
            await client.join_channel(self.channel_id, peers, orderer=context.orderer)
        except Exception as e:
            raise OperationError(f"failed to join channel: {e}") from e

        self.base.echo(f"successfully joined channel '{self.channel_id}'")


@dataclass
class ListCommand:
    """List the channels a peer has joined."""

    base: BaseCommand
    peer: str = ""

    def validate(self) -> None:
        pass

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        peer = resolve_peer(self.peer, context)

        try:
            channels = await client.query_channels(peer)
        except Exception as e:
            raise OperationError(f"failed to query channels: {e}") from e

        for channel_id in channels:
            self.base.echo(channel_id)


@dataclass
class ConfigCommand:
    """Show a channel's configuration.

    Defaults to the current context's channel when no name is given.
    """

    base: BaseCommand
    channel_id: str = ""

    def validate(self) -> None:
        pass

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        channel_id = self.channel_id or context.channel
        require(channel_id, "channel name not specified")

        try:
            config = await client.query_config_block(channel_id, context.peers)
        except Exception as e:
            raise OperationError(f"failed to query channel config: {e}") from e

        display_yaml(config, file=self.base.state.out)


@channel_app.command("create", options_metavar="")
def create(
    ctx: typer.Context,
    channel_id: str = typer.Argument("", metavar="<channel-name>", show_default=False),
    tx_path: str = typer.Argument("", metavar="<channel-tx>", show_default=False),
) -> None:
    """Create a new channel."""
    state: CLIState = ctx.obj
    run_command(CreateCommand(BaseCommand(state), channel_id=channel_id, tx_path=tx_path))


@channel_app.command("update", options_metavar="")
def update(
    ctx: typer.Context,
    channel_id: str = typer.Argument("", metavar="<channel-name>", show_default=False),
    tx_path: str = typer.Argument("", metavar="<channel-tx>", show_default=False),
) -> None:
    """Update a channel."""
    state: CLIState = ctx.obj
    run_command(UpdateCommand(BaseCommand(state), channel_id=channel_id, tx_path=tx_path))


@channel_app.command("join", options_metavar="")
def join(
    ctx: typer.Context,
    channel_id: str = typer.Argument("", metavar="<channel-name>", show_default=False),
    peers: t.Optional[t.List[str]] = peers_option(),
) -> None:
    """Join peers to a channel.

    Joins the given peers, or the current context's peers.
    """
    state: CLIState = ctx.obj
    run_command(
        JoinCommand(BaseCommand(state), channel_id=channel_id, peers=split_list(peers))
    )


@channel_app.command("list")
def list_channels(
    ctx: typer.Context,
    peer: str = typer.Option("", "--peer", help="Peer to query"),
) -> None:
    """List the channels a peer has joined."""
    state: CLIState = ctx.obj
    run_command(ListCommand(BaseCommand(state), peer=peer))


@channel_app.command("config", options_metavar="")
def config(
    ctx: typer.Context,
    channel_id: str = typer.Argument("", metavar="[<channel-name>]", show_default=False),
) -> None:
    """Show a channel's configuration."""
    state: CLIState = ctx.obj
    run_command(ConfigCommand(BaseCommand(state), channel_id=channel_id))
