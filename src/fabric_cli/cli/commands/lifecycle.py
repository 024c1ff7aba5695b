"""Chaincode lifecycle commands: install, approve, commit and queries."""

import typing as t
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles
import typer

from ...domain.chaincode import ChaincodeDefinition
from ...domain.exceptions import OperationError
from ...infrastructure.logging import get_logger
from ..state import CLIState
from .base import (
    BaseCommand,
    parse_sequence,
    peers_option,
    require,
    resolve_peer,
    resolve_peers,
    run_command,
    split_list,
)

logger = get_logger(__name__)

lifecycle_app = typer.Typer(
    name="lifecycle",
    help="Manage chaincode definitions with the chaincode lifecycle",
    no_args_is_help=True,
)


@dataclass
class InstallCommand:
    """Install a chaincode package on peers."""

    base: BaseCommand
    label: str = ""
    path: str = ""
    peers: list[str] = field(default_factory=list)

    def validate(self) -> None:
        require(self.label, "chaincode label not specified")
        require(self.path, "chaincode path not specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        peers = resolve_peers(self.peers, context)

        try:
            async with aiofiles.open(Path(self.path), "rb") as f:
                package = await f.read()
        except OSError as e:
            raise OperationError(f"failed to read chaincode package: {e}") from e

        try:
            results = await client.lifecycle_install_cc(self.label, package, peers)
        except Exception as e:
            raise OperationError(f"failed to install chaincode: {e}") from e

        for result in results:
            logger.info(f"Installed on {result.target}: package ID {result.package_id}")
        self.base.echo(f"successfully installed chaincode '{self.label}'")


@dataclass
class ApproveCommand:
    """Approve a chaincode definition for the current organization."""

    base: BaseCommand
    name: str = ""
    version: str = ""
    package_id: str = ""
    sequence: str = ""
    peers: list[str] = field(default_factory=list)
    policy: str = ""
    init_required: bool = False

    def validate(self) -> None:
        require(self.name, "chaincode name not specified")
        require(self.version, "chaincode version not specified")
        require(self.package_id, "package ID not specified")
        parse_sequence(self.sequence)
        require(self.peers, "at least one peer must be specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()

        definition = ChaincodeDefinition(
            name=self.name,
            version=self.version,
            sequence=parse_sequence(self.sequence),
            package_id=self.package_id,
            signature_policy=self.policy or None,
            init_required=self.init_required,
        )
        try:
            await client.lifecycle_approve_cc(
                context.channel, definition, self.peers, orderer=context.orderer
            )
        except Exception as e:
            raise OperationError(f"failed to approve chaincode: {e}") from e

        self.base.echo(f"successfully approved chaincode '{self.name}'")


@dataclass
class CommitCommand:
    """Commit an approved chaincode definition to the channel."""

    base: BaseCommand
    name: str = ""
    version: str = ""
    sequence: str = ""
    peers: list[str] = field(default_factory=list)
    policy: str = ""
    init_required: bool = False

    def validate(self) -> None:
        require(self.name, "chaincode name not specified")
        require(self.version, "chaincode version not specified")
        parse_sequence(self.sequence)
        require(self.peers, "at least one peer must be specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()

        definition = ChaincodeDefinition(
            name=self.name,
            version=self.version,
            sequence=parse_sequence(self.sequence),
            signature_policy=self.policy or None,
            init_required=self.init_required,
        )
        try:
            await client.lifecycle_commit_cc(
                context.channel, definition, self.peers, orderer=context.orderer
            )
        except Exception as e:
            raise OperationError(f"failed to commit chaincode: {e}") from e

        self.base.echo(f"successfully committed chaincode '{self.name}'")


@dataclass
class QueryInstalledCommand:
    """List chaincode packages installed on a peer."""

    base: BaseCommand
    peer: str = ""

    def validate(self) -> None:
        pass

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        peer = resolve_peer(self.peer, context)

        try:
            installed = await client.lifecycle_query_installed_cc(peer)
        except Exception as e:
            raise OperationError(f"failed to query installed chaincodes: {e}") from e

        for chaincode in installed:
            self.base.echo(f"package ID: {chaincode.package_id}, label: {chaincode.label}")


@dataclass
class QueryCommittedCommand:
    """List chaincode definitions committed on the current channel."""

    base: BaseCommand
    name: str = ""
    peers: list[str] = field(default_factory=list)

    def validate(self) -> None:
        pass

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()
        peers = resolve_peers(self.peers, context)

        try:
            committed = await client.lifecycle_query_committed_cc(
                context.channel, self.name or None, peers
            )
        except Exception as e:
            raise OperationError(f"failed to query committed chaincodes: {e}") from e

        for definition in committed:
            self.base.echo(
                f"name: {definition.name}, version: {definition.version}, "
                f"sequence: {definition.sequence}"
            )


@lifecycle_app.command("install", options_metavar="")
def install(
    ctx: typer.Context,
    label: str = typer.Argument("", metavar="<chaincode-label>", show_default=False),
    path: str = typer.Argument("", metavar="<chaincode-path>", show_default=False),
    peers: t.Optional[t.List[str]] = peers_option(),
) -> None:
    """Install a chaincode package.

    Installs on the given peers, or on the current context's peers.
    """
    state: CLIState = ctx.obj
    run_command(
        InstallCommand(BaseCommand(state), label=label, path=path, peers=split_list(peers))
    )


@lifecycle_app.command("approve", options_metavar="")
def approve(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<chaincode-name>", show_default=False),
    version: str = typer.Argument("", metavar="<version>", show_default=False),
    package_id: str = typer.Argument("", metavar="<package-id>", show_default=False),
    sequence: str = typer.Argument("", metavar="<sequence>", show_default=False),
    peers: t.Optional[t.List[str]] = peers_option(),
    policy: str = typer.Option("", "--policy", help="Signature policy"),
    init_required: bool = typer.Option(
        False, "--init-required", help="Require Init before invoking the chaincode"
    ),
) -> None:
    """Approve a chaincode definition for your organization."""
    state: CLIState = ctx.obj
    run_command(
        ApproveCommand(
            BaseCommand(state),
            name=name,
            version=version,
            package_id=package_id,
            sequence=sequence,
            peers=split_list(peers),
            policy=policy,
            init_required=init_required,
        )
    )


@lifecycle_app.command("commit", options_metavar="")
def commit(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<chaincode-name>", show_default=False),
    version: str = typer.Argument("", metavar="<version>", show_default=False),
    sequence: str = typer.Argument("", metavar="<sequence>", show_default=False),
    peers: t.Optional[t.List[str]] = peers_option(),
    policy: str = typer.Option("", "--policy", help="Signature policy"),
    init_required: bool = typer.Option(
        False, "--init-required", help="Require Init before invoking the chaincode"
    ),
) -> None:
    """Commit a chaincode definition to the current channel."""
    state: CLIState = ctx.obj
    run_command(
        CommitCommand(
            BaseCommand(state),
            name=name,
            version=version,
            sequence=sequence,
            peers=split_list(peers),
            policy=policy,
            init_required=init_required,
        )
    )


@lifecycle_app.command("queryinstalled")
def query_installed(
    ctx: typer.Context,
    peer: str = typer.Option("", "--peer", help="Peer to query"),
) -> None:
    """List chaincode packages installed on a peer."""
    state: CLIState = ctx.obj
    run_command(QueryInstalledCommand(BaseCommand(state), peer=peer))


@lifecycle_app.command("querycommitted", options_metavar="")
def query_committed(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="[<chaincode-name>]", show_default=False),
    peers: t.Optional[t.List[str]] = peers_option(),
) -> None:
    """List chaincode definitions committed on the current channel."""
    state: CLIState = ctx.obj
    run_command(QueryCommittedCommand(BaseCommand(state), name=name, peers=split_list(peers)))
