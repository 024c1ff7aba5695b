"""Legacy chaincode commands, for networks without the chaincode lifecycle."""

import typing as t
from dataclasses import dataclass, field

import typer

from ...domain.chaincode import InstantiateRequest
from ...domain.exceptions import OperationError
from ..state import CLIState
from .base import BaseCommand, peers_option, require, run_command, split_list

chaincode_app = typer.Typer(
    name="chaincode", help="Manage chaincode (legacy)", no_args_is_help=True
)


@dataclass
class InstantiateCommand:
    """Instantiate an installed chaincode on the current channel."""

    base: BaseCommand
    name: str = ""
    version: str = ""
    path: str = ""
    args: list[str] = field(default_factory=list)
    policy: str = ""
    peers: list[str] = field(default_factory=list)

    def validate(self) -> None:
        require(self.name, "chaincode name not specified")
        require(self.version, "chaincode version not specified")
        require(self.path, "chaincode path not specified")
        require(self.peers, "at least one peer must be specified")

    async def run(self) -> None:
        context = self.base.current_context()
        client = self.base.client()

        request = InstantiateRequest(
            name=self.name,
            version=self.version,
            path=self.path,
            args=self.args,
            policy=self.policy or None,
        )
        try:
            await client.instantiate_cc(
                context.channel, request, self.peers, orderer=context.orderer
            )
        except Exception as e:
            raise OperationError(f"failed to instantiate chaincode: {e}") from e

        self.base.echo(f"successfully instantiated chaincode '{self.name}'")


@chaincode_app.command("instantiate", options_metavar="")
def instantiate(
    ctx: typer.Context,
    name: str = typer.Argument("", metavar="<chaincode-name>", show_default=False),
    version: str = typer.Argument("", metavar="<version>", show_default=False),
    path: str = typer.Argument("", metavar="<chaincode-path>", show_default=False),
    peers: t.Optional[t.List[str]] = peers_option(),
    policy: str = typer.Option("", "--policy", help="Endorsement policy"),
    args: t.Optional[t.List[str]] = typer.Option(
        None, "--args", "-a", help="Init arguments (repeatable)"
    ),
) -> None:
    """Instantiate a chaincode on the current channel."""
    state: CLIState = ctx.obj
    run_command(
        InstantiateCommand(
            BaseCommand(state),
            name=name,
            version=version,
            path=path,
            args=list(args or []),
            policy=policy,
            peers=split_list(peers),
        )
    )
