"""Lifecycle shared by every network command.

A network command goes through three phases, in order, exactly once:

    complete()  build the client factory, derive the capability client and
                start the shutdown coordinator
    validate()  check arguments, no I/O, first violated rule wins
    run()       perform one network operation and print the outcome

Leaf commands hold a BaseCommand (composition) and provide validate()/run();
execute() drives the phases and always releases the session afterwards.
"""

import asyncio
import contextlib
import typing as t
from enum import Enum

import typer

from ...config.settings import ShutdownOutput
from ...domain.exceptions import (
    CommandStateError,
    FabricCLIError,
    InvalidArgumentError,
)
from ...environment.config import Context
from ...fabric.base import BaseFactory, BaseResourceManagement
from ...infrastructure.logging import get_logger
from ..output import display_error
from ..shutdown import Notifier, ShutdownCoordinator
from ..state import CLIState

if t.TYPE_CHECKING:
    import loguru


class CommandPhase(Enum):
    """Lifecycle state of a command instance."""

    CREATED = "created"
    COMPLETED = "completed"
    VALIDATED = "validated"
    RAN = "ran"
    FAILED = "failed"


class BaseCommand:
    """Settings, client factory and capability clients for one command.

    The factory may be injected (tests pass doubles); otherwise complete()
    asks the CLI state for one bound to the loaded configuration.
    """

    def __init__(
        self,
        state: CLIState,
        factory: BaseFactory | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        self.state = state
        self.factory = factory
        self.resource_management: BaseResourceManagement | None = None
        self.coordinator: ShutdownCoordinator | None = None
        self.phase = CommandPhase.CREATED
        self._logger = logger

    async def complete(self) -> None:
        """Initialise all clients needed for run().

        Raises:
            ConfigurationError: If the current context cannot be resolved
            ClientError: If the session cannot be opened
        """
        if self.factory is None:
            self.factory = self.state.create_factory()

        self.coordinator = ShutdownCoordinator(
            self.factory, notify=self._shutdown_notifier(), logger=self._logger
        )
        self.resource_management = await self.factory.resource_management()
        self.coordinator.start()

    async def close(self) -> None:
        """Stop the shutdown watcher and release the session once."""
        if self.coordinator is not None:
            await self.coordinator.stop()

    def current_context(self) -> Context:
        """Resolve the current context from the loaded configuration.

        Raises:
            ConfigNotLoadedError: If no configuration is loaded
            CurrentContextNotSetError: If no context is selected
            ContextNotFoundError: If the selected context is not configured
        """
        return self.state.require_config().get_current_context()

    def client(self) -> BaseResourceManagement:
        """The resource management client resolved by complete()."""
        if self.resource_management is None:
            raise CommandStateError("command clients have not been initialised")
        return self.resource_management

    def echo(self, message: str) -> None:
        self.state.echo(message)

    def _shutdown_notifier(self) -> Notifier:
        if self.state.settings.shutdown_output == ShutdownOutput.STREAM:
            return self.state.echo_err
        return self._logger.info


class Command(t.Protocol):
    """A leaf network command."""

    base: BaseCommand

    def validate(self) -> None:
        ...

    async def run(self) -> None:
        ...


async def execute(command: Command) -> None:
    """Run a command's complete, validate and run phases.

    Each phase aborts the remaining ones on failure. The session is released
    afterwards whether the command succeeded or not.

    Raises:
        CommandStateError: If the command instance was already executed
        FabricCLIError: Whatever the failing phase raised
    """
    base = command.base
    if base.phase != CommandPhase.CREATED:
        raise CommandStateError("command has already been executed")

    try:
        await base.complete()
        base.phase = CommandPhase.COMPLETED
        command.validate()
        base.phase = CommandPhase.VALIDATED
        await command.run()
        base.phase = CommandPhase.RAN
    except BaseException:
        base.phase = CommandPhase.FAILED
        raise
    finally:
        await base.close()


def run_command(command: Command) -> None:
    """Execute a command from a typer callback.

    Raises:
        typer.Exit: With code 1 after printing the error, if the command fails
    """
    with exit_on_error():
        asyncio.run(execute(command))


@contextlib.contextmanager
def exit_on_error() -> t.Iterator[None]:
    """Turn FabricCLIError into an error line and exit code 1."""
    try:
        yield
    except FabricCLIError as e:
        display_error(str(e))
        raise typer.Exit(code=1)


# Argument helpers shared by leaf commands


def split_list(values: t.Sequence[str] | None) -> list[str]:
    """Flatten repeated and comma-separated option values."""
    if not values:
        return []
    return [item.strip() for value in values for item in value.split(",") if item.strip()]


def require(value: str | t.Sequence[str], message: str) -> None:
    """Raise InvalidArgumentError with message if value is empty."""
    if not value:
        raise InvalidArgumentError(message)


def parse_sequence(text: str) -> int:
    """Parse and check a chaincode definition sequence number.

    Raises:
        InvalidArgumentError: If text is empty, not an integer, or not > 0
    """
    require(text, "sequence not specified")
    try:
        sequence = int(text)
    except ValueError as e:
        raise InvalidArgumentError(f"invalid sequence: {e}") from e
    if sequence <= 0:
        raise InvalidArgumentError("sequence must be greater than 0")
    return sequence


def resolve_peer(peer: str | None, context: Context) -> str:
    """The peer to query: the given one, else the context's first peer."""
    if peer:
        return peer
    if context.peers:
        return context.peers[0]
    raise InvalidArgumentError("at least one peer must be specified")


def resolve_peers(peers: t.Sequence[str], context: Context) -> list[str]:
    """The peers to target: the given ones, else all of the context's."""
    targets = list(peers or context.peers)
    require(targets, "at least one peer must be specified")
    return targets


def peers_option() -> t.Any:
    """Typer option for a repeatable, comma-separated list of peers."""
    return typer.Option(
        None, "--peers", "-p", help="Target peers (repeat or comma-separate)"
    )
