"""CLI state container."""

import typing as t

import typer

from ..config.settings import Settings
from ..domain.exceptions import ConfigNotLoadedError
from ..environment.config import Config
from ..environment.store import ConfigStore
from ..fabric.base import BaseFactory
from ..fabric.factory import NetworkFactory

FactoryProvider = t.Callable[[Config | None], BaseFactory]


class CLIState:
    """Application state container for CLI commands.

    Holds the process Settings, the loaded network configuration and the
    output streams commands write to. The factory provider is the injection
    point for the client factory: tests swap it for one returning doubles.
    """

    def __init__(
        self,
        settings: Settings,
        config: Config | None = None,
        store: ConfigStore | None = None,
        factory_provider: FactoryProvider | None = None,
        out: t.TextIO | None = None,
        err: t.TextIO | None = None,
    ) -> None:
        self.settings = settings
        self.config = config
        self.store = store
        self.out = out
        self.err = err
        self._factory_provider = factory_provider or NetworkFactory

    def create_factory(self) -> BaseFactory:
        """Create a client factory bound to the loaded configuration."""
        return self._factory_provider(self.config)

    def require_config(self) -> Config:
        """The loaded configuration.

        Raises:
            ConfigNotLoadedError: If no configuration was loaded
        """
        if self.config is None:
            raise ConfigNotLoadedError("configuration is not loaded")
        return self.config

    def save_config(self) -> None:
        """Persist the loaded configuration through the store."""
        if self.store is None:
            raise ConfigNotLoadedError("configuration store is not available")
        self.store.save(self.require_config())

    def echo(self, message: str) -> None:
        """Write a line to the command output stream."""
        typer.echo(message, file=self.out)

    def echo_err(self, message: str) -> None:
        """Write a line to the diagnostic stream."""
        typer.echo(message, file=self.err, err=self.err is None)
