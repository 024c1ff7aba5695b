"""Network configuration: named networks, contexts and the current context."""

from pathlib import Path

from pydantic import BaseModel, Field

from ..domain.exceptions import (
    ConfigurationError,
    ContextNotFoundError,
    CurrentContextNotSetError,
    NetworkNotFoundError,
)


class Network(BaseModel):
    """Connection parameters for a network gateway."""

    url: str = Field(min_length=1)
    tls_ca_cert: Path | None = None
    timeout: float | None = Field(default=None, gt=0)


class Context(BaseModel):
    """A named bundle of network, identity and target references."""

    network: str = ""
    organization: str = ""
    user: str = ""
    channel: str = ""
    orderers: list[str] = Field(default_factory=list)
    peers: list[str] = Field(default_factory=list)

    @property
    def orderer(self) -> str | None:
        """Orderer used for transactions, the first one configured."""
        return self.orderers[0] if self.orderers else None


class Config(BaseModel):
    """Networks and contexts known to the CLI, plus the selected context.

    ``current_context`` is only checked when it is used: a hand-edited file
    may name a missing context, and commands must fail on that explicitly
    rather than at load time.
    """

    networks: dict[str, Network] = Field(default_factory=dict)
    contexts: dict[str, Context] = Field(default_factory=dict)
    current_context: str = ""

    def get_current_context(self) -> Context:
        """Resolve the current context.

        Raises:
            CurrentContextNotSetError: If no context is selected
            ContextNotFoundError: If the selected name is not configured
        """
        if not self.current_context:
            raise CurrentContextNotSetError("current context is not set")
        return self.get_context(self.current_context)

    def get_context(self, name: str) -> Context:
        context = self.contexts.get(name)
        if context is None:
            raise ContextNotFoundError(f"context '{name}' does not exist")
        return context

    def get_network(self, name: str) -> Network:
        if not name:
            raise NetworkNotFoundError("network is not set for the current context")
        network = self.networks.get(name)
        if network is None:
            raise NetworkNotFoundError(f"network '{name}' does not exist")
        return network

    def use_context(self, name: str) -> None:
        """Select an existing context as current."""
        self.get_context(name)
        self.current_context = name

    def set_context(self, name: str, context: Context) -> None:
        self.contexts[name] = context

    def delete_context(self, name: str) -> None:
        """Remove a context, clearing the selection if it was current."""
        self.get_context(name)
        del self.contexts[name]
        if self.current_context == name:
            self.current_context = ""

    def set_network(self, name: str, network: Network) -> None:
        self.networks[name] = network

    def delete_network(self, name: str) -> None:
        """Remove a network that no context references.

        Raises:
            NetworkNotFoundError: If the network is not configured
            ConfigurationError: If a context still uses the network
        """
        self.get_network(name)
        users = sorted(ctx for ctx, context in self.contexts.items() if context.network == name)
        if users:
            raise ConfigurationError(
                f"network '{name}' is used by context(s): {', '.join(users)}"
            )
        del self.networks[name]
