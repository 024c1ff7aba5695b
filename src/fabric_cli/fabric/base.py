"""Interfaces for network sessions, capability clients and client factories."""

import typing as t
from abc import ABC, abstractmethod

from ..domain.chaincode import (
    ChaincodeDefinition,
    CommittedChaincode,
    InstallResult,
    InstalledChaincode,
    InstantiateRequest,
)
from ..environment.config import Context, Network


class BaseSession(ABC):
    """A live link to the network, shared by every capability client."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the session. Closing an already closed session is a no-op."""
        pass


class BaseResourceManagement(ABC):
    """Resource management operations: channels and chaincode definitions.

    Implementations are stateless wrappers over a session; they are only
    valid while that session is open.
    """

    @abstractmethod
    async def save_channel(
        self, channel_id: str, envelope: bytes, orderer: str | None = None
    ) -> str:
        """Submit a channel creation or update transaction.

        Returns:
            The transaction ID
        """
        pass

    @abstractmethod
    async def join_channel(
        self, channel_id: str, peers: t.Sequence[str], orderer: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def query_channels(self, peer: str) -> list[str]:
        """List the channels a peer has joined."""
        pass

    @abstractmethod
    async def query_config_block(
        self, channel_id: str, peers: t.Sequence[str]
    ) -> dict[str, t.Any]:
        pass

    @abstractmethod
    async def lifecycle_install_cc(
        self, label: str, package: bytes, peers: t.Sequence[str]
    ) -> list[InstallResult]:
        pass

    @abstractmethod
    async def lifecycle_query_installed_cc(self, peer: str) -> list[InstalledChaincode]:
        pass

    @abstractmethod
    async def lifecycle_approve_cc(
        self,
        channel_id: str,
        definition: ChaincodeDefinition,
        peers: t.Sequence[str],
        orderer: str | None = None,
    ) -> str:
        pass

    @abstractmethod
    async def lifecycle_commit_cc(
        self,
        channel_id: str,
        definition: ChaincodeDefinition,
        peers: t.Sequence[str],
        orderer: str | None = None,
    ) -> str:
        pass

    @abstractmethod
    async def lifecycle_query_committed_cc(
        self, channel_id: str, name: str | None, peers: t.Sequence[str]
    ) -> list[CommittedChaincode]:
        pass

    @abstractmethod
    async def instantiate_cc(
        self,
        channel_id: str,
        request: InstantiateRequest,
        peers: t.Sequence[str],
        orderer: str | None = None,
    ) -> str:
        pass


class BaseFactory(ABC):
    """Single construction point for the session and its capability clients."""

    @property
    @abstractmethod
    def has_session(self) -> bool:
        """True once a session has been created and cached."""
        pass

    @abstractmethod
    async def sdk(self) -> BaseSession:
        """Return the cached session, creating it on first use."""
        pass

    @abstractmethod
    async def resource_management(self) -> BaseResourceManagement:
        """Derive a resource management client from the cached session."""
        pass


class SessionConnector(t.Protocol):
    """Callable that opens a session for a network and context.

    The SDK.connect classmethod is the default connector; tests can pass any
    coroutine function with this signature.
    """

    async def __call__(self, network: Network, context: Context) -> BaseSession:
        ...
