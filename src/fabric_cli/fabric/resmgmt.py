"""Resource management client backed by the gateway session."""

import base64
import typing as t
from urllib.parse import quote

from ..domain.chaincode import (
    ChaincodeDefinition,
    CommittedChaincode,
    InstallResult,
    InstalledChaincode,
    InstantiateRequest,
)
from .base import BaseResourceManagement
from .sdk import SDK


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _segment(value: str) -> str:
    return quote(value, safe="")


class ResourceManagementClient(BaseResourceManagement):
    """Channel and chaincode lifecycle operations over a gateway SDK session.

    The client keeps no state of its own; every call goes through the shared
    session, so it stops working once that session is closed.
    """

    def __init__(self, sdk: SDK) -> None:
        self._sdk = sdk

    async def save_channel(
        self, channel_id: str, envelope: bytes, orderer: str | None = None
    ) -> str:
        body = await self._sdk.request(
            "POST",
            f"/channels/{_segment(channel_id)}",
            {"envelope": _encode(envelope), "orderer": orderer},
        )
        return str(body.get("transaction_id", ""))

    async def join_channel(
        self, channel_id: str, peers: t.Sequence[str], orderer: str | None = None
    ) -> None:
        await self._sdk.request(
            "POST",
            f"/channels/{_segment(channel_id)}/join",
            {"peers": list(peers), "orderer": orderer},
        )

    async def query_channels(self, peer: str) -> list[str]:
        body = await self._sdk.request("GET", f"/peers/{_segment(peer)}/channels")
        return [str(channel) for channel in body.get("channels", [])]

    async def query_config_block(
        self, channel_id: str, peers: t.Sequence[str]
    ) -> dict[str, t.Any]:
        body = await self._sdk.request(
            "POST",
            f"/channels/{_segment(channel_id)}/config",
            {"peers": list(peers)},
        )
        return dict(body.get("config", {}))

    async def lifecycle_install_cc(
        self, label: str, package: bytes, peers: t.Sequence[str]
    ) -> list[InstallResult]:
        body = await self._sdk.request(
            "POST",
            "/lifecycle/install",
            {"label": label, "package": _encode(package), "peers": list(peers)},
        )
        return [InstallResult.model_validate(item) for item in body.get("results", [])]

    async def lifecycle_query_installed_cc(self, peer: str) -> list[InstalledChaincode]:
        body = await self._sdk.request(
            "GET", f"/peers/{_segment(peer)}/lifecycle/installed"
        )
        return [
            InstalledChaincode.model_validate(item) for item in body.get("installed", [])
        ]

    async def lifecycle_approve_cc(
        self,
        channel_id: str,
        definition: ChaincodeDefinition,
        peers: t.Sequence[str],
        orderer: str | None = None,
    ) -> str:
        return await self._submit_definition("approve", channel_id, definition, peers, orderer)

    async def lifecycle_commit_cc(
        self,
        channel_id: str,
        definition: ChaincodeDefinition,
        peers: t.Sequence[str],
        orderer: str | None = None,
    ) -> str:
        return await self._submit_definition("commit", channel_id, definition, peers, orderer)

    async def lifecycle_query_committed_cc(
        self, channel_id: str, name: str | None, peers: t.Sequence[str]
    ) -> list[CommittedChaincode]:
        body = await self._sdk.request(
            "POST",
            f"/channels/{_segment(channel_id)}/lifecycle/committed",
            {"name": name, "peers": list(peers)},
        )
        return [
            CommittedChaincode.model_validate(item) for item in body.get("committed", [])
        ]

    async def instantiate_cc(
        self,
        channel_id: str,
        request: InstantiateRequest,
        peers: t.Sequence[str],
        orderer: str | None = None,
    ) -> str:
        body = await self._sdk.request(
            "POST",
            f"/channels/{_segment(channel_id)}/chaincodes",
            {
                "request": request.model_dump(mode="json"),
                "peers": list(peers),
                "orderer": orderer,
            },
        )
        return str(body.get("transaction_id", ""))

    async def _submit_definition(
        self,
        action: str,
        channel_id: str,
        definition: ChaincodeDefinition,
        peers: t.Sequence[str],
        orderer: str | None,
    ) -> str:
        body = await self._sdk.request(
            "POST",
            f"/channels/{_segment(channel_id)}/lifecycle/{action}",
            {
                "definition": definition.model_dump(mode="json"),
                "peers": list(peers),
                "orderer": orderer,
            },
        )
        return str(body.get("transaction_id", ""))
