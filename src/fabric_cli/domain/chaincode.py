"""Chaincode lifecycle models exchanged with the resource management client."""

from pydantic import BaseModel, Field


class ChaincodeDefinition(BaseModel):
    """A chaincode definition as approved and committed on a channel."""

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    sequence: int = Field(gt=0)
    package_id: str | None = None
    signature_policy: str | None = None
    init_required: bool = False


class InstallResult(BaseModel):
    """Outcome of installing a chaincode package on one peer."""

    target: str
    package_id: str


class InstalledChaincode(BaseModel):
    """A chaincode package installed on a peer."""

    package_id: str
    label: str


class CommittedChaincode(BaseModel):
    """A chaincode definition committed on a channel."""

    name: str
    version: str
    sequence: int
    approvals: dict[str, bool] = Field(default_factory=dict)


class InstantiateRequest(BaseModel):
    """Legacy (pre-lifecycle) chaincode instantiation request."""

    name: str
    version: str
    path: str
    args: list[str] = Field(default_factory=list)
    policy: str | None = None
