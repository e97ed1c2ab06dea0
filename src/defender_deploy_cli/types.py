"""Data types and dataclasses for defender-deploy-cli."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Command(Enum):
    """Top-level commands. Values are the tokens typed on the command line."""

    DEPLOY = "deploy"
    PROPOSE_UPGRADE = "proposeUpgrade"
    GET_DEPLOY_APPROVAL_PROCESS = "getDeployApprovalProcess"
    GET_UPGRADE_APPROVAL_PROCESS = "getUpgradeApprovalProcess"


class ApprovalProcessKind(Enum):
    """Kind of action an approval process governs. Values appear in API paths."""

    DEPLOY = "deploy"
    UPGRADE = "upgrade"


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset fields so they are absent from the JSON body."""
    return {key: value for key, value in payload.items() if value is not None}


# Validated options, one record per command


@dataclass(frozen=True)
class DeployOptions:
    """Options accepted by the deploy command."""

    contract_name: str
    contract_path: str
    network: str
    artifact_file: str
    verify_source_code: bool = True
    license_type: Optional[str] = None
    constructor_bytecode: Optional[str] = None
    relayer_id: Optional[str] = None
    salt: Optional[str] = None
    create_factory_address: Optional[str] = None


@dataclass(frozen=True)
class UpgradeOptions:
    """Options accepted by the proposeUpgrade command."""

    proxy_address: str
    new_implementation_address: str
    network: str
    proxy_admin_address: Optional[str] = None
    abi_file: Optional[str] = None
    approval_process_id: Optional[str] = None


@dataclass(frozen=True)
class ApprovalProcessOptions:
    """Options accepted by the approval process commands."""

    network: str


# Requests sent to the deployment service


@dataclass(frozen=True)
class DeployRequest:
    """Contract deployment request."""

    # Required fields
    contract_name: str
    contract_path: str
    network: str
    artifact_payload: str  # Compact JSON of the compiler input and output
    verify_source_code: bool

    # Optional fields
    license_type: Optional[str] = None
    constructor_bytecode: Optional[str] = None
    relayer_id: Optional[str] = None
    salt: Optional[str] = None
    create_factory_address: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "contractName": self.contract_name,
                "contractPath": self.contract_path,
                "network": self.network,
                "artifactPayload": self.artifact_payload,
                "verifySourceCode": self.verify_source_code,
                "licenseType": self.license_type,
                "constructorBytecode": self.constructor_bytecode,
                "relayerId": self.relayer_id,
                "salt": self.salt,
                "createFactoryAddress": self.create_factory_address,
            }
        )


@dataclass(frozen=True)
class UpgradeRequest:
    """Upgrade proposal request."""

    proxy_address: str
    new_implementation_address: str
    network: str
    proxy_admin_address: Optional[str] = None
    new_implementation_abi: Optional[str] = None  # Compact JSON of the ABI
    approval_process_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "proxyAddress": self.proxy_address,
                "newImplementationAddress": self.new_implementation_address,
                "network": self.network,
                "proxyAdminAddress": self.proxy_admin_address,
                "newImplementationABI": self.new_implementation_abi,
                "approvalProcessId": self.approval_process_id,
            }
        )


@dataclass(frozen=True)
class ApprovalProcessRequest:
    """Approval process lookup for a network."""

    network: str
    kind: ApprovalProcessKind


# Responses returned by the deployment service


@dataclass(frozen=True)
class DeploymentResponse:
    address: str
    deployment_id: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class UpgradeResponse:
    proposal_id: str
    external_url: Optional[str] = None


@dataclass(frozen=True)
class ApprovalProcessResponse:
    approval_process_id: str
    name: Optional[str] = None
    via: Optional[str] = None
    via_type: Optional[str] = None
