"""Request construction for defender-deploy-cli.

Builders are pure: artifact files have already been read and the network
already resolved by the time they run.
"""

from typing import Optional

from .types import (
    ApprovalProcessKind,
    ApprovalProcessOptions,
    ApprovalProcessRequest,
    DeployOptions,
    DeployRequest,
    UpgradeOptions,
    UpgradeRequest,
)


def build_deploy_request(options: DeployOptions, artifact_payload: str) -> DeployRequest:
    """
    Build a deployment request.

    Args:
        options: Validated deploy options
        artifact_payload: Compact JSON of the compiler input and output

    Returns:
        DeployRequest with verify_source_code always set explicitly
    """
    return DeployRequest(
        contract_name=options.contract_name,
        contract_path=options.contract_path,
        network=options.network,
        artifact_payload=artifact_payload,
        verify_source_code=options.verify_source_code,
        license_type=options.license_type,
        constructor_bytecode=options.constructor_bytecode,
        relayer_id=options.relayer_id,
        salt=options.salt,
        create_factory_address=options.create_factory_address,
    )


def build_upgrade_request(
    options: UpgradeOptions, new_implementation_abi: Optional[str] = None
) -> UpgradeRequest:
    """
    Build an upgrade proposal request.

    Args:
        options: Validated proposeUpgrade options
        new_implementation_abi: Compact JSON of the new implementation's ABI,
                                or None if no ABI file was given

    Returns:
        UpgradeRequest with unset optional fields left as None
    """
    return UpgradeRequest(
        proxy_address=options.proxy_address,
        new_implementation_address=options.new_implementation_address,
        network=options.network,
        proxy_admin_address=options.proxy_admin_address,
        new_implementation_abi=new_implementation_abi,
        approval_process_id=options.approval_process_id,
    )


def build_approval_process_request(
    options: ApprovalProcessOptions, kind: ApprovalProcessKind
) -> ApprovalProcessRequest:
    """Build an approval process lookup for the given kind of action."""
    return ApprovalProcessRequest(network=options.network, kind=kind)
