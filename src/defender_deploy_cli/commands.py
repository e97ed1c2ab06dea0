"""Command implementations for defender-deploy-cli.

Each command parses its own options, validates them against a closed
schema, resolves the network, and only then creates the client and calls
the deployment service.
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence

import click

from .artifacts import load_abi, load_build_info
from .builders import build_approval_process_request, build_deploy_request, build_upgrade_request
from .client import DeployClient, get_deploy_client
from .config import load_credentials
from .constants import CLI_NAME
from .networks import NetworkResolver
from .options import OptionKind, OptionSchema, OptionSpec, parse_args
from .types import (
    ApprovalProcessKind,
    ApprovalProcessOptions,
    ApprovalProcessResponse,
    Command,
    DeployOptions,
    UpgradeOptions,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], DeployClient]


def default_client_factory() -> DeployClient:
    """Check credentials and create the HTTP client."""
    return get_deploy_client(load_credentials())


def _show_help(usage: str, details: str) -> None:
    click.echo(usage)
    click.echo(details)


def _parse(
    schema: OptionSchema, args: Sequence[str], usage: str, details: str
) -> Optional[Dict[str, Any]]:
    """Return validated option values, or None after printing help."""
    parsed = parse_args(args, schema)
    if parsed.help_requested:
        _show_help(usage, details)
        return None
    return schema.apply(parsed)


# deploy

DEPLOY_SCHEMA = OptionSchema(
    command=Command.DEPLOY.value,
    options=(
        OptionSpec("contractName", required=True),
        OptionSpec("contractPath", required=True),
        OptionSpec("chainId", required=True),
        OptionSpec("artifactFile", required=True),
        OptionSpec("licenseType"),
        OptionSpec("constructorBytecode"),
        OptionSpec("verifySourceCode", kind=OptionKind.BOOLEAN, default=True),
        OptionSpec("relayerId"),
        OptionSpec("salt"),
        OptionSpec("createFactoryAddress"),
    ),
)

DEPLOY_USAGE = (
    f"Usage: {CLI_NAME} deploy --contractName <CONTRACT_NAME> --contractPath <CONTRACT_PATH> "
    "--chainId <CHAIN_ID> --artifactFile <BUILD_INFO_FILE_PATH> "
    "[--constructorBytecode <CONSTRUCTOR_ARGS>] [--licenseType <LICENSE>] "
    "[--verifySourceCode <true|false>] [--relayerId <RELAYER_ID>] [--salt <SALT>] "
    "[--createFactoryAddress <CREATE_FACTORY_ADDRESS>]"
)
DEPLOY_DETAILS = """
Deploys a contract using OpenZeppelin Defender.

Required options:
  --contractName <CONTRACT_NAME>  Name of the contract to deploy.
  --contractPath <CONTRACT_PATH>  Path to the contract file.
  --chainId <CHAIN_ID>            Chain ID of the network to deploy to.
  --artifactFile <BUILD_INFO_FILE_PATH>  Path to the build info file containing Solidity compiler input and output for the contract.

Additional options:
  --constructorBytecode <CONSTRUCTOR_BYTECODE>  0x-prefixed ABI encoded byte string representing the constructor arguments. Required if the constructor has arguments.
  --licenseType <LICENSE>         License type for the contract. Recommended if verifying source code. Defaults to "None".
  --verifySourceCode <true|false>  Whether to verify source code on block explorers. Defaults to true.
  --relayerId <RELAYER_ID>        Relayer ID to use for deployment. Defaults to the relayer configured for your deployment environment on Defender.
  --salt <SALT>                   Salt to use for CREATE2 deployment. Defaults to a random salt.
  --createFactoryAddress <CREATE_FACTORY_ADDRESS>  Address of the CREATE2 factory to use for deployment. Defaults to the factory provided by Defender.
"""


def get_deploy_options(
    values: Dict[str, Any], resolver: Optional[NetworkResolver] = None
) -> DeployOptions:
    """Convert validated deploy option values into DeployOptions."""
    resolver = resolver or NetworkResolver()
    return DeployOptions(
        contract_name=values["contractName"],
        contract_path=values["contractPath"],
        network=resolver.resolve(values["chainId"]),
        artifact_file=values["artifactFile"],
        verify_source_code=values["verifySourceCode"],
        license_type=values["licenseType"],
        constructor_bytecode=values["constructorBytecode"],
        relayer_id=values["relayerId"],
        salt=values["salt"],
        create_factory_address=values["createFactoryAddress"],
    )


def deploy(
    args: Sequence[str],
    client_factory: ClientFactory = default_client_factory,
    resolver: Optional[NetworkResolver] = None,
) -> Optional[str]:
    """
    Run the deploy command.

    Args:
        args: Arguments starting with the ``deploy`` token
        client_factory: Creates the deployment service client
        resolver: Chain ID resolver (defaults to the bundled network table)

    Returns:
        Deployed address, or None if help was shown
    """
    values = _parse(DEPLOY_SCHEMA, args, DEPLOY_USAGE, DEPLOY_DETAILS)
    if values is None:
        return None

    options = get_deploy_options(values, resolver)
    client = client_factory()

    request = build_deploy_request(options, load_build_info(options.artifact_file))
    logger.info("Deploying %s to %s", options.contract_name, options.network)
    response = client.deploy_contract(request)

    click.echo(f"Deployed to address: {response.address}")
    return response.address


# proposeUpgrade

UPGRADE_SCHEMA = OptionSchema(
    command=Command.PROPOSE_UPGRADE.value,
    options=(
        OptionSpec("proxyAddress", required=True),
        OptionSpec("newImplementationAddress", required=True),
        OptionSpec("chainId", required=True),
        OptionSpec("proxyAdminAddress"),
        OptionSpec("abiFile"),
        OptionSpec("approvalProcessId"),
    ),
)

UPGRADE_USAGE = (
    f"Usage: {CLI_NAME} proposeUpgrade --proxyAddress <PROXY_ADDRESS> "
    "--newImplementationAddress <NEW_IMPLEMENTATION_ADDRESS> --chainId <CHAIN_ID> "
    "[--proxyAdminAddress <PROXY_ADMIN_ADDRESS>] [--abiFile <CONTRACT_ARTIFACT_FILE_PATH>] "
    "[--approvalProcessId <UPGRADE_APPROVAL_PROCESS_ID>]"
)
UPGRADE_DETAILS = """
Proposes an upgrade using OpenZeppelin Defender.

Required options:
  --proxyAddress <PROXY_ADDRESS>  Address of the proxy to upgrade.
  --newImplementationAddress <NEW_IMPLEMENTATION_ADDRESS>  Address of the new implementation contract.
  --chainId <CHAIN_ID>            Chain ID of the network to use.

Additional options:
  --proxyAdminAddress <PROXY_ADMIN_ADDRESS>  Address of the proxy's admin. Required if the proxy is a transparent proxy.
  --abiFile <CONTRACT_ARTIFACT_FILE_PATH>  Path to a JSON file that contains an "abi" entry, where its value will be used as the new implementation ABI.
  --approvalProcessId <UPGRADE_APPROVAL_PROCESS_ID>  The ID of the upgrade approval process. Defaults to the upgrade approval process configured for your deployment environment on Defender.
"""


def get_upgrade_options(
    values: Dict[str, Any], resolver: Optional[NetworkResolver] = None
) -> UpgradeOptions:
    """Convert validated proposeUpgrade option values into UpgradeOptions."""
    resolver = resolver or NetworkResolver()
    return UpgradeOptions(
        proxy_address=values["proxyAddress"],
        new_implementation_address=values["newImplementationAddress"],
        network=resolver.resolve(values["chainId"]),
        proxy_admin_address=values["proxyAdminAddress"],
        abi_file=values["abiFile"],
        approval_process_id=values["approvalProcessId"],
    )


def propose_upgrade(
    args: Sequence[str],
    client_factory: ClientFactory = default_client_factory,
    resolver: Optional[NetworkResolver] = None,
) -> Optional[str]:
    """
    Run the proposeUpgrade command.

    Returns:
        Proposal ID, or None if help was shown
    """
    values = _parse(UPGRADE_SCHEMA, args, UPGRADE_USAGE, UPGRADE_DETAILS)
    if values is None:
        return None

    options = get_upgrade_options(values, resolver)
    client = client_factory()

    request = build_upgrade_request(options, load_abi(options.abi_file))
    logger.info("Proposing upgrade of %s on %s", options.proxy_address, options.network)
    response = client.upgrade_contract(request)

    line = f"Upgrade proposal created with ID: {response.proposal_id}"
    if response.external_url is not None:
        line += f" ({response.external_url})"
    click.echo(line)
    return response.proposal_id


# getDeployApprovalProcess / getUpgradeApprovalProcess

APPROVAL_PROCESS_KINDS = {
    Command.GET_DEPLOY_APPROVAL_PROCESS: ApprovalProcessKind.DEPLOY,
    Command.GET_UPGRADE_APPROVAL_PROCESS: ApprovalProcessKind.UPGRADE,
}


def approval_process_schema(command: Command) -> OptionSchema:
    return OptionSchema(
        command=command.value,
        options=(OptionSpec("chainId", required=True),),
    )


def approval_process_usage(command: Command) -> str:
    return f"Usage: {CLI_NAME} {command.value} --chainId <CHAIN_ID>"


def approval_process_details(command: Command) -> str:
    kind = APPROVAL_PROCESS_KINDS[command].value
    return f"""
Gets the {kind} approval process configured for your deployment environment on OpenZeppelin Defender.

Required options:
  --chainId <CHAIN_ID>  Chain ID of the network to use.
"""


def format_approval_process(response: ApprovalProcessResponse) -> str:
    line = f"Approval process ID: {response.approval_process_id}"
    if response.name is not None:
        line += f" ({response.name})"
    if response.via is not None:
        line += f", via {response.via}"
        if response.via_type is not None:
            line += f" ({response.via_type})"
    return line


def get_approval_process(
    command: Command,
    args: Sequence[str],
    client_factory: ClientFactory = default_client_factory,
    resolver: Optional[NetworkResolver] = None,
) -> Optional[str]:
    """
    Run getDeployApprovalProcess or getUpgradeApprovalProcess.

    Returns:
        Approval process ID, or None if help was shown
    """
    values = _parse(
        approval_process_schema(command),
        args,
        approval_process_usage(command),
        approval_process_details(command),
    )
    if values is None:
        return None

    resolver = resolver or NetworkResolver()
    options = ApprovalProcessOptions(network=resolver.resolve(values["chainId"]))
    client = client_factory()

    request = build_approval_process_request(options, APPROVAL_PROCESS_KINDS[command])
    response = client.get_approval_process(request.kind, request.network)

    click.echo(format_approval_process(response))
    return response.approval_process_id
