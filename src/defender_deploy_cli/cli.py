"""Console entry point and command dispatch for defender-deploy-cli."""

import logging
import os
from typing import Optional, Sequence

import click

from .commands import ClientFactory, default_client_factory, deploy, get_approval_process, propose_upgrade
from .constants import CLI_NAME, LOG_LEVEL_ENV
from .exceptions import DefenderCLIError, UsageError
from .networks import NetworkResolver
from .options import parse_args
from .types import Command

USAGE = f"Usage: {CLI_NAME} <COMMAND> <OPTIONS>"
DETAILS = f"""
Performs actions using OpenZeppelin Defender.

Available commands:
  deploy  Deploys a contract.
  proposeUpgrade  Proposes an upgrade.
  getDeployApprovalProcess  Gets the deploy approval process configured for a network.
  getUpgradeApprovalProcess  Gets the upgrade approval process configured for a network.

Run '{CLI_NAME} <COMMAND> --help' for more information on a command.
"""


def main(
    args: Sequence[str],
    client_factory: ClientFactory = default_client_factory,
    resolver: Optional[NetworkResolver] = None,
) -> Optional[str]:
    """
    Dispatch to the command named by the first positional argument.

    The command receives the full argument list, command token included.

    Args:
        args: Command-line arguments without the program name
        client_factory: Creates the deployment service client; only called
                        once all options have been validated
        resolver: Chain ID resolver (defaults to the bundled network table)

    Returns:
        Identifier printed by the command (address, proposal ID or approval
        process ID), or None if usage was shown

    Raises:
        UsageError: If the command is unknown
    """
    positionals = parse_args(args).positionals

    if not positionals:
        click.echo(USAGE)
        click.echo(DETAILS)
        return None

    try:
        command = Command(positionals[0])
    except ValueError:
        raise UsageError(
            f"Unknown command: {positionals[0]}\n"
            f"Run '{CLI_NAME} --help' for usage."
        ) from None

    match command:
        case Command.DEPLOY:
            return deploy(args, client_factory, resolver)
        case Command.PROPOSE_UPGRADE:
            return propose_upgrade(args, client_factory, resolver)
        case Command.GET_DEPLOY_APPROVAL_PROCESS | Command.GET_UPGRADE_APPROVAL_PROCESS:
            return get_approval_process(command, args, client_factory, resolver)
        case _:
            # Unreachable but exhaustive
            raise UsageError(f"Unknown command: {positionals[0]}")


def _configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    }
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(args: Sequence[str]) -> None:
    """Performs actions using OpenZeppelin Defender."""
    _configure_logging()
    try:
        main(list(args))
    except DefenderCLIError as e:
        raise click.ClickException(str(e)) from e
