"""
defender-deploy-cli: Command-line client for deploying and upgrading contracts with OpenZeppelin Defender
"""

from importlib.metadata import PackageNotFoundError, version

from .cli import main
from .client import DefenderDeployClient, DeployClient
from .exceptions import (
    ArtifactDecodeError,
    ArtifactError,
    ArtifactFieldError,
    ArtifactReadError,
    ConfigurationError,
    DefenderCLIError,
    NetworkResolutionError,
    RemoteError,
    UsageError,
    ValidationError,
)
from .networks import NetworkResolver, resolve_network
from .types import (
    ApprovalProcessKind,
    ApprovalProcessRequest,
    ApprovalProcessResponse,
    Command,
    DeploymentResponse,
    DeployRequest,
    UpgradeRequest,
    UpgradeResponse,
)

try:
    __version__ = version("defender-deploy-cli")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "main",
    "DeployClient",
    "DefenderDeployClient",
    "NetworkResolver",
    "resolve_network",
    "Command",
    "ApprovalProcessKind",
    "DeployRequest",
    "UpgradeRequest",
    "ApprovalProcessRequest",
    "DeploymentResponse",
    "UpgradeResponse",
    "ApprovalProcessResponse",
    "DefenderCLIError",
    "UsageError",
    "ValidationError",
    "ArtifactError",
    "ArtifactReadError",
    "ArtifactDecodeError",
    "ArtifactFieldError",
    "NetworkResolutionError",
    "ConfigurationError",
    "RemoteError",
]
