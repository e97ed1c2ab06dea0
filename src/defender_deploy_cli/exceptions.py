"""Custom exception classes for defender-deploy-cli."""

from typing import Iterable, List, Optional


class DefenderCLIError(Exception):
    """Base exception for all errors raised by the client."""

    pass


class UsageError(DefenderCLIError, ValueError):
    """Raised when the top-level command is missing or unknown."""

    pass


class ValidationError(DefenderCLIError, ValueError):
    """
    Raised when command-line options do not satisfy a command's schema.

    Holds every violation found, one message per violation.
    """

    def __init__(self, violations: Iterable[str]):
        self.violations: List[str] = list(violations)
        super().__init__("\n".join(self.violations))


class ArtifactError(DefenderCLIError, ValueError):
    """Base exception for artifact and ABI file problems."""

    pass


class ArtifactReadError(ArtifactError, OSError):
    """Raised when an artifact file cannot be read."""

    pass


class ArtifactDecodeError(ArtifactError):
    """Raised when an artifact file is not valid JSON."""

    pass


class ArtifactFieldError(ArtifactError):
    """Raised when an artifact file lacks a required field."""

    pass


class NetworkResolutionError(DefenderCLIError, ValueError):
    """Raised when a chain ID does not map to a supported network."""

    pass


class ConfigurationError(DefenderCLIError):
    """Raised when credentials are missing from the environment."""

    pass


class RemoteError(DefenderCLIError, RuntimeError):
    """Raised when the deployment service rejects a call or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
