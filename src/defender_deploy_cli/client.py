"""Deployment service client for defender-deploy-cli."""

import logging
from typing import Any, Dict, Optional, Protocol, Tuple

import requests

from .config import Credentials, get_api_url
from .constants import REQUEST_TIMEOUT
from .exceptions import RemoteError
from .types import (
    ApprovalProcessKind,
    ApprovalProcessResponse,
    DeploymentResponse,
    DeployRequest,
    UpgradeRequest,
    UpgradeResponse,
)

logger = logging.getLogger(__name__)


class DeployClient(Protocol):
    """Operations the commands need from the deployment service."""

    def deploy_contract(self, request: DeployRequest) -> DeploymentResponse: ...

    def upgrade_contract(self, request: UpgradeRequest) -> UpgradeResponse: ...

    def get_approval_process(
        self, kind: ApprovalProcessKind, network: str
    ) -> ApprovalProcessResponse: ...


class DefenderDeployClient:
    """HTTP client for the OpenZeppelin Defender deploy API."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Defender API key
            api_secret: Defender API secret
            api_url: Base URL (defaults to $DEFENDER_API_URL or the public API)
            session: HTTP session to reuse (a new one is created if None)
        """
        self._api_url = get_api_url(api_url)
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "X-Api-Key": api_key,
                "X-Api-Secret": api_secret,
                "Content-Type": "application/json",
            }
        )

    def deploy_contract(self, request: DeployRequest) -> DeploymentResponse:
        result = self._call("POST", "/deployments", request.to_payload(), required=("address",))
        return DeploymentResponse(
            address=result["address"],
            deployment_id=result.get("deploymentId"),
            status=result.get("status"),
        )

    def upgrade_contract(self, request: UpgradeRequest) -> UpgradeResponse:
        result = self._call("POST", "/upgrades", request.to_payload(), required=("proposalId",))
        return UpgradeResponse(
            proposal_id=result["proposalId"],
            external_url=result.get("externalUrl"),
        )

    def get_approval_process(
        self, kind: ApprovalProcessKind, network: str
    ) -> ApprovalProcessResponse:
        result = self._call(
            "GET",
            f"/approval-process/{kind.value}/{network}",
            required=("approvalProcessId",),
        )
        return ApprovalProcessResponse(
            approval_process_id=result["approvalProcessId"],
            name=result.get("name"),
            via=result.get("via"),
            via_type=result.get("viaType"),
        )

    def _call(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        required: Tuple[str, ...] = (),
    ) -> Dict[str, Any]:
        """
        Send one request and decode the JSON response.

        Args:
            required: Fields the response object must contain

        Raises:
            RemoteError: On network errors, non-2xx status, a non-JSON body
                         or a response missing a required field
        """
        url = f"{self._api_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = self._session.request(
                method, url, json=payload, timeout=REQUEST_TIMEOUT
            )
        except requests.RequestException as e:
            raise RemoteError(f"Network error calling {method} {path}: {e}") from e

        logger.debug("%s %s returned %s", method, url, response.status_code)

        if not response.ok:
            raise RemoteError(
                f"{method} {path} failed with status {response.status_code}: "
                f"{response.text.strip()}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise RemoteError(
                f"{method} {path} returned a non-JSON response",
                status_code=response.status_code,
            ) from e

        if not isinstance(result, dict):
            raise RemoteError(
                f"{method} {path} returned an unexpected response: {result!r}",
                status_code=response.status_code,
            )

        missing = [name for name in required if result.get(name) is None]
        if missing:
            raise RemoteError(
                f"{method} {path} response is missing field(s): {', '.join(missing)}",
                status_code=response.status_code,
            )

        return result


def get_deploy_client(credentials: Credentials) -> DeployClient:
    """Create the default deployment service client."""
    return DefenderDeployClient(credentials.api_key, credentials.api_secret)
