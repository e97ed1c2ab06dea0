"""Shared pytest fixtures for defender-deploy-cli tests."""

from pathlib import Path
from typing import Any, List, Tuple

import pytest

from defender_deploy_cli.exceptions import RemoteError
from defender_deploy_cli.types import (
    ApprovalProcessKind,
    ApprovalProcessResponse,
    DeploymentResponse,
    DeployRequest,
    UpgradeRequest,
    UpgradeResponse,
)


class FakeDeployClient:
    """Records every call instead of contacting the deployment service."""

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []

    def deploy_contract(self, request: DeployRequest) -> DeploymentResponse:
        self.calls.append(("deploy_contract", request))
        return DeploymentResponse(address="0xdeployed", deployment_id="my-deployment-id")

    def upgrade_contract(self, request: UpgradeRequest) -> UpgradeResponse:
        self.calls.append(("upgrade_contract", request))
        return UpgradeResponse(proposal_id="my-proposal-id")

    def get_approval_process(
        self, kind: ApprovalProcessKind, network: str
    ) -> ApprovalProcessResponse:
        self.calls.append(("get_approval_process", (kind, network)))
        return ApprovalProcessResponse(
            approval_process_id="my-approval-process-id",
            name="My Approval Process",
            via="0xabc",
            via_type="Safe",
        )


class FailingDeployClient(FakeDeployClient):
    """Records calls, then rejects them the way the deployment service would."""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    def upgrade_contract(self, request: UpgradeRequest) -> UpgradeResponse:
        self.calls.append(("upgrade_contract", request))
        raise self.error


class ClientFactorySpy:
    """Client factory that counts how many clients were constructed."""

    def __init__(self, client: FakeDeployClient):
        self.client = client
        self.call_count = 0

    def __call__(self) -> FakeDeployClient:
        self.call_count += 1
        return self.client


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def abi_file(fixtures_dir: Path) -> Path:
    """Return path to a contract artifact with a single-function ABI."""
    return fixtures_dir / "MyContract.json"


@pytest.fixture
def build_info_file(fixtures_dir: Path) -> Path:
    """Return path to a sample build-info file."""
    return fixtures_dir / "build-info.json"


@pytest.fixture
def fake_client() -> FakeDeployClient:
    return FakeDeployClient()


@pytest.fixture
def client_factory(fake_client: FakeDeployClient) -> ClientFactorySpy:
    return ClientFactorySpy(fake_client)


@pytest.fixture
def remote_error() -> RemoteError:
    return RemoteError("POST /upgrades failed with status 403: Forbidden", status_code=403)


@pytest.fixture
def failing_client(remote_error: RemoteError) -> FailingDeployClient:
    return FailingDeployClient(remote_error)


@pytest.fixture
def failing_client_factory(failing_client: FailingDeployClient) -> ClientFactorySpy:
    return ClientFactorySpy(failing_client)


@pytest.fixture
def no_credentials(monkeypatch, tmp_path: Path):
    """Remove credentials from the environment and hide any .env file."""
    # setenv first so monkeypatch also undoes values loaded from a .env file
    for name in ("DEFENDER_KEY", "DEFENDER_SECRET"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
