"""Integration tests for command dispatch with a fake deployment client."""

import json
from pathlib import Path

import pytest

from defender_deploy_cli.cli import main
from defender_deploy_cli.exceptions import (
    ArtifactReadError,
    ConfigurationError,
    NetworkResolutionError,
    RemoteError,
    UsageError,
    ValidationError,
)
from defender_deploy_cli.networks import NetworkResolver
from defender_deploy_cli.types import ApprovalProcessKind, DeployRequest, UpgradeRequest

PROXY_ADDRESS = "0x123"
NEW_IMPLEMENTATION_ADDRESS = "0x456"
FAKE_CHAIN_ID = "1"

PROXY_ADMIN_ADDRESS = "0x789"
APPROVAL_PROCESS_ID = "my-approval-process-id"

UPGRADE_ARGS = [
    "proposeUpgrade",
    "--proxyAddress", PROXY_ADDRESS,
    "--newImplementationAddress", NEW_IMPLEMENTATION_ADDRESS,
    "--chainId", FAKE_CHAIN_ID,
]


def deploy_args(artifact_file: Path) -> list:
    return [
        "deploy",
        "--contractName", "MyContract",
        "--contractPath", "contracts/MyContract.sol",
        "--chainId", "11155111",
        "--artifactFile", str(artifact_file),
    ]


def without_option(args: list, option: str) -> list:
    """Drop --option and its value from an argument list."""
    index = args.index(f"--{option}")
    return args[:index] + args[index + 2 :]


class TestUsage:
    """Test usage output and unknown commands."""

    def test_no_args_prints_usage(self, client_factory, capsys):
        """Test that no arguments shows usage and never builds a client."""
        assert main([], client_factory) is None

        output = capsys.readouterr().out
        assert "<COMMAND> <OPTIONS>" in output
        assert "proposeUpgrade" in output
        assert client_factory.call_count == 0

    def test_top_level_help(self, client_factory, capsys):
        """Test that --help alone shows top-level usage."""
        main(["--help"], client_factory)

        assert "Available commands" in capsys.readouterr().out
        assert client_factory.call_count == 0

    @pytest.mark.parametrize(
        "command",
        ["deploy", "proposeUpgrade", "getDeployApprovalProcess", "getUpgradeApprovalProcess"],
    )
    def test_command_help(self, command, client_factory, capsys):
        """Test that each command prints its own usage on --help."""
        assert main([command, "--help"], client_factory) is None

        output = capsys.readouterr().out
        assert f"{command} --" in output
        assert "Required options" in output
        assert client_factory.call_count == 0

    def test_unknown_command(self, client_factory):
        """Test that an unknown command names the token and points to --help."""
        with pytest.raises(UsageError) as exc_info:
            main(["destroy", "--chainId", "1"], client_factory)

        assert "Unknown command: destroy" in str(exc_info.value)
        assert "--help" in str(exc_info.value)
        assert client_factory.call_count == 0


class TestProposeUpgrade:
    """Test the proposeUpgrade command end to end."""

    def test_required_args(self, client_factory, fake_client, capsys):
        """Test that only required options produce a request with unset optionals."""
        result = main(UPGRADE_ARGS, client_factory)

        assert result == "my-proposal-id"
        assert fake_client.calls == [
            (
                "upgrade_contract",
                UpgradeRequest(
                    proxy_address=PROXY_ADDRESS,
                    new_implementation_address=NEW_IMPLEMENTATION_ADDRESS,
                    network="mainnet",
                    proxy_admin_address=None,
                    new_implementation_abi=None,
                    approval_process_id=None,
                ),
            )
        ]
        assert "Upgrade proposal created with ID: my-proposal-id" in capsys.readouterr().out

    def test_all_args(self, client_factory, fake_client, abi_file: Path):
        """Test that optional options and the ABI file fill the remaining fields."""
        args = UPGRADE_ARGS + [
            "--proxyAdminAddress", PROXY_ADMIN_ADDRESS,
            "--abiFile", str(abi_file),
            "--approvalProcessId", APPROVAL_PROCESS_ID,
        ]

        main(args, client_factory)

        assert fake_client.calls == [
            (
                "upgrade_contract",
                UpgradeRequest(
                    proxy_address=PROXY_ADDRESS,
                    new_implementation_address=NEW_IMPLEMENTATION_ADDRESS,
                    network="mainnet",
                    proxy_admin_address=PROXY_ADMIN_ADDRESS,
                    new_implementation_abi='[{"type":"function","name":"hello"}]',
                    approval_process_id=APPROVAL_PROCESS_ID,
                ),
            )
        ]

    def test_no_options(self, client_factory, fake_client):
        """Test that the bare command reports missing required options."""
        with pytest.raises(ValidationError) as exc_info:
            main(["proposeUpgrade"], client_factory)

        assert "Missing required option: --proxyAddress" in str(exc_info.value)
        assert client_factory.call_count == 0
        assert fake_client.calls == []

    @pytest.mark.parametrize("option", ["proxyAddress", "newImplementationAddress", "chainId"])
    def test_each_required_option(self, option, client_factory, fake_client):
        """Test that omitting one required option names exactly that option."""
        with pytest.raises(ValidationError) as exc_info:
            main(without_option(UPGRADE_ARGS, option), client_factory)

        assert exc_info.value.violations == [f"Missing required option: --{option}"]
        assert fake_client.calls == []

    @pytest.mark.parametrize("option", ["proxyAddress", "newImplementationAddress", "chainId"])
    def test_whitespace_required_option(self, option, client_factory, fake_client):
        """Test that a whitespace-only required option is rejected by name."""
        args = without_option(UPGRADE_ARGS, option) + [f"--{option}=  "]

        with pytest.raises(ValidationError) as exc_info:
            main(args, client_factory)

        assert exc_info.value.violations == [f"Invalid option: --{option} cannot be empty"]
        assert fake_client.calls == []

    def test_unrecognized_options(self, client_factory, fake_client):
        """Test that every unrecognized option is listed."""
        with pytest.raises(ValidationError) as exc_info:
            main(UPGRADE_ARGS + ["--salt", "x", "--contractName", "Box"], client_factory)

        assert "Invalid options: salt, contractName" in str(exc_info.value)
        assert fake_client.calls == []

    def test_unsupported_chain_id(self, client_factory, fake_client):
        """Test that an unsupported chain ID fails before any remote call."""
        args = without_option(UPGRADE_ARGS, "chainId") + ["--chainId", "987654321987654321"]

        with pytest.raises(NetworkResolutionError) as exc_info:
            main(args, client_factory)

        assert "987654321987654321" in str(exc_info.value)
        assert client_factory.call_count == 0
        assert fake_client.calls == []

    def test_missing_abi_file_fails_before_remote_call(self, client_factory, fake_client, tmp_path: Path):
        """Test that an unreadable ABI file aborts the invocation."""
        args = UPGRADE_ARGS + ["--abiFile", str(tmp_path / "missing.json")]

        with pytest.raises(ArtifactReadError):
            main(args, client_factory)

        assert fake_client.calls == []

    def test_injected_network_table(self, client_factory, fake_client):
        """Test that the resolver can be replaced without touching the table."""
        args = without_option(UPGRADE_ARGS, "chainId") + ["--chainId", "31337"]

        main(args, client_factory, NetworkResolver({"devnet": 31337}))

        assert fake_client.calls[0][1].network == "devnet"


class TestDeploy:
    """Test the deploy command end to end."""

    def test_required_args(self, client_factory, fake_client, build_info_file: Path, capsys):
        """Test that the request carries the compiler input/output and defaults."""
        result = main(deploy_args(build_info_file), client_factory)

        assert result == "0xdeployed"
        assert len(fake_client.calls) == 1
        method, request = fake_client.calls[0]
        assert method == "deploy_contract"
        assert isinstance(request, DeployRequest)
        assert request.network == "sepolia"
        assert request.verify_source_code is True
        assert request.license_type is None
        assert request.constructor_bytecode is None
        assert list(json.loads(request.artifact_payload).keys()) == ["input", "output"]
        assert "Deployed to address: 0xdeployed" in capsys.readouterr().out

    def test_all_args(self, client_factory, fake_client, build_info_file: Path):
        """Test that every optional option is copied into the request."""
        args = deploy_args(build_info_file) + [
            "--licenseType", "MIT",
            "--constructorBytecode", "0x0001",
            "--verifySourceCode", "false",
            "--relayerId", "my-relayer",
            "--salt", "my-salt",
            "--createFactoryAddress", "0xfactory",
        ]

        main(args, client_factory)

        request = fake_client.calls[0][1]
        assert request.license_type == "MIT"
        assert request.constructor_bytecode == "0x0001"
        assert request.verify_source_code is False
        assert request.relayer_id == "my-relayer"
        assert request.salt == "my-salt"
        assert request.create_factory_address == "0xfactory"

    @pytest.mark.parametrize(
        "option", ["contractName", "contractPath", "chainId", "artifactFile"]
    )
    def test_each_required_option(self, option, client_factory, fake_client, build_info_file: Path):
        """Test that omitting one required option names exactly that option."""
        with pytest.raises(ValidationError) as exc_info:
            main(without_option(deploy_args(build_info_file), option), client_factory)

        assert exc_info.value.violations == [f"Missing required option: --{option}"]
        assert client_factory.call_count == 0
        assert fake_client.calls == []

    def test_extra_positional(self, client_factory, build_info_file: Path):
        """Test that the deploy command rejects positional arguments."""
        with pytest.raises(ValidationError) as exc_info:
            main(deploy_args(build_info_file) + ["Box"], client_factory)

        assert "does not take any arguments" in str(exc_info.value)


class TestGetApprovalProcess:
    """Test the approval process commands end to end."""

    @pytest.mark.parametrize(
        "command,kind",
        [
            ("getDeployApprovalProcess", ApprovalProcessKind.DEPLOY),
            ("getUpgradeApprovalProcess", ApprovalProcessKind.UPGRADE),
        ],
    )
    def test_calls_with_kind_and_network(self, command, kind, client_factory, fake_client, capsys):
        result = main([command, "--chainId", "137"], client_factory)

        assert result == "my-approval-process-id"
        assert fake_client.calls == [("get_approval_process", (kind, "matic"))]
        assert capsys.readouterr().out.strip() == (
            "Approval process ID: my-approval-process-id (My Approval Process), via 0xabc (Safe)"
        )

    def test_missing_chain_id(self, client_factory, fake_client):
        with pytest.raises(ValidationError) as exc_info:
            main(["getDeployApprovalProcess"], client_factory)

        assert exc_info.value.violations == ["Missing required option: --chainId"]
        assert fake_client.calls == []


class TestCredentials:
    """Test credential checks with the default client factory."""

    def test_missing_credentials_fail_before_request(self, no_credentials, abi_file: Path):
        """Test that missing credentials are reported after validation succeeds."""
        with pytest.raises(ConfigurationError):
            main(UPGRADE_ARGS + ["--abiFile", str(abi_file)])

    def test_validation_errors_win_over_missing_credentials(self, no_credentials):
        """Test that option errors are reported before credentials are checked."""
        with pytest.raises(ValidationError):
            main(["proposeUpgrade"])


class TestHelpLiteral:
    """Test that an explicit true after --help still shows usage."""

    @pytest.mark.parametrize("help_args", [["--help", "true"], ["--help=true"]])
    def test_help_true_shows_usage(self, help_args, client_factory, capsys):
        assert main(["proposeUpgrade"] + help_args, client_factory) is None

        assert "Usage:" in capsys.readouterr().out
        assert client_factory.call_count == 0


class TestRemoteFailure:
    """Test that a rejected remote call ends the invocation unchanged."""

    def test_remote_error_propagates_unwrapped(
        self, failing_client_factory, failing_client, remote_error, capsys
    ):
        """Test that the same error object is re-raised after exactly one call."""
        with pytest.raises(RemoteError) as exc_info:
            main(UPGRADE_ARGS, failing_client_factory)

        assert exc_info.value is remote_error
        assert exc_info.value.status_code == 403
        assert len(failing_client.calls) == 1
        assert failing_client_factory.call_count == 1
        assert "Upgrade proposal created" not in capsys.readouterr().out

    def test_large_chain_id_fails_before_remote_call(self, client_factory, fake_client):
        """Test that a chain ID too long to convert is reported as unsupported."""
        args = without_option(UPGRADE_ARGS, "chainId") + ["--chainId", "9" * 5000]

        with pytest.raises(NetworkResolutionError):
            main(args, client_factory)

        assert client_factory.call_count == 0
        assert fake_client.calls == []
