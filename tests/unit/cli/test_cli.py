import importlib
import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from click.testing import CliRunner
from web3 import Web3

from abi.dao_abi import DAO_ABI
from cli import cli
from governance.service.proposal_service import compute_proposal_id, hash_description
from utils.exceptions import DeploymentRejected

DAO_ADDRESS = "0x00000000000000000000000000000000000000c2"

# cli/__init__.py rebinds these names to the click commands, so patch the modules directly
simulate_module = importlib.import_module("cli.simulate_governance")
mine_module = importlib.import_module("cli.mine_blocks")
state_module = importlib.import_module("cli.get_proposal_state")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch.object(simulate_module, "configure_logging"), patch.object(
        simulate_module, "configure_signals"
    ), patch.object(mine_module, "configure_logging"), patch.object(state_module, "configure_logging"):
        yield


def test_simulate_governance_writes_report(runner, fake_ledger, artifacts_dir, tmp_path):
    output = tmp_path / "report.json"

    with patch.object(simulate_module, "LedgerClient", return_value=fake_ledger):
        result = runner.invoke(
            cli,
            ["simulate_governance", "--artifacts-dir", str(artifacts_dir), "--output", str(output)],
        )

    assert result.exit_code == 0, result.output
    report = json.loads(output.read_text())
    assert report["final_value"] == 42
    assert report["completed_steps"][-1] == "verify"
    assert [observation["label"] for observation in report["state_history"]][-1] == "Executed"
    assert fake_ledger.closed


def test_simulate_governance_custom_voters(runner, fake_ledger, artifacts_dir, tmp_path):
    output = tmp_path / "report.json"

    with patch.object(simulate_module, "LedgerClient", return_value=fake_ledger):
        result = runner.invoke(
            cli,
            [
                "simulate_governance",
                "--artifacts-dir", str(artifacts_dir),
                "--voter-indices", "4,5",
                "--proposal-value", "9",
                "--output", str(output),
            ],
        )

    assert result.exit_code == 0, result.output
    report = json.loads(output.read_text())
    assert report["final_value"] == 9
    assert [account["index"] for account in report["accounts"]] == [0, 4, 5]


def test_simulate_governance_invalid_voter_indices(runner):
    result = runner.invoke(cli, ["simulate_governance", "--voter-indices", "one,two"])

    assert result.exit_code == 2
    assert "comma-separated integers" in result.output


def test_simulate_governance_aborts_on_rejected_deployment(runner, fake_ledger, artifacts_dir):
    fake_ledger.fail_deploy.add("DaoGovernor")

    with patch.object(simulate_module, "LedgerClient", return_value=fake_ledger):
        result = runner.invoke(cli, ["simulate_governance", "--artifacts-dir", str(artifacts_dir)])

    assert result.exit_code == 1
    assert isinstance(result.exception, DeploymentRejected)
    assert fake_ledger.closed


def test_mine_blocks(runner, fake_ledger):
    with patch.object(mine_module, "LedgerClient", return_value=fake_ledger):
        result = runner.invoke(cli, ["mine_blocks", "-n", "5"])

    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-1] == "5"


def test_mine_blocks_rejects_negative_count(runner):
    result = runner.invoke(cli, ["mine_blocks", "-n", "-1"])

    assert result.exit_code == 2


def test_get_proposal_state(runner, tmp_path):
    ledger = MagicMock()
    ledger.connect = AsyncMock(return_value=1337)
    ledger.close = AsyncMock()
    ledger.call = AsyncMock(return_value=4)

    with patch.object(state_module, "LedgerClient", return_value=ledger):
        result = runner.invoke(
            cli,
            ["get_proposal_state", "-g", DAO_ADDRESS, "-i", "1234", "--artifacts-dir", str(tmp_path)],
        )

    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-1] == "Succeeded"
    ledger.close.assert_awaited_once()


def test_hash_proposal_default_calldata(runner):
    result = runner.invoke(cli, ["hash_proposal", "-t", DAO_ADDRESS])

    calldata = Web3().eth.contract(abi=DAO_ABI).encode_abi("updateValue", args=[42])
    expected = compute_proposal_id([DAO_ADDRESS], [0], [calldata], hash_description("Updating DAO value to 42"))

    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(expected)


def test_hash_proposal_mismatched_actions(runner):
    result = runner.invoke(cli, ["hash_proposal", "-t", DAO_ADDRESS, "-v", "0", "-v", "1"])

    assert result.exit_code == 2
    assert "same length" in result.output
