import json

import pytest

from abi.dao_governance_abi import GOVERNOR_ABI
from governance.enums.artifact_format import ArtifactFormat
from governance.service.artifact_service import ArtifactService
from utils.exceptions import ArtifactNotFound

DAO_ABI_STUB = [{"type": "function", "name": "daoVal", "inputs": [], "outputs": [{"name": "", "type": "uint256"}]}]


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


def test_load_truffle_artifact(tmp_path):
    _write(
        tmp_path / "Dao.json",
        {"contractName": "Dao", "abi": DAO_ABI_STUB, "bytecode": "0x6080", "networks": {}},
    )

    artifact = ArtifactService(tmp_path).load("Dao")

    assert artifact.name == "Dao"
    assert artifact.abi == DAO_ABI_STUB
    assert artifact.bytecode == "0x6080"
    assert artifact.is_deployable


def test_load_foundry_artifact(tmp_path):
    _write(
        tmp_path / "Dao.sol" / "Dao.json",
        {"abi": DAO_ABI_STUB, "bytecode": {"object": "6080", "linkReferences": {}}},
    )

    artifact = ArtifactService(tmp_path).load("Dao")

    assert artifact.bytecode == "0x6080"
    assert artifact.source_path.endswith("Dao.json")


def test_load_hardhat_artifact(tmp_path):
    _write(
        tmp_path / "contracts" / "Dao.sol" / "Dao.json",
        {"_format": "hh-sol-artifact-1", "contractName": "Dao", "abi": DAO_ABI_STUB, "bytecode": "0x6080"},
    )

    artifact = ArtifactService(tmp_path).load("Dao")

    assert artifact.name == "Dao"
    assert artifact.is_deployable


def test_load_nested_artifact(tmp_path):
    _write(
        tmp_path / "contracts" / "governance" / "Dao.sol" / "Dao.json",
        {"contractName": "Dao", "abi": DAO_ABI_STUB, "bytecode": "0x6080"},
    )

    assert ArtifactService(tmp_path).load("Dao").is_deployable


def test_detect_format():
    assert ArtifactService.detect_format({"contractName": "Dao", "networks": {}}) == ArtifactFormat.TRUFFLE
    assert ArtifactService.detect_format({"bytecode": {"object": "0x"}}) == ArtifactFormat.FOUNDRY
    assert ArtifactService.detect_format({"_format": "hh-sol-artifact-1", "bytecode": "0x"}) == ArtifactFormat.HARDHAT


def test_missing_artifact(tmp_path):
    with pytest.raises(ArtifactNotFound, match="Compile the contracts first"):
        ArtifactService(tmp_path).load("Dao")


def test_missing_directory(tmp_path):
    with pytest.raises(ArtifactNotFound):
        ArtifactService(tmp_path / "does-not-exist").load("Dao")


def test_artifact_without_bytecode(tmp_path):
    _write(tmp_path / "Dao.json", {"contractName": "Dao", "abi": DAO_ABI_STUB, "bytecode": "0x", "networks": {}})

    with pytest.raises(ArtifactNotFound, match="no bytecode"):
        ArtifactService(tmp_path).load("Dao")


def test_artifact_without_abi(tmp_path):
    _write(tmp_path / "Dao.json", {"contractName": "Dao", "bytecode": "0x6080"})

    with pytest.raises(ArtifactNotFound, match="ABI"):
        ArtifactService(tmp_path).load("Dao")


def test_load_is_cached(tmp_path):
    path = tmp_path / "Dao.json"
    _write(path, {"contractName": "Dao", "abi": DAO_ABI_STUB, "bytecode": "0x6080", "networks": {}})
    service = ArtifactService(tmp_path)

    first = service.load("Dao")
    path.unlink()

    assert service.load("Dao") is first


def test_load_abi_falls_back_to_packaged_abi(tmp_path):
    assert ArtifactService(tmp_path).load_abi("DaoGovernor") == GOVERNOR_ABI


def test_load_abi_unknown_contract(tmp_path):
    with pytest.raises(ArtifactNotFound):
        ArtifactService(tmp_path).load_abi("Timelock")
