import json
import pathlib
from typing import Any, Dict, List, Optional, Union

from abi.dao_abi import DAO_ABI
from abi.dao_governance_abi import GOVERNOR_ABI
from abi.gov_token_abi import GOV_TOKEN_ABI
from constants.constants import DAO_CONTRACT_NAME, GOV_TOKEN_CONTRACT_NAME, GOVERNOR_CONTRACT_NAME
from governance.enums.artifact_format import ArtifactFormat
from governance.models.contract import ContractArtifact
from utils.exceptions import ArtifactNotFound
from utils.file_utils import load_json
from utils.logger_utils import get_logger

logger = get_logger("Artifact Service")

# ABIs shipped with the package, used when only an address is known
PACKAGED_ABIS: Dict[str, List[Dict[str, Any]]] = {
    GOV_TOKEN_CONTRACT_NAME: GOV_TOKEN_ABI,
    GOVERNOR_CONTRACT_NAME: GOVERNOR_ABI,
    DAO_CONTRACT_NAME: DAO_ABI,
}


class ArtifactService(object):
    """
    Resolves compiled contracts from a build directory.

    Supported layouts:
      - Truffle:  build/contracts/<Name>.json
      - Hardhat:  artifacts/contracts/<Name>.sol/<Name>.json
      - Foundry:  out/<Name>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: Union[str, pathlib.Path]):
        self.artifacts_dir = pathlib.Path(artifacts_dir)
        self._cache: Dict[str, ContractArtifact] = {}

    def load(self, contract_name: str) -> ContractArtifact:
        if contract_name in self._cache:
            return self._cache[contract_name]

        path = self._find_artifact_path(contract_name)
        if path is None:
            raise ArtifactNotFound(
                f"No artifact for {contract_name} under {self.artifacts_dir}. Compile the contracts first."
            )

        try:
            data = load_json(path)
        except (OSError, json.JSONDecodeError) as e:
            raise ArtifactNotFound(f"Could not read artifact {path}: {e}") from e

        artifact = self.parse_artifact(contract_name, data, str(path))
        if not artifact.is_deployable:
            raise ArtifactNotFound(f"Artifact {path} has no bytecode. Is {contract_name} abstract?")

        logger.debug(f"Loaded {contract_name} ({self.detect_format(data).value} format) from {path}")
        self._cache[contract_name] = artifact
        return artifact

    def load_abi(self, contract_name: str) -> List[Dict[str, Any]]:
        """
        ABI of a contract, from its build artifact when available, else the packaged copy.
        """
        try:
            return self.load(contract_name).abi
        except ArtifactNotFound:
            if contract_name in PACKAGED_ABIS:
                logger.debug(f"Using packaged ABI for {contract_name}")
                return PACKAGED_ABIS[contract_name]
            raise

    def _find_artifact_path(self, contract_name: str) -> Optional[pathlib.Path]:
        candidates = [
            self.artifacts_dir / f"{contract_name}.json",
            self.artifacts_dir / f"{contract_name}.sol" / f"{contract_name}.json",
            self.artifacts_dir / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json",
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate

        if not self.artifacts_dir.is_dir():
            return None

        # Nested source folders, skipping Hardhat debug files
        for candidate in sorted(self.artifacts_dir.rglob(f"{contract_name}.json")):
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def detect_format(data: Dict[str, Any]) -> ArtifactFormat:
        if "contractName" in data and "networks" in data:
            return ArtifactFormat.TRUFFLE
        if isinstance(data.get("bytecode"), dict):
            return ArtifactFormat.FOUNDRY
        return ArtifactFormat.HARDHAT

    @staticmethod
    def parse_artifact(contract_name: str, data: Dict[str, Any], source_path: Optional[str] = None) -> ContractArtifact:
        # Some artifact formats wrap the ABI under "output"
        abi = data.get("abi") or data.get("output", {}).get("abi")
        if not isinstance(abi, list):
            raise ArtifactNotFound(f"Artifact for {contract_name} does not contain an ABI list")

        bytecode = data.get("bytecode")
        if isinstance(bytecode, dict):
            bytecode = bytecode.get("object")
        if bytecode and not bytecode.startswith("0x"):
            bytecode = "0x" + bytecode

        return ContractArtifact(
            name=data.get("contractName", contract_name),
            abi=abi,
            bytecode=bytecode,
            source_path=source_path,
        )
