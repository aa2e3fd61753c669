from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ContractArtifact(BaseModel):
    """Compiled contract as produced by Truffle, Hardhat or Foundry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    abi: List[Dict[str, Any]] = Field(default_factory=list)
    bytecode: str | None = None
    source_path: str | None = None

    @property
    def is_deployable(self) -> bool:
        return bool(self.bytecode) and self.bytecode != "0x"


class DeployedContract(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "contract"
    name: str
    address: str
    abi: List[Dict[str, Any]] = Field(default_factory=list, repr=False)
    transaction_hash: str | None = None
    block_number: int | None = None
