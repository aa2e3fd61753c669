from typing import List, Tuple

from eth_utils import keccak
from pydantic import BaseModel, ConfigDict, Field

from governance.enums.proposal_state import ProposalState


class Proposal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "proposal"
    targets: List[str]
    values: List[int]
    # Hex-encoded call data, one entry per target
    calldatas: List[str]
    description: str
    proposal_id: int | None = None
    proposer: str | None = None
    snapshot_block: int | None = None
    deadline_block: int | None = None
    state: ProposalState | None = None

    @property
    def description_hash(self) -> bytes:
        return keccak(text=self.description)

    def proposal_args(self) -> Tuple[List[str], List[int], List[str], str]:
        return self.targets, self.values, self.calldatas, self.description


class VoteTally(BaseModel):
    against_votes: int = 0
    for_votes: int = 0
    abstain_votes: int = 0

    @property
    def total(self) -> int:
        return self.against_votes + self.for_votes + self.abstain_votes


class StateObservation(BaseModel):
    block_number: int
    state: ProposalState
    label: str
