from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from governance.models.account import VotingAccount
from governance.models.proposal import Proposal, StateObservation, VoteTally


class SimulationReport(BaseModel):
    """Everything observed during one run, suitable for dumping as JSON."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "simulation_report"
    provider_uri: str | None = None
    chain_id: int | None = None
    contracts: Dict[str, str] = Field(default_factory=dict)
    accounts: List[VotingAccount] = Field(default_factory=list)
    proposal: Proposal | None = None
    state_history: List[StateObservation] = Field(default_factory=list)
    tally: VoteTally | None = None
    expected_value: int | None = None
    final_value: int | None = None
    completed_steps: List[str] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, exclude_none=True)
