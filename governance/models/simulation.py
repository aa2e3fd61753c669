from typing import List

from pydantic import BaseModel, ConfigDict, Field

from constants.constants import (
    DEFAULT_MINT_AMOUNT,
    DEFAULT_OWNER_INDEX,
    DEFAULT_PROPOSAL_DESCRIPTION,
    DEFAULT_PROPOSAL_VALUE,
    DEFAULT_VOTING_DELAY_BLOCKS,
    DEFAULT_VOTING_PERIOD_BLOCKS,
)


class SimulationParameters(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mint_amount: int = Field(default=DEFAULT_MINT_AMOUNT, gt=0)
    proposal_value: int = Field(default=DEFAULT_PROPOSAL_VALUE, ge=0)
    proposal_description: str = DEFAULT_PROPOSAL_DESCRIPTION
    voting_delay_blocks: int = Field(default=DEFAULT_VOTING_DELAY_BLOCKS, ge=0)
    voting_period_blocks: int = Field(default=DEFAULT_VOTING_PERIOD_BLOCKS, ge=0)
    owner_index: int = Field(default=DEFAULT_OWNER_INDEX, ge=0)
    voter_indices: List[int] = Field(default_factory=lambda: [1, 2])

    @property
    def signer_indices(self) -> List[int]:
        return [self.owner_index] + list(self.voter_indices)
