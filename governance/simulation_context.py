from typing import List, Optional

from governance.models.account import VotingAccount
from governance.models.contract import DeployedContract
from governance.models.proposal import Proposal
from governance.models.report import SimulationReport
from governance.models.simulation import SimulationParameters
from governance.service.artifact_service import ArtifactService


class SimulationContext(object):
    """
    State shared by the steps of one simulation run. Built once at the
    entry point and handed to the orchestrator; it lives as long as the
    process and needs no teardown besides closing the ledger.
    """

    def __init__(self, ledger, artifact_service: ArtifactService, parameters: SimulationParameters):
        self.ledger = ledger
        self.artifact_service = artifact_service
        self.parameters = parameters

        self.owner: Optional[VotingAccount] = None
        self.voters: List[VotingAccount] = []

        self.token: Optional[DeployedContract] = None
        self.governor: Optional[DeployedContract] = None
        self.dao: Optional[DeployedContract] = None

        self.proposal: Optional[Proposal] = None
        self.report = SimulationReport(
            provider_uri=getattr(ledger, "provider_uri", None),
            expected_value=parameters.proposal_value,
        )

    @property
    def accounts(self) -> List[VotingAccount]:
        if self.owner is None:
            return list(self.voters)
        return [self.owner] + list(self.voters)

    @property
    def deployed_contracts(self) -> List[DeployedContract]:
        return [contract for contract in (self.token, self.governor, self.dao) if contract is not None]
