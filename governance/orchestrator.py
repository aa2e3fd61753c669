from typing import Awaitable, Callable, List, Tuple

from constants.constants import (
    DAO_CONTRACT_NAME,
    DAO_UPDATE_FUNCTION,
    DAO_VALUE_FUNCTION,
    GOV_TOKEN_CONTRACT_NAME,
    GOVERNOR_CONTRACT_NAME,
    PROPOSAL_EXECUTED_EVENT,
    VOTE_CAST_EVENT,
)
from governance.enums.proposal_state import ProposalState
from governance.enums.vote_type import VoteType
from governance.jobs.async_base_job import AsyncBaseJob
from governance.models.account import VotingAccount
from governance.models.contract import DeployedContract
from governance.models.proposal import StateObservation, VoteTally
from governance.models.report import SimulationReport
from governance.service.proposal_service import build_proposal, compute_proposal_id, extract_proposal_id
from governance.simulation_context import SimulationContext
from utils.exceptions import DeploymentRejected, GovernanceSimulationError, StateMismatch
from utils.logger_utils import get_logger
from utils.validation_utils import validate_signer_indices

logger = get_logger("Proposal Lifecycle")

Step = Tuple[str, Callable[[], Awaitable[None]]]


class ProposalLifecycleOrchestrator(AsyncBaseJob):
    """
    Drives one governance proposal from deployment to execution:

        deploy -> mint -> delegate -> propose -> advance (voting delay)
        -> vote -> advance (voting period) -> execute -> verify

    Each step awaits the confirmation of the previous one. The proposal state
    machine itself belongs to the Governor contract; this class only reads it.
    Any rejection aborts the run.
    """

    def __init__(self, context: SimulationContext):
        self.context = context
        self.ledger = context.ledger
        self.parameters = context.parameters
        self.report = context.report
        self._bootstrapped = False

    @property
    def steps(self) -> List[Step]:
        return [
            ("deploy", self.deploy_contracts),
            ("bootstrap", self.bootstrap_voting_power),
            ("propose", self.submit_proposal),
            ("advance_voting_delay", self.advance_past_voting_delay),
            ("vote", self.cast_votes),
            ("advance_voting_period", self.advance_past_voting_period),
            ("execute", self.execute_proposal),
            ("verify", self.verify_outcome),
        ]

    async def _start(self):
        self.report.chain_id = await self.ledger.connect()
        await self.resolve_accounts()

    async def _execute(self) -> SimulationReport:
        for name, step in self.steps:
            logger.debug(f"Running step {name}")
            await step()
            self.report.completed_steps.append(name)
        return self.report

    async def _end(self):
        await self.ledger.close()

    async def resolve_accounts(self) -> None:
        accounts = await self.ledger.get_accounts()
        validate_signer_indices(self.parameters.signer_indices, len(accounts))

        owner_index = self.parameters.owner_index
        self.context.owner = VotingAccount(label="owner", index=owner_index, address=accounts[owner_index])
        self.context.voters = [
            VotingAccount(label=f"voter{position}", index=index, address=accounts[index])
            for position, index in enumerate(self.parameters.voter_indices, start=1)
        ]
        for account in self.context.accounts:
            logger.info(f"{account.label}: {account.address}")

    async def deploy_contracts(self) -> None:
        owner = self.context.owner.address

        self.context.token = await self._deploy(GOV_TOKEN_CONTRACT_NAME, sender=owner)
        logger.info(f"Token contract deployed to: {self.context.token.address}")

        self.context.governor = await self._deploy(GOVERNOR_CONTRACT_NAME, self.context.token.address, sender=owner)
        logger.info(f"Governor contract deployed to: {self.context.governor.address}")

        self.context.dao = await self._deploy(DAO_CONTRACT_NAME, self.context.governor.address, sender=owner)
        logger.info(f"DAO contract deployed to: {self.context.dao.address}")

        for contract in self.context.deployed_contracts:
            self.report.contracts[contract.name] = contract.address

    async def _deploy(self, contract_name: str, *constructor_args, sender: str) -> DeployedContract:
        artifact = self.context.artifact_service.load(contract_name)
        try:
            return await self.ledger.deploy(artifact, *constructor_args, sender=sender)
        except DeploymentRejected as e:
            e.orphaned = [contract.address for contract in self.context.deployed_contracts]
            if e.orphaned:
                logger.warning(f"Deployment aborted, contracts left orphaned on-chain: {e.orphaned}")
            raise

    async def bootstrap_voting_power(self) -> None:
        """
        Mints voting tokens to every account and self-delegates them. This has
        to happen before propose(): the Governor snapshots voting weight at
        the proposal's start block.
        """
        token = self.context.token
        owner = self.context.owner.address
        amount = self.parameters.mint_amount

        for account in self.context.accounts:
            await self.ledger.transact(token, "mint", account.address, amount, sender=owner)
            account.minted = amount
        labels = ", ".join(account.label for account in self.context.accounts)
        logger.info(f"Minted {amount} tokens to {labels}")

        for account in self.context.accounts:
            await self.ledger.transact(token, "delegate", account.address, sender=account.address)

        for account in self.context.accounts:
            account.delegate = await self.ledger.call(token, "delegates", account.address)
            account.votes = await self.ledger.call(token, "getVotes", account.address)
            logger.info(f"{account.label} delegated to itself, voting weight {account.votes}")
            if account.votes != account.minted:
                raise StateMismatch(f"Voting weight of {account.label}", account.minted, account.votes)

        self.report.accounts = self.context.accounts
        self._bootstrapped = True

    async def submit_proposal(self) -> None:
        if not self._bootstrapped:
            raise GovernanceSimulationError(
                "Voting power must be minted and delegated before proposing, "
                "otherwise votes are weighed at zero"
            )

        dao = self.context.dao
        governor = self.context.governor
        calldata = self.ledger.encode_call(dao, DAO_UPDATE_FUNCTION, self.parameters.proposal_value)
        proposal = build_proposal(
            targets=[dao.address],
            values=[0],
            calldatas=[calldata],
            description=self.parameters.proposal_description,
        )
        logger.info(f"Proposing: {proposal.description}")

        confirmation = await self.ledger.transact(
            governor, "propose", *proposal.proposal_args(), sender=self.context.owner.address
        )
        proposal.proposal_id = extract_proposal_id(confirmation)
        proposal.proposer = self.context.owner.address

        expected_id = compute_proposal_id(proposal.targets, proposal.values, proposal.calldatas, proposal.description_hash)
        if expected_id != proposal.proposal_id:
            logger.warning(
                f"Governor returned proposal id {proposal.proposal_id}, off-chain hash gives {expected_id}. "
                "The Governor does not use OpenZeppelin's hashProposal."
            )

        proposal.snapshot_block = await self.ledger.call(governor, "proposalSnapshot", proposal.proposal_id)
        proposal.deadline_block = await self.ledger.call(governor, "proposalDeadline", proposal.proposal_id)
        logger.info(
            f"Proposal ID: {proposal.proposal_id} (snapshot block {proposal.snapshot_block}, "
            f"deadline block {proposal.deadline_block})"
        )

        self.context.proposal = proposal
        self.report.proposal = proposal
        await self.observe_state()

    async def advance_blocks(self, count: int) -> int:
        return await self.ledger.mine_blocks(count)

    async def advance_past_voting_delay(self) -> None:
        await self.advance_blocks(self.parameters.voting_delay_blocks)
        await self.observe_state()

    async def cast_votes(self, support: VoteType = VoteType.FOR) -> None:
        proposal_id = self.context.proposal.proposal_id
        for voter in self.context.voters:
            confirmation = await self.ledger.transact(
                self.context.governor, "castVote", proposal_id, int(support), sender=voter.address
            )
            weight = None
            vote_events = confirmation.events_named(VOTE_CAST_EVENT)
            if vote_events:
                weight = vote_events[0].args.get("weight")
            logger.info(f"{voter.label} has voted {support.name} (weight {weight})")

    async def advance_past_voting_period(self) -> None:
        await self.advance_blocks(self.parameters.voting_period_blocks)
        logger.info("Final result")
        state = await self.observe_state()
        self.report.tally = await self.read_tally()
        if not state.is_executable:
            logger.warning(f"Proposal ended {state.label}, execute() will be rejected")

    async def read_tally(self) -> VoteTally:
        against_votes, for_votes, abstain_votes = await self.ledger.call(
            self.context.governor, "proposalVotes", self.context.proposal.proposal_id
        )
        tally = VoteTally(against_votes=against_votes, for_votes=for_votes, abstain_votes=abstain_votes)
        logger.info(f"Votes: for={tally.for_votes} against={tally.against_votes} abstain={tally.abstain_votes}")
        return tally

    async def execute_proposal(self) -> None:
        proposal = self.context.proposal
        # Governor.execute takes the description hash, not the proposal id
        description_hash = self.ledger.keccak_text(proposal.description)

        logger.info("Executing proposal on DAO")
        confirmation = await self.ledger.transact(
            self.context.governor,
            "execute",
            proposal.targets,
            proposal.values,
            proposal.calldatas,
            description_hash,
            sender=self.context.owner.address,
        )
        if not confirmation.events_named(PROPOSAL_EXECUTED_EVENT):
            logger.warning(f"No {PROPOSAL_EXECUTED_EVENT} event in transaction {confirmation.transaction_hash}")

        state = await self.observe_state()
        if state != ProposalState.EXECUTED:
            raise StateMismatch("Proposal state after execute", ProposalState.EXECUTED.label, state.label)

    async def verify_outcome(self) -> None:
        value = await self.ledger.call(self.context.dao, DAO_VALUE_FUNCTION)
        self.report.final_value = value
        logger.info(f"daoVal: {value}")

        if value != self.parameters.proposal_value:
            raise StateMismatch(DAO_VALUE_FUNCTION, self.parameters.proposal_value, value)

    async def observe_state(self) -> ProposalState:
        proposal = self.context.proposal
        state = ProposalState(await self.ledger.call(self.context.governor, "state", proposal.proposal_id))
        block_number = await self.ledger.get_block_number()

        proposal.state = state
        self.report.state_history.append(StateObservation(block_number=block_number, state=state, label=state.label))
        logger.info(f"Block: {block_number}, Proposal State: {state.label}")
        return state
