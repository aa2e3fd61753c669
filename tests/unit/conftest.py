import json
from typing import Any, Dict, List, Tuple

import pytest
from eth_utils import keccak, to_checksum_address

from abi.dao_abi import DAO_ABI
from abi.dao_governance_abi import GOVERNOR_ABI
from abi.gov_token_abi import GOV_TOKEN_ABI
from constants.constants import ZERO_ADDRESS
from governance.enums.proposal_state import ProposalState
from governance.models.confirmation import DecodedEvent, TransactionConfirmation
from governance.models.contract import ContractArtifact, DeployedContract
from governance.models.simulation import SimulationParameters
from governance.orchestrator import ProposalLifecycleOrchestrator
from governance.service.artifact_service import ArtifactService
from governance.service.proposal_service import compute_proposal_id
from governance.simulation_context import SimulationContext
from utils.exceptions import DeploymentRejected, TransactionReverted

ACCOUNTS = [to_checksum_address(f"0x{index + 0xa0:040x}") for index in range(10)]


class FakeLedgerClient(object):
    """
    In-memory stand-in for a Ganache node running GovToken (ERC20Votes),
    DaoGovernor (GovernorCountingSimple + GovernorVotes) and Dao.

    Every transaction is mined in its own block. Views are evaluated at the
    latest block, transactions at the block they are mined in.
    """

    provider_uri = "http://fake-node:8545"

    def __init__(self, voting_delay: int = 1, voting_period: int = 5, quorum: int = 1):
        self.voting_delay = voting_delay
        self.voting_period = voting_period
        self.quorum = quorum
        self.block_number = 0
        self.connected = False
        self.closed = False
        self.fail_deploy = set()
        self.contracts: Dict[str, Dict[str, Any]] = {}
        self.calldata_registry: Dict[str, Tuple[str, str, tuple]] = {}
        self.transactions: List[Tuple[str, str]] = []

    async def connect(self) -> int:
        self.connected = True
        return 1337

    async def close(self) -> None:
        self.closed = True

    async def get_accounts(self) -> List[str]:
        return list(ACCOUNTS)

    async def get_block_number(self) -> int:
        return self.block_number

    async def mine_blocks(self, count: int) -> int:
        self.block_number += count
        return self.block_number

    async def deploy(self, artifact: ContractArtifact, *constructor_args, sender: str) -> DeployedContract:
        if artifact.name in self.fail_deploy:
            raise DeploymentRejected(artifact.name, "out of gas")

        self.block_number += 1
        address = to_checksum_address(f"0x{len(self.contracts) + 0xc0:040x}")
        state: Dict[str, Any] = {"name": artifact.name}
        if artifact.name == "GovToken":
            state.update(balances={}, delegates={}, checkpoints={})
        elif artifact.name == "DaoGovernor":
            state.update(token=constructor_args[0], proposals={})
        elif artifact.name == "Dao":
            state.update(governor=constructor_args[0], value=0)
        self.contracts[address] = state
        return DeployedContract(name=artifact.name, address=address, abi=artifact.abi, block_number=self.block_number)

    async def transact(self, contract: DeployedContract, function_name: str, *args, sender: str) -> TransactionConfirmation:
        handler = getattr(self, f"_tx_{contract.name}_{function_name}")
        block = self.block_number + 1
        events = handler(contract.address, sender, block, *args)
        self.block_number = block
        self.transactions.append((contract.name, function_name))
        return TransactionConfirmation(
            function_name=function_name,
            transaction_hash="0x" + keccak(text=f"{block}{function_name}").hex(),
            block_number=block,
            from_address=sender,
            to_address=contract.address,
            status=1,
            events=events,
        )

    async def call(self, contract: DeployedContract, function_name: str, *args) -> Any:
        handler = getattr(self, f"_view_{contract.name}_{function_name}")
        return handler(contract.address, *args)

    def encode_call(self, contract: DeployedContract, function_name: str, *args) -> str:
        calldata = "0x" + keccak(text=f"{contract.address}.{function_name}{args}").hex()
        self.calldata_registry[calldata] = (contract.address, function_name, args)
        return calldata

    @staticmethod
    def keccak_text(text: str) -> bytes:
        return keccak(text=text)

    # --- GovToken ---

    def _move_votes(self, token: Dict[str, Any], source: str, destination: str, amount: int, block: int) -> None:
        for delegate, delta in ((source, -amount), (destination, amount)):
            if delegate in (None, ZERO_ADDRESS):
                continue
            history = token["checkpoints"].setdefault(delegate, [])
            current = history[-1][1] if history else 0
            history.append((block, current + delta))

    @staticmethod
    def _past_votes(token: Dict[str, Any], account: str, block: int) -> int:
        votes = 0
        for checkpoint_block, checkpoint_votes in token["checkpoints"].get(account, []):
            if checkpoint_block <= block:
                votes = checkpoint_votes
        return votes

    def _tx_GovToken_mint(self, address, sender, block, to, amount):
        token = self.contracts[address]
        token["balances"][to] = token["balances"].get(to, 0) + amount
        self._move_votes(token, None, token["delegates"].get(to), amount, block)
        return [DecodedEvent(name="Transfer", address=address, log_index=0, args={"from": ZERO_ADDRESS, "to": to, "value": amount})]

    def _tx_GovToken_delegate(self, address, sender, block, delegatee):
        token = self.contracts[address]
        previous = token["delegates"].get(sender)
        token["delegates"][sender] = delegatee
        self._move_votes(token, previous, delegatee, token["balances"].get(sender, 0), block)
        return [
            DecodedEvent(
                name="DelegateChanged",
                address=address,
                log_index=0,
                args={"delegator": sender, "fromDelegate": previous or ZERO_ADDRESS, "toDelegate": delegatee},
            )
        ]

    def _view_GovToken_delegates(self, address, account):
        return self.contracts[address]["delegates"].get(account, ZERO_ADDRESS)

    def _view_GovToken_getVotes(self, address, account):
        return self._past_votes(self.contracts[address], account, self.block_number)

    def _view_GovToken_balanceOf(self, address, account):
        return self.contracts[address]["balances"].get(account, 0)

    # --- DaoGovernor ---

    def _proposal(self, address, proposal_id) -> Dict[str, Any]:
        proposal = self.contracts[address]["proposals"].get(proposal_id)
        if proposal is None:
            raise TransactionReverted("state", "Governor: unknown proposal id")
        return proposal

    def _state_at(self, address, proposal_id, block) -> ProposalState:
        proposal = self._proposal(address, proposal_id)
        if proposal["executed"]:
            return ProposalState.EXECUTED
        if block <= proposal["snapshot"]:
            return ProposalState.PENDING
        if block <= proposal["deadline"]:
            return ProposalState.ACTIVE
        if proposal["for"] > proposal["against"] and proposal["for"] + proposal["abstain"] >= self.quorum:
            return ProposalState.SUCCEEDED
        return ProposalState.DEFEATED

    def _tx_DaoGovernor_propose(self, address, sender, block, targets, values, calldatas, description):
        proposal_id = compute_proposal_id(targets, values, calldatas, keccak(text=description))
        proposals = self.contracts[address]["proposals"]
        if proposal_id in proposals:
            raise TransactionReverted("propose", "Governor: proposal already exists")

        snapshot = block + self.voting_delay
        proposals[proposal_id] = {
            "snapshot": snapshot,
            "deadline": snapshot + self.voting_period,
            "for": 0,
            "against": 0,
            "abstain": 0,
            "voters": set(),
            "executed": False,
        }
        return [
            DecodedEvent(
                name="ProposalCreated",
                address=address,
                log_index=0,
                args={
                    "proposalId": proposal_id,
                    "proposer": sender,
                    "targets": targets,
                    "values": values,
                    "calldatas": calldatas,
                    "startBlock": snapshot,
                    "endBlock": snapshot + self.voting_period,
                    "description": description,
                },
            )
        ]

    def _tx_DaoGovernor_castVote(self, address, sender, block, proposal_id, support):
        proposal = self._proposal(address, proposal_id)
        if self._state_at(address, proposal_id, block) != ProposalState.ACTIVE:
            raise TransactionReverted("castVote", "Governor: vote not currently active")
        if sender in proposal["voters"]:
            raise TransactionReverted("castVote", "GovernorVotingSimple: vote already cast")

        token = self.contracts[self.contracts[address]["token"]]
        weight = self._past_votes(token, sender, proposal["snapshot"])
        proposal["voters"].add(sender)
        proposal[{0: "against", 1: "for", 2: "abstain"}[support]] += weight
        return [
            DecodedEvent(
                name="VoteCast",
                address=address,
                log_index=0,
                args={"voter": sender, "proposalId": proposal_id, "support": support, "weight": weight, "reason": ""},
            )
        ]

    def _tx_DaoGovernor_execute(self, address, sender, block, targets, values, calldatas, description_hash):
        proposal_id = compute_proposal_id(targets, values, calldatas, description_hash)
        if proposal_id not in self.contracts[address]["proposals"]:
            raise TransactionReverted("execute", "Governor: unknown proposal id")
        if not self._state_at(address, proposal_id, block).is_executable:
            raise TransactionReverted("execute", "Governor: proposal not successful")

        for calldata in calldatas:
            target, function_name, call_args = self.calldata_registry[calldata]
            dao = self.contracts[target]
            if dao["governor"] != address:
                raise TransactionReverted("execute", "Governor: call reverted without message")
            dao["value"] = call_args[0]

        self.contracts[address]["proposals"][proposal_id]["executed"] = True
        return [DecodedEvent(name="ProposalExecuted", address=address, log_index=0, args={"proposalId": proposal_id})]

    def _view_DaoGovernor_state(self, address, proposal_id):
        return int(self._state_at(address, proposal_id, self.block_number))

    def _view_DaoGovernor_proposalSnapshot(self, address, proposal_id):
        return self._proposal(address, proposal_id)["snapshot"]

    def _view_DaoGovernor_proposalDeadline(self, address, proposal_id):
        return self._proposal(address, proposal_id)["deadline"]

    def _view_DaoGovernor_proposalVotes(self, address, proposal_id):
        proposal = self._proposal(address, proposal_id)
        return proposal["against"], proposal["for"], proposal["abstain"]

    def _view_DaoGovernor_getVotes(self, address, account, block_number):
        token = self.contracts[self.contracts[address]["token"]]
        return self._past_votes(token, account, block_number)

    # --- Dao ---

    def _view_Dao_daoVal(self, address):
        return self.contracts[address]["value"]


def _write_truffle_artifact(directory, name, abi):
    artifact = {
        "contractName": name,
        "abi": abi,
        "bytecode": "0x6080604052348015600f57600080fd5b50",
        "networks": {},
    }
    (directory / f"{name}.json").write_text(json.dumps(artifact))


@pytest.fixture
def artifacts_dir(tmp_path):
    directory = tmp_path / "build" / "contracts"
    directory.mkdir(parents=True)
    _write_truffle_artifact(directory, "GovToken", GOV_TOKEN_ABI)
    _write_truffle_artifact(directory, "DaoGovernor", GOVERNOR_ABI)
    _write_truffle_artifact(directory, "Dao", DAO_ABI)
    return directory


@pytest.fixture
def fake_ledger():
    return FakeLedgerClient()


@pytest.fixture
def parameters():
    return SimulationParameters()


@pytest.fixture
def context(fake_ledger, artifacts_dir, parameters):
    return SimulationContext(fake_ledger, ArtifactService(artifacts_dir), parameters)


@pytest.fixture
def orchestrator(context):
    return ProposalLifecycleOrchestrator(context)
