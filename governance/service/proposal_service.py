from typing import List, Sequence, Union

from eth_abi import encode
from eth_utils import keccak, to_bytes

from constants.constants import PROPOSAL_CREATED_EVENT
from governance.models.confirmation import TransactionConfirmation
from governance.models.proposal import Proposal
from utils.exceptions import EventNotFound
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger
from utils.validation_utils import validate_proposal_actions

logger = get_logger("Proposal Service")

PROPOSAL_ID_ABI_TYPES = ["address[]", "uint256[]", "bytes[]", "bytes32"]


def hash_description(description: str) -> bytes:
    return keccak(text=description)


def _calldata_to_bytes(calldata: Union[str, bytes]) -> bytes:
    if isinstance(calldata, (bytes, bytearray)):
        return bytes(calldata)
    return to_bytes(hexstr=calldata)


def compute_proposal_id(
    targets: Sequence[str],
    values: Sequence[int],
    calldatas: Sequence[Union[str, bytes]],
    description_hash: bytes,
) -> int:
    """
    Off-chain equivalent of OpenZeppelin's Governor.hashProposal:
    uint256(keccak256(abi.encode(targets, values, calldatas, descriptionHash))).
    """
    validate_proposal_actions(targets, values, calldatas)
    encoded = encode(
        PROPOSAL_ID_ABI_TYPES,
        [
            [to_normalized_address(target) for target in targets],
            list(values),
            [_calldata_to_bytes(calldata) for calldata in calldatas],
            description_hash,
        ],
    )
    return int.from_bytes(keccak(encoded), byteorder="big")


def build_proposal(targets: List[str], values: List[int], calldatas: List[str], description: str) -> Proposal:
    validate_proposal_actions(targets, values, calldatas)
    return Proposal(targets=targets, values=values, calldatas=calldatas, description=description)


def extract_proposal_id(confirmation: TransactionConfirmation) -> int:
    """
    Reads the proposal id from the ProposalCreated event of a propose()
    confirmation, looked up by event name.
    """
    created = confirmation.events_named(PROPOSAL_CREATED_EVENT)
    if not created:
        emitted = [event.name for event in confirmation.events]
        raise EventNotFound(
            f"{PROPOSAL_CREATED_EVENT} not found in transaction {confirmation.transaction_hash}, emitted: {emitted}"
        )

    if len(created) > 1:
        logger.warning(
            f"Transaction {confirmation.transaction_hash} emitted {len(created)} {PROPOSAL_CREATED_EVENT} events, using the first"
        )

    return int(created[0].args["proposalId"])
