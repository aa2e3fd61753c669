from typing import List, Sequence


def validate_block_count(block_count: int) -> None:
    """
    Validate the number of blocks to advance the ledger by.

    Args:
        block_count: Number of blocks to mine, must be >= 0

    Raises:
        ValueError: If the block count is negative
    """
    if block_count < 0:
        raise ValueError(f"Block count must be greater than or equal to 0, got {block_count}")


def validate_proposal_actions(targets: Sequence[str], values: Sequence[int], calldatas: Sequence) -> None:
    """
    Validate the (targets, values, calldatas) triple of a proposal.

    Raises:
        ValueError: If the triple is empty or its lists differ in length
    """
    if not targets:
        raise ValueError("A proposal needs at least one target")

    if not (len(targets) == len(values) == len(calldatas)):
        raise ValueError(
            f"targets ({len(targets)}), values ({len(values)}) and calldatas ({len(calldatas)}) must have the same length"
        )

    for value in values:
        if value < 0:
            raise ValueError(f"Call value must be greater than or equal to 0, got {value}")


def validate_signer_indices(indices: List[int], available: int) -> None:
    """
    Validate signer indices against the number of accounts the node exposes.

    Raises:
        ValueError: If an index is out of range or repeated
    """
    if len(set(indices)) != len(indices):
        raise ValueError(f"Signer indices must be distinct, got {indices}")

    for index in indices:
        if index < 0 or index >= available:
            raise ValueError(f"Signer index {index} out of range, node exposes {available} accounts")
