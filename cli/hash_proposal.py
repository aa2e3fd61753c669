from typing import List

import click
from web3 import Web3

from abi.dao_abi import DAO_ABI
from config.settings import settings
from constants.constants import DAO_UPDATE_FUNCTION
from governance.service.proposal_service import compute_proposal_id, hash_description
from utils.formatter_utils import to_hex_str


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-t", "--target", "targets", required=True, multiple=True, type=str, help="Target contract address. Repeat for several actions.")
@click.option("-v", "--value", "values", multiple=True, type=int, help="Wei sent with each action. Defaults to 0 for every target.")
@click.option(
    "-c",
    "--calldata",
    "calldatas",
    multiple=True,
    type=str,
    help="Hex call data per target. Defaults to updateValue(--proposal-value) for every target.",
)
@click.option("--proposal-value", default=settings.simulation.proposal_value, show_default=True, type=int, help="Value used for the default updateValue call data.")
@click.option("-d", "--description", default=settings.simulation.proposal_description, show_default=True, type=str, help="Proposal description.")
def hash_proposal(targets: List[str], values: List[int], calldatas: List[str], proposal_value: int, description: str):
    """Computes a proposal id off-chain, the way Governor.hashProposal does"""
    targets = list(targets)
    values = list(values) or [0] * len(targets)
    if not calldatas:
        dao = Web3().eth.contract(abi=DAO_ABI)
        calldatas = [to_hex_str(dao.encode_abi(DAO_UPDATE_FUNCTION, args=[proposal_value]))] * len(targets)

    try:
        proposal_id = compute_proposal_id(targets, values, list(calldatas), hash_description(description))
    except ValueError as e:
        raise click.UsageError(str(e))

    click.echo(proposal_id)
