import asyncio

import click

from config.settings import settings
from constants.constants import GOVERNOR_CONTRACT_NAME
from governance.enums.proposal_state import ProposalState
from governance.ledger_client import LedgerClient
from governance.service.artifact_service import ArtifactService
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Get Proposal State CLI")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-g", "--governor-address", required=True, type=str, help="Address of a deployed Governor contract.")
@click.option("-i", "--proposal-id", required=True, type=int, help="Proposal id as emitted in ProposalCreated.")
@click.option("-p", "--provider-uri", default=settings.ledger.provider_uri, show_default=True, type=str, help="JSON-RPC URI of the node.")
@click.option("-a", "--artifacts-dir", default=settings.ledger.artifacts_dir, show_default=True, type=str, help="Build artifacts, for the Governor ABI.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def get_proposal_state(governor_address: str, proposal_id: int, provider_uri: str, artifacts_dir: str, log_file: str):
    """Prints the lifecycle state of a proposal"""
    configure_logging(log_file)

    try:
        state = asyncio.run(_read_state(provider_uri, artifacts_dir, governor_address, proposal_id))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return
    except Exception as e:
        logger.exception("Could not read proposal state:")
        raise e

    click.echo(state.label)


async def _read_state(provider_uri: str, artifacts_dir: str, governor_address: str, proposal_id: int) -> ProposalState:
    ledger = LedgerClient(provider_uri, rpc_timeout=settings.ledger.rpc_timeout)
    abi = ArtifactService(artifacts_dir).load_abi(GOVERNOR_CONTRACT_NAME)
    try:
        await ledger.connect()
        governor = ledger.attach(GOVERNOR_CONTRACT_NAME, governor_address, abi)
        return ProposalState(await ledger.call(governor, "state", proposal_id))
    finally:
        await ledger.close()
