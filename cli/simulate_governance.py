import asyncio
from typing import List, Optional

import click

from config.settings import settings
from governance.ledger_client import LedgerClient
from governance.models.report import SimulationReport
from governance.models.simulation import SimulationParameters
from governance.orchestrator import ProposalLifecycleOrchestrator
from governance.service.artifact_service import ArtifactService
from governance.simulation_context import SimulationContext
from utils.file_utils import write_text
from utils.formatter_utils import parse_index_list
from utils.logger_utils import configure_logging, get_logger
from utils.signal_utils import configure_signals

logger = get_logger("Simulate Governance")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-p",
    "--provider-uri",
    default=settings.ledger.provider_uri,
    show_default=True,
    type=str,
    help="JSON-RPC URI of a local test node (Ganache, Hardhat, Anvil). evm_mine must be available.",
)
@click.option(
    "-a",
    "--artifacts-dir",
    default=settings.ledger.artifacts_dir,
    show_default=True,
    type=str,
    help="Directory holding the compiled GovToken, DaoGovernor and Dao artifacts.",
)
@click.option("--mint-amount", default=settings.simulation.mint_amount, show_default=True, type=int, help="Tokens minted to each account.")
@click.option("--proposal-value", default=settings.simulation.proposal_value, show_default=True, type=int, help="Value the proposal writes to the DAO contract.")
@click.option(
    "-d",
    "--description",
    default=settings.simulation.proposal_description,
    show_default=True,
    type=str,
    help="Human-readable proposal description. Its keccak hash is passed to execute().",
)
@click.option(
    "--voting-delay-blocks",
    default=settings.simulation.voting_delay_blocks,
    show_default=True,
    type=int,
    help="Blocks to mine after proposing so the proposal becomes Active.",
)
@click.option(
    "--voting-period-blocks",
    default=settings.simulation.voting_period_blocks,
    show_default=True,
    type=int,
    help="Blocks to mine after voting so the voting period ends.",
)
@click.option("--owner-index", default=settings.simulation.owner_index, show_default=True, type=int, help="Signer index of the deployer/proposer.")
@click.option(
    "--voter-indices",
    default=settings.simulation.voter_indices,
    show_default=True,
    type=str,
    help="Comma-separated signer indices of the accounts voting For.",
)
@click.option("--rpc-timeout", default=settings.ledger.rpc_timeout, show_default=True, type=int, help="Timeout of a single RPC call, in seconds.")
@click.option("--receipt-timeout", default=settings.ledger.receipt_timeout, show_default=True, type=int, help="How long to wait for a transaction receipt, in seconds.")
@click.option("-o", "--output", default=None, type=str, help="Write the run report as JSON to this file ('-' for stdout).")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
@click.option("--log-level", default=settings.app.log_level, show_default=True, type=str, help="Logging level.")
def simulate_governance(
    provider_uri: str,
    artifacts_dir: str,
    mint_amount: int,
    proposal_value: int,
    description: str,
    voting_delay_blocks: int,
    voting_period_blocks: int,
    owner_index: int,
    voter_indices: str,
    rpc_timeout: int,
    receipt_timeout: int,
    output: Optional[str] = None,
    log_file: Optional[str] = None,
    log_level: str = "INFO",
):
    """Deploys the governance contracts and walks one proposal from creation to execution"""
    configure_logging(log_file, log_level)
    configure_signals()

    parameters = SimulationParameters(
        mint_amount=mint_amount,
        proposal_value=proposal_value,
        proposal_description=description,
        voting_delay_blocks=voting_delay_blocks,
        voting_period_blocks=voting_period_blocks,
        owner_index=owner_index,
        voter_indices=_parse_voter_indices(voter_indices),
    )

    logger.info(f"Starting governance simulation against {provider_uri}")

    try:
        ledger = LedgerClient(provider_uri, rpc_timeout=rpc_timeout, receipt_timeout=receipt_timeout)
        context = SimulationContext(ledger, ArtifactService(artifacts_dir), parameters)
        report = asyncio.run(ProposalLifecycleOrchestrator(context).run())
    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user. Contracts deployed so far stay on the node.")
        return
    except Exception as e:
        logger.exception("Governance simulation aborted:")
        raise e

    _write_report(report, output)
    logger.info(f"Simulation finished: {', '.join(report.completed_steps)}")


def _parse_voter_indices(voter_indices_str: str) -> List[int]:
    try:
        indices = parse_index_list(voter_indices_str)
    except ValueError:
        raise click.BadOptionUsage("--voter-indices", "Voter indices must be comma-separated integers.")

    if not indices:
        raise click.BadOptionUsage("--voter-indices", "At least one voter index must be specified.")
    return indices


def _write_report(report: SimulationReport, output: Optional[str]) -> None:
    if not output:
        return
    write_text(output, report.to_json())
    if output != "-":
        logger.info(f"Report written to {output}")
