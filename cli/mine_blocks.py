import asyncio

import click

from config.settings import settings
from governance.ledger_client import LedgerClient
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Mine Blocks CLI")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-n", "--blocks", required=True, type=click.IntRange(min=0), help="Number of empty blocks to mine.")
@click.option("-p", "--provider-uri", default=settings.ledger.provider_uri, show_default=True, type=str, help="JSON-RPC URI of a local test node.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def mine_blocks(blocks: int, provider_uri: str, log_file: str):
    """Advances a local test node by N blocks (evm_mine)"""
    configure_logging(log_file)

    try:
        block_number = asyncio.run(_mine(provider_uri, blocks))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return
    except Exception as e:
        logger.exception("Could not mine blocks:")
        raise e

    click.echo(block_number)


async def _mine(provider_uri: str, blocks: int) -> int:
    ledger = LedgerClient(provider_uri, rpc_timeout=settings.ledger.rpc_timeout)
    try:
        await ledger.connect()
        return await ledger.mine_blocks(blocks)
    finally:
        await ledger.close()
