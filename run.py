try:
    import uvloop
except ImportError:
    uvloop = None

from cli import cli
from utils.logger_utils import configure_logging, get_logger

configure_logging()
logger = get_logger("Governance Simulation Entry Point")


def main():
    if uvloop:
        uvloop.install()
        logger.debug("Running on the uvloop event loop.")
    else:
        logger.debug("uvloop not available, running on the default asyncio event loop.")

    cli()


if __name__ == "__main__":
    main()
