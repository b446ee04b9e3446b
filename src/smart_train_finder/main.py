"""Main entry point: keeps the timetable cache warm until interrupted."""

import asyncio
import logging
import sys

import aiohttp

from smart_train_finder.adapters.config import AppConfig, CorridorConfigurationLoader
from smart_train_finder.bootstrap import create_services

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    try:
        corridor = CorridorConfigurationLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid corridor configuration: {e}")
        sys.exit(1)

    logger.info(
        f"Serving corridor {corridor.origin.name} <-> {corridor.destination.name} "
        f"via {len(corridor.transfer_stations)} transfer station(s)"
    )

    async with aiohttp.ClientSession() as session:
        services = create_services(config, corridor, session)
        await services.cache_warmer.start()
        try:
            # Runs until cancelled
            await asyncio.Event().wait()
        finally:
            await services.cache_warmer.stop()


def cli_main() -> None:
    """Synchronous entry point for the warmer command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    cli_main()
