# main.py

"""Entry point for the catalog_feeds build command."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("catalog_feeds.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (the build takes no options)."""
    return argparse.ArgumentParser(
        prog="catalog_feeds",
        description=(
            "Fetch the configured product feeds and render their JSON "
            "exports and RSS row-width variants."
        ),
        epilog=(
            "Feeds are read from feeds.config.json (override with "
            "CATALOG_FEEDS_CONFIG); output goes to public/ (override "
            "with CATALOG_FEEDS_OUTPUT)."
        ),
    )


def main() -> None:
    """Parse arguments, run the build and exit with its status code."""
    _build_parser().parse_args()

    log_file = setup_logging()
    logger.info("catalog_feeds starting, log file: %s", log_file)

    from src.cli.runner import cli_build

    try:
        exit_code = asyncio.run(cli_build())
    except Exception:
        logger.critical("Fatal error during build", exc_info=True)
        exit_code = 1
    finally:
        logger.info("catalog_feeds shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
