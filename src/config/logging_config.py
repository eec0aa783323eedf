# src/config/logging_config.py

"""Per-build timestamped logging configuration for catalog_feeds.

Every build run creates its own log file inside ``logs/`` named after the
launch time (e.g. ``logs/build_20260214_153045.log``).  All
``catalog_feeds.*`` loggers share that handler, so a failed feed can be
traced from fetch to render in a single file.
"""

import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings

ROOT_LOGGER_NAME = "catalog_feeds"

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(feed)s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(feed)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Placeholder for records logged outside any single feed
NO_FEED = "-"


class FeedFieldFilter(logging.Filter):
    """Give every record a ``feed`` attribute so the formats can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "feed", None):
            record.feed = NO_FEED
        return True


def setup_logging() -> Path:
    """Initialise the ``catalog_feeds`` logger for the current build.

    Returns:
        The :class:`~pathlib.Path` of the log file for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"build_{timestamp}.log"

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, re-entrant builds) keep the first handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(FeedFieldFilter())
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    # Per-feed failures are WARNING/ERROR, so they reach the terminal
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.addFilter(FeedFieldFilter())
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file


class FeedLoggerAdapter(logging.LoggerAdapter):
    """Tag every record with the feed slug as ``record.feed``.

    Feeds are built concurrently and interleave in the per-run file; the
    ``feed`` column keeps each line attributable.
    """

    def process(
        self, msg: object, kwargs: MutableMapping[str, Any],
    ) -> tuple[object, MutableMapping[str, Any]]:
        slug = (self.extra or {}).get("feed") or NO_FEED
        kwargs["extra"] = {**kwargs.get("extra", {}), "feed": slug}
        return msg, kwargs


def feed_logger(name: str, slug: str) -> FeedLoggerAdapter:
    """Return ``catalog_feeds.<name>`` bound to one feed slug."""
    return FeedLoggerAdapter(
        logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"), {"feed": slug}
    )
