# tests/test_logging_config.py

"""Tests for the per-build logging configuration."""

import logging
import unittest

from src.config.logging_config import (
    NO_FEED,
    ROOT_LOGGER_NAME,
    FeedLoggerAdapter,
    feed_logger,
    setup_logging,
)


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Start every test with a bare catalog_feeds logger."""
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._clear(root_logger)
        self.addCleanup(self._clear, root_logger)

    @staticmethod
    def _clear(root_logger: logging.Logger) -> None:
        for handler in list(root_logger.handlers):
            handler.close()
            root_logger.removeHandler(handler)

    def test_setup_creates_log_file(self) -> None:
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches build_YYYYMMDD_HHMMSS.log."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^build_\d{8}_\d{6}\.log$")

    def test_file_and_console_handlers(self) -> None:
        setup_logging()
        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        file_handlers = [
            h for h in handlers if isinstance(h, logging.FileHandler)
        ]
        stream_handlers = [
            h
            for h in handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(file_handlers[0].level, logging.DEBUG)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        setup_logging()
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        count_before = len(root_logger.handlers)
        setup_logging()
        self.assertEqual(len(root_logger.handlers), count_before)

    def test_module_loggers_propagate_to_file(self) -> None:
        """Child loggers land in the per-run file."""
        log_path = setup_logging()
        logging.getLogger("catalog_feeds.parser").info("parsed 3 products")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        self.assertIn(
            "parsed 3 products", log_path.read_text(encoding="utf-8")
        )

    def test_log_file_inside_logs_dir(self) -> None:
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")

    def test_feed_column_in_log_file(self) -> None:
        """Records carry the feed slug, or a dash outside any feed."""
        log_path = setup_logging()
        feed_logger("runner", "aanbiedingen").info("built 7 products")
        logging.getLogger("catalog_feeds.runner").info("build finished")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        lines = log_path.read_text(encoding="utf-8").splitlines()
        built = next(line for line in lines if "built 7 products" in line)
        finished = next(line for line in lines if "build finished" in line)
        self.assertIn("| aanbiedingen |", built)
        self.assertIn(f"| {NO_FEED} |", finished)


class TestFeedLogger(unittest.TestCase):
    """Verify the per-feed logger adapter."""

    def test_logger_name_under_root(self) -> None:
        log = feed_logger("fetcher", "deals")
        self.assertIsInstance(log, FeedLoggerAdapter)
        self.assertEqual(log.logger.name, f"{ROOT_LOGGER_NAME}.fetcher")

    def test_record_carries_slug(self) -> None:
        with self.assertLogs(f"{ROOT_LOGGER_NAME}.runner", "INFO") as cm:
            feed_logger("runner", "pre-orders").warning("write failed")
        record = cm.records[0]
        self.assertEqual(record.feed, "pre-orders")  # type: ignore[attr-defined]
        self.assertEqual(record.getMessage(), "write failed")

    def test_empty_slug_uses_placeholder(self) -> None:
        with self.assertLogs(f"{ROOT_LOGGER_NAME}.fetcher", "INFO") as cm:
            feed_logger("fetcher", "").info("Fetching")
        self.assertEqual(cm.records[0].feed, NO_FEED)  # type: ignore[attr-defined]


if __name__ == "__main__":
    unittest.main()
