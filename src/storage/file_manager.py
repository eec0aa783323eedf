# src/storage/file_manager.py

"""Writes JSON exports, RSS variants and the feed index to disk."""

import html
import json
import logging
from pathlib import Path

from src.config.settings import Settings
from src.models.feed_config import FeedConfig
from src.services.variant_orchestrator import (
    effective_variants,
    variant_filename,
)

logger = logging.getLogger("catalog_feeds.storage")

API_DIR_NAME = "api"
RSS_DIR_NAME = "rss"
INDEX_NAME = "index.html"


class FileManager:
    """Handles saving rendered feeds to the public output directory."""

    def __init__(self, output_dir: Path | None = None) -> None:
        self.output_dir: Path = output_dir or Settings.OUTPUT_DIR
        self.api_dir = self.output_dir / API_DIR_NAME
        self.rss_dir = self.output_dir / RSS_DIR_NAME
        self.api_dir.mkdir(parents=True, exist_ok=True)
        self.rss_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "FileManager initialised, output_dir=%s", self.output_dir
        )

    def save_json(self, slug: str, export: dict[str, object]) -> Path:
        """Write a feed's JSON export to ``api/{slug}.json``."""
        filepath = self.api_dir / f"{slug}.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(export, f, ensure_ascii=False, indent=2)
            f.write("\n")

        logger.info(
            "Saved %s products for '%s' to %s",
            export.get("count"),
            slug,
            filepath,
        )
        return filepath

    def save_rss(self, filename: str, document: bytes) -> Path:
        """Write an already-encoded RSS document to ``rss/{filename}``."""
        filepath = self.rss_dir / filename
        filepath.write_bytes(document)
        logger.info("Saved RSS %s (%d bytes)", filepath, len(document))
        return filepath

    def remove(self, paths: list[Path]) -> None:
        """Delete files written earlier in a feed build that failed."""
        for filepath in paths:
            filepath.unlink(missing_ok=True)
            logger.info("Removed partial output %s", filepath)

    def save_index(self, feeds: list[FeedConfig]) -> Path:
        """Write ``index.html`` linking every feed's RSS variants and JSON."""
        entries: list[str] = []
        for feed in feeds:
            links = [
                (
                    f'<a href="{RSS_DIR_NAME}/'
                    f'{html.escape(variant_filename(feed.slug, w, feed.default_per_row))}'
                    f'.xml">RSS {w} per row</a>'
                )
                for w in effective_variants(feed)
            ]
            links.append(
                f'<a href="{API_DIR_NAME}/{html.escape(feed.slug)}.json">JSON</a>'
            )
            entries.append(
                f"    <li>{html.escape(feed.title)}: "
                f"{' | '.join(links)}</li>"
            )

        page = (
            "<!DOCTYPE html>\n"
            '<html lang="nl">\n'
            '<head><meta charset="utf-8"><title>Product feeds</title></head>\n'
            "<body>\n"
            "  <h1>Product feeds</h1>\n"
            "  <ul>\n"
            f"{chr(10).join(entries)}\n"
            "  </ul>\n"
            "</body>\n"
            "</html>\n"
        )
        filepath = self.output_dir / INDEX_NAME
        filepath.write_text(page, encoding="utf-8")
        logger.info("Saved index of %d feeds to %s", len(feeds), filepath)
        return filepath
