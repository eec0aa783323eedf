# src/services/build_runner.py

"""Run the fetch → normalize → render → persist pipeline for all feeds."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from src.config.logging_config import feed_logger
from src.config.settings import Settings
from src.models.errors import FeedProcessingError
from src.models.feed_config import FeedConfig, SiteConfig
from src.parsers.feed_normalizer import normalize
from src.services.feed_fetcher import FeedFetcher
from src.services.variant_orchestrator import build_feed
from src.storage.file_manager import FileManager

logger = logging.getLogger("catalog_feeds.runner")


@dataclass
class FeedOutcome:
    """What happened to one feed during a build."""

    slug: str
    title: str
    product_count: int = 0
    written: list[Path] = field(
        default_factory=lambda: list[Path]()
    )
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


@dataclass
class BuildResult:
    """Container for a completed build across all configured feeds."""

    outcomes: list[FeedOutcome] = field(
        default_factory=lambda: list[FeedOutcome]()
    )
    index_path: Path | None = None

    @property
    def errors(self) -> list[str]:
        """Per-feed error messages, each prefixed with the feed slug."""
        return [
            f"[{o.slug}] {o.error}" for o in self.outcomes if o.error
        ]

    @property
    def succeeded(self) -> list[FeedOutcome]:
        return [o for o in self.outcomes if o.ok]


class BuildRunner:
    """Coordinates fetching, rendering and writing for every feed."""

    def __init__(
        self,
        fetcher: FeedFetcher | None = None,
        file_manager: FileManager | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        self.settings = Settings()
        self.fetcher = fetcher or FeedFetcher()
        self.file_manager = file_manager or FileManager()
        self._max_concurrency = max(
            1, max_concurrency or self.settings.MAX_CONCURRENT_FEEDS
        )

    def process_feed(
        self,
        feed: FeedConfig,
        site: SiteConfig,
        now: datetime,
    ) -> FeedOutcome:
        """Fetch, normalize, render and write a single feed.

        Files are written only after the whole feed has rendered.  If a
        write fails, the files already written for this feed are removed
        before the error propagates.

        Raises:
            FeedProcessingError: the feed could not be fetched or parsed.
        """
        log = feed_logger("runner", feed.slug)
        body = self.fetcher.fetch(feed.source, slug=feed.slug)
        try:
            products = normalize(body)
        except FeedProcessingError as exc:
            exc.slug = exc.slug or feed.slug
            raise

        build = build_feed(feed, site, products, now=now)
        outcome = FeedOutcome(
            slug=feed.slug,
            title=feed.title,
            product_count=len(products),
        )
        try:
            outcome.written.append(
                self.file_manager.save_json(feed.slug, build.json_export)
            )
            for width, document in build.rendered_variants.items():
                outcome.written.append(
                    self.file_manager.save_rss(
                        build.filename_for(width), document
                    )
                )
        except Exception:
            log.warning(
                "Write failed, removing %d partial files",
                len(outcome.written),
            )
            self.file_manager.remove(outcome.written)
            raise

        log.info(
            "Built %d products into %d files",
            len(products),
            len(outcome.written),
        )
        return outcome

    async def run(
        self,
        feeds: list[FeedConfig],
        site: SiteConfig,
    ) -> BuildResult:
        """Process all feeds with bounded concurrency.

        Outcomes are returned in configuration order.  A failing feed is
        logged and recorded; it never stops the others.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)
        now = datetime.now(timezone.utc)

        async def run_one(feed: FeedConfig) -> FeedOutcome:
            async with semaphore:
                try:
                    return await asyncio.to_thread(
                        self.process_feed, feed, site, now
                    )
                except FeedProcessingError as exc:
                    feed_logger("runner", feed.slug).error(
                        "Feed skipped: %s", exc.detail
                    )
                    return FeedOutcome(
                        slug=feed.slug,
                        title=feed.title,
                        error=exc.detail,
                    )
                except Exception as exc:
                    feed_logger("runner", feed.slug).error(
                        "Unexpected error, feed skipped: %s",
                        exc,
                        exc_info=True,
                    )
                    return FeedOutcome(
                        slug=feed.slug,
                        title=feed.title,
                        error=f"{type(exc).__name__}: {exc}",
                    )

        outcomes = await asyncio.gather(
            *(run_one(feed) for feed in feeds)
        )
        result = BuildResult(outcomes=list(outcomes))
        result.index_path = self.file_manager.save_index(feeds)

        logger.info(
            "Build finished: %d/%d feeds succeeded",
            len(result.succeeded),
            len(feeds),
        )
        return result
