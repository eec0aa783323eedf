# src/services/variant_orchestrator.py

"""Produce the JSON export and every row-width RSS variant for one feed."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.config.logging_config import feed_logger
from src.layout.row_chunker import RowPolicy, chunk
from src.models.feed_config import FeedConfig, SiteConfig
from src.models.product import Product
from src.renderers.feed_renderer import render_feed


def effective_variants(feed: FeedConfig) -> list[int]:
    """Configured widths, each coerced to >= 1 and deduplicated in order.

    The default width is prepended when the configuration omits it.
    """
    default = max(1, feed.default_per_row)
    widths: list[int] = []
    for width in feed.row_variants:
        width = max(1, int(width))
        if width not in widths:
            widths.append(width)
    if default not in widths:
        widths.insert(0, default)
    return widths


def variant_filename(slug: str, width: int, default_per_row: int) -> str:
    """File stem for a variant: ``slug`` for the default width, else ``slug-r{width}``."""
    if width == default_per_row:
        return slug
    return f"{slug}-r{width}"


def build_json_export(
    feed: FeedConfig,
    products: list[Product],
    generated_at: datetime,
) -> dict[str, object]:
    """The width-independent JSON export of the full product list."""
    return {
        "title": feed.title,
        "source": feed.source,
        "generatedAt": generated_at.isoformat(),
        "count": len(products),
        "products": [p.to_dict() for p in products],
    }


@dataclass
class FeedBuild:
    """Everything rendered for one feed in one run."""

    feed: FeedConfig
    json_export: dict[str, object]
    rendered_variants: dict[int, bytes] = field(
        default_factory=lambda: dict[int, bytes]()
    )

    def filename_for(self, width: int) -> str:
        """RSS file name for a rendered width."""
        stem = variant_filename(
            self.feed.slug, width, self.feed.default_per_row
        )
        return f"{stem}.xml"


def build_feed(
    feed: FeedConfig,
    site: SiteConfig,
    products: list[Product],
    now: datetime | None = None,
    policies: dict[int, RowPolicy] | None = None,
) -> FeedBuild:
    """Render the JSON export and one RSS document per effective width."""
    moment = now or datetime.now(timezone.utc)
    result = FeedBuild(
        feed=feed,
        json_export=build_json_export(feed, products, moment),
    )
    log = feed_logger("variants", feed.slug)
    for width in effective_variants(feed):
        rows = chunk(products, width, policies)
        result.rendered_variants[width] = render_feed(
            site, feed.title, rows, width, now=moment
        )
        log.info(
            "width %d → %s (%d items)",
            width,
            result.filename_for(width),
            len(rows),
        )
    return result
