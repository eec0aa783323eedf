# src/models/feed_config.py

"""Static configuration models for feeds and site-wide defaults."""

from dataclasses import dataclass, field

from src.config.settings import Settings


@dataclass(frozen=True)
class SiteConfig:
    """Channel-level fallbacks used when a feed omits them."""

    title: str
    link: str
    description: str
    language: str = Settings.DEFAULT_LANGUAGE


@dataclass(frozen=True)
class FeedConfig:
    """One named vendor feed and the row widths it is rendered at."""

    slug: str
    title: str
    source: str
    default_per_row: int = Settings.DEFAULT_PER_ROW
    row_variants: tuple[int, ...] = field(default_factory=tuple)
