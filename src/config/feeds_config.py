# src/config/feeds_config.py

"""Load and validate ``feeds.config.json``."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.errors import ConfigError
from src.models.feed_config import FeedConfig, SiteConfig

logger = logging.getLogger("catalog_feeds.config")

_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def _require_str(
    raw: dict[str, Any], key: str, where: str,
) -> str:
    """Return a non-empty stripped string field or raise ConfigError."""
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        msg = f"{where}: '{key}' must be a non-empty string"
        raise ConfigError(msg)
    return value.strip()


def _positive_int(value: Any, where: str) -> int:
    """Validate a row width (bools are rejected even though they are ints)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{where}: row width must be a positive integer, got {value!r}"
        raise ConfigError(msg)
    return value


def parse_site(raw: Any) -> SiteConfig:
    """Build a SiteConfig from the ``site`` section."""
    if not isinstance(raw, dict):
        msg = "'site' section must be an object"
        raise ConfigError(msg)
    language = raw.get("language") or Settings.DEFAULT_LANGUAGE
    return SiteConfig(
        title=_require_str(raw, "title", "site"),
        link=_require_str(raw, "link", "site"),
        description=str(raw.get("description") or "").strip(),
        language=str(language),
    )


def parse_feed(raw: Any, index: int | str) -> FeedConfig:
    """Build a FeedConfig from one entry of the ``feeds`` section.

    The fetch URL may be given as ``url`` or ``source``.
    """
    where = f"feeds[{index}]"
    if not isinstance(raw, dict):
        msg = f"{where} must be an object"
        raise ConfigError(msg)

    slug = _require_str(raw, "slug", where)
    if not _SLUG_RE.match(slug):
        msg = f"{where}: slug '{slug}' is not filesystem-safe"
        raise ConfigError(msg)

    source_key = "url" if "url" in raw else "source"
    source = _require_str(raw, source_key, where)

    default_per_row = _positive_int(
        raw.get("defaultPerRow", Settings.DEFAULT_PER_ROW), where
    )

    raw_variants = raw.get("rowVariants", [])
    if not isinstance(raw_variants, list):
        msg = f"{where}: 'rowVariants' must be a list"
        raise ConfigError(msg)
    variants = tuple(_positive_int(v, where) for v in raw_variants)

    return FeedConfig(
        slug=slug,
        title=_require_str(raw, "title", where),
        source=source,
        default_per_row=default_per_row,
        row_variants=variants,
    )


def load_config(
    path: Path | None = None,
) -> tuple[SiteConfig, list[FeedConfig]]:
    """Read the config file and return site defaults plus feeds in order.

    ``feeds`` may be a list or a mapping keyed by feed identity; mapping
    entries without a ``slug`` use their key.
    """
    config_path = path or Settings.CONFIG_PATH
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        msg = f"Config file not found: {config_path}"
        raise ConfigError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Config file {config_path} is not valid JSON: {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(raw, dict):
        msg = "Config root must be an object"
        raise ConfigError(msg)

    site = parse_site(raw.get("site"))

    raw_feeds = raw.get("feeds")
    entries: list[tuple[int | str, Any]]
    if isinstance(raw_feeds, list):
        entries = list(enumerate(raw_feeds))
    elif isinstance(raw_feeds, dict):
        entries = []
        for key, value in raw_feeds.items():
            if isinstance(value, dict):
                value = {"slug": key, **value}
            entries.append((key, value))
    else:
        msg = "'feeds' section must be a list or an object"
        raise ConfigError(msg)

    feeds: list[FeedConfig] = []
    seen: set[str] = set()
    for index, entry in entries:
        feed = parse_feed(entry, index)
        if feed.slug in seen:
            msg = f"Duplicate feed slug '{feed.slug}'"
            raise ConfigError(msg)
        seen.add(feed.slug)
        feeds.append(feed)

    logger.info(
        "Loaded %d feed(s) from %s", len(feeds), config_path
    )
    return site, feeds
