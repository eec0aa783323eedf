# src/config/settings.py

"""Central configuration for the catalog_feeds builder."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the catalog_feeds builder."""

    # --- Fetching ---
    REQUEST_TIMEOUT: int = 30           # Seconds before a feed fetch times out
    MAX_CONCURRENT_FEEDS: int = 3       # Feeds fetched/rendered in parallel

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "application/rss+xml,application/xml;q=0.9,"
            "text/xml;q=0.8,*/*;q=0.5"
        ),
        "Accept-Language": "nl-NL,nl;q=0.9,en;q=0.8",
    }

    # --- Layout ---
    DEFAULT_PER_ROW: int = 3
    # Visual rows combined into one RSS item, keyed by row width
    ROWS_PER_UNIT: dict[int, int] = {2: 2}

    # --- Rendering ---
    DEFAULT_LANGUAGE: str = "nl-NL"
    CURRENCY_SYMBOL: str = "€"
    PRICE_PLACEHOLDER: str = "-.--"
    GENERATOR: str = "catalog_feeds"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CONFIG_PATH: Path = Path(
        os.getenv(
            "CATALOG_FEEDS_CONFIG",
            str(BASE_DIR / "feeds.config.json"),
        )
    )
    OUTPUT_DIR: Path = Path(
        os.getenv("CATALOG_FEEDS_OUTPUT", str(BASE_DIR / "public"))
    )
    LOGS_DIR: Path = BASE_DIR / "logs"
