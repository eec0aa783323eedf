# tests/test_feeds_config.py

"""Tests for loading and validating feeds.config.json."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path
from typing import Any

from src.config.feeds_config import load_config
from src.config.settings import Settings
from src.models.errors import ConfigError

SITE: dict[str, Any] = {
    "title": "Nedgame",
    "link": "https://www.nedgame.nl",
    "description": "Productselecties",
}


class TestLoadConfig(unittest.TestCase):
    """Verify config parsing and validation errors."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, True)

    def _write(self, data: Any) -> Path:
        path = self.tmp_dir / "feeds.config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def _feed(self, **overrides: Any) -> dict[str, Any]:
        feed: dict[str, Any] = {
            "slug": "deals",
            "title": "Deals",
            "url": "https://vendor.example/deals.xml",
        }
        feed.update(overrides)
        return feed

    def test_valid_config(self) -> None:
        path = self._write(
            {
                "site": SITE,
                "feeds": [
                    self._feed(defaultPerRow=4, rowVariants=[2, 4]),
                    self._feed(slug="new", title="New"),
                ],
            }
        )
        site, feeds = load_config(path)
        self.assertEqual(site.title, "Nedgame")
        self.assertEqual(site.language, "nl-NL")
        self.assertEqual([f.slug for f in feeds], ["deals", "new"])
        self.assertEqual(feeds[0].default_per_row, 4)
        self.assertEqual(feeds[0].row_variants, (2, 4))
        self.assertEqual(feeds[0].source, "https://vendor.example/deals.xml")

    def test_defaults(self) -> None:
        site, feeds = load_config(
            self._write({"site": SITE, "feeds": [self._feed()]})
        )
        self.assertEqual(feeds[0].default_per_row, 3)
        self.assertEqual(feeds[0].row_variants, ())

    def test_site_language_override(self) -> None:
        site, _ = load_config(
            self._write(
                {"site": {**SITE, "language": "en-GB"}, "feeds": []}
            )
        )
        self.assertEqual(site.language, "en-GB")

    def test_source_key_accepted(self) -> None:
        feed = self._feed()
        feed["source"] = feed.pop("url")
        _, feeds = load_config(self._write({"site": SITE, "feeds": [feed]}))
        self.assertEqual(feeds[0].source, "https://vendor.example/deals.xml")

    def test_mapping_form_uses_key_as_slug(self) -> None:
        feed = self._feed()
        del feed["slug"]
        _, feeds = load_config(
            self._write({"site": SITE, "feeds": {"preorders": feed}})
        )
        self.assertEqual(feeds[0].slug, "preorders")

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.tmp_dir / "nope.json")

    def test_invalid_json(self) -> None:
        path = self.tmp_dir / "feeds.config.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_missing_site(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self._write({"feeds": [self._feed()]}))

    def test_missing_feeds(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self._write({"site": SITE}))

    def test_invalid_feed_entries(self) -> None:
        bad_feeds = {
            "missing slug": self._feed(slug=""),
            "unsafe slug": self._feed(slug="../etc"),
            "missing title": self._feed(title=None),
            "missing url": {"slug": "x", "title": "X"},
            "zero default": self._feed(defaultPerRow=0),
            "string width": self._feed(rowVariants=["3"]),
            "bool width": self._feed(rowVariants=[True]),
            "variants not list": self._feed(rowVariants=3),
        }
        for label, feed in bad_feeds.items():
            with self.subTest(label):
                with self.assertRaises(ConfigError):
                    load_config(
                        self._write({"site": SITE, "feeds": [feed]})
                    )

    def test_duplicate_slug(self) -> None:
        path = self._write(
            {"site": SITE, "feeds": [self._feed(), self._feed()]}
        )
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_shipped_config_is_valid(self) -> None:
        site, feeds = load_config(Settings.BASE_DIR / "feeds.config.json")
        self.assertTrue(site.link)
        self.assertGreaterEqual(len(feeds), 1)


if __name__ == "__main__":
    unittest.main()
