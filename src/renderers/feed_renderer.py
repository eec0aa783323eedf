# src/renderers/feed_renderer.py

"""Assemble chunked rows into an RSS 2.0 document.

Every row becomes one ``<item>`` whose description is the row's HTML grid
in a CDATA section, so the email platform's RSS block inserts it as
markup.  All items of one render share a single timestamp.
"""

import logging
from datetime import datetime, timezone
from email.utils import format_datetime

from lxml import etree

from src.config.settings import Settings
from src.layout.row_chunker import Row
from src.models.feed_config import SiteConfig
from src.renderers.card_renderer import render_row

logger = logging.getLogger("catalog_feeds.rss")

ENCLOSURE_TYPE = "image/jpeg"


def rfc1123(moment: datetime) -> str:
    """Format a datetime as an RFC-1123 date in GMT."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return format_datetime(moment.astimezone(timezone.utc), usegmt=True)


def item_title(feed_title: str, width: int, index: int, total: int) -> str:
    """Synthetic item title; ``index`` is 1-based."""
    title = f"{feed_title} – {width} per row"
    if total > 1:
        title += f" – set {index}"
    return title


def item_guid(
    feed_title: str, width: int, index: int, row: Row, fallback: str,
) -> str:
    """Stable guid from the feed, width, row index and first product id."""
    anchor = row[0].id if row else fallback
    return f"{feed_title}-w{width}-r{index}-{anchor}"


def _cdata(markup: str) -> etree.CDATA:
    # A CDATA section cannot contain its own terminator
    return etree.CDATA(markup.replace("]]>", "]]&gt;"))


def _text(parent: etree._Element, tag: str, value: str) -> etree._Element:
    element = etree.SubElement(parent, tag)
    element.text = value
    return element


def render_feed(
    site: SiteConfig,
    feed_title: str,
    rows: list[Row],
    width: int,
    now: datetime | None = None,
) -> bytes:
    """Render *rows* at *width* as a UTF-8 RSS 2.0 document.

    Args:
        site: channel-level link, description and language.
        feed_title: feed display name; the site title is used when empty.
        rows: output of :func:`src.layout.row_chunker.chunk`.
        width: columns per visual row.
        now: render time for ``lastBuildDate``/``pubDate`` (default: now).
    """
    moment = now or datetime.now(timezone.utc)
    build_date = rfc1123(moment)
    title = feed_title or site.title

    rss = etree.Element("rss", version="2.0")
    channel = etree.SubElement(rss, "channel")
    _text(channel, "title", title)
    _text(channel, "link", site.link)
    _text(channel, "description", site.description or title)
    _text(channel, "language", site.language)
    _text(channel, "lastBuildDate", build_date)
    _text(channel, "generator", Settings.GENERATOR)

    fallback = moment.strftime("%Y%m%d%H%M%S")
    for index, row in enumerate(rows, 1):
        item = etree.SubElement(channel, "item")
        _text(item, "title", item_title(title, width, index, len(rows)))
        _text(item, "link", row[0].link if row else site.link)
        guid = _text(
            item, "guid", item_guid(title, width, index, row, fallback)
        )
        guid.set("isPermaLink", "false")
        _text(item, "pubDate", build_date)
        description = etree.SubElement(item, "description")
        description.text = _cdata(render_row(row, width))
        if row and row[0].image:
            etree.SubElement(
                item,
                "enclosure",
                url=row[0].image,
                type=ENCLOSURE_TYPE,
                length="0",
            )

    logger.debug(
        "Rendered RSS '%s' at width %d with %d items",
        title,
        width,
        len(rows),
    )
    return etree.tostring(
        rss,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )
