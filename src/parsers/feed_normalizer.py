# src/parsers/feed_normalizer.py

"""Parse vendor catalog XML into a uniform list of products.

Expected layout (element names compared without namespace)::

    <rss>
      [<channel>]
        <items>
          <product>
            <id/> <title/> <link/> <image_link/> <price/>
          </product>
          ...
        </items>
      [</channel>]
    </rss>
"""

import logging
import math
import re

from lxml import etree

from src.filters.product_validator import ProductValidator
from src.models.errors import ParseError
from src.models.product import Product

logger = logging.getLogger("catalog_feeds.parser")

# Output field -> vendor element name
FIELD_MAP: dict[str, str] = {
    "id": "id",
    "title": "title",
    "link": "link",
    "image": "image_link",
    "price": "price",
}

# Leftover markers from vendors that escape their CDATA sections
_CDATA_MARKER_RE = re.compile(r"^<!\[CDATA\[(.*)\]\]>$", re.DOTALL)
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _local_name(element: etree._Element) -> str:
    """Tag name without namespace (comments and PIs yield '')."""
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def _children(
    parent: etree._Element, name: str,
) -> list[etree._Element]:
    """All direct children with the given local name, always a list."""
    return [c for c in parent if _local_name(c) == name]


def clean_text(value: str | None) -> str:
    """Trim text and strip any literal CDATA wrapper left in it."""
    if not value:
        return ""
    text = value.strip()
    match = _CDATA_MARKER_RE.match(text)
    while match:
        text = match.group(1).strip()
        match = _CDATA_MARKER_RE.match(text)
    return text


def parse_price(text: str | None) -> float:
    """Parse a localized price like '1.299,95' or '€ 12,50' to a float.

    The last ``,`` or ``.`` is the decimal separator; any other is a
    thousands separator.  Returns ``nan`` when no number is present.
    """
    if not text:
        return math.nan
    cleaned = re.sub(r"[^\d,.\-]", "", text)
    decimal_at = max(cleaned.rfind(","), cleaned.rfind("."))
    if decimal_at >= 0:
        integer = re.sub(r"[,.]", "", cleaned[:decimal_at])
        cleaned = f"{integer}.{cleaned[decimal_at + 1:]}"
    match = _NUMBER_RE.search(cleaned)
    if not match:
        return math.nan
    return float(match.group(0))


def _parse_tree(raw_xml: str | bytes) -> etree._Element:
    """Strictly parse markup, raising ParseError on any syntax error.

    Bytes are decoded by lxml using the XML declaration.  A ``str`` is
    already decoded, so its declared encoding is overridden.
    """
    is_text = isinstance(raw_xml, str)
    data = raw_xml.encode("utf-8") if is_text else raw_xml
    if not data.strip():
        msg = "Feed body is empty"
        raise ParseError(msg)
    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        strip_cdata=True,
        encoding="utf-8" if is_text else None,
    )
    try:
        return etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Unparsable feed XML: {exc}"
        raise ParseError(msg) from exc


def _find_product_elements(
    root: etree._Element,
) -> list[etree._Element]:
    """Locate the repeated product elements under the items container."""
    containers = [root, *_children(root, "channel")]
    for container in containers:
        items = _children(container, "items")
        if items:
            return [
                product
                for group in items
                for product in _children(group, "product")
            ]
    msg = (
        f"No <items> container under <{_local_name(root)}>; "
        "feed layout is not a product catalog"
    )
    raise ParseError(msg)


def _element_to_product(element: etree._Element) -> Product:
    """Map one <product> element onto a Product."""
    values: dict[str, str] = {}
    for field_name, tag in FIELD_MAP.items():
        matches = _children(element, tag)
        values[field_name] = (
            clean_text("".join(matches[0].itertext())) if matches else ""
        )
    return Product(
        id=values["id"],
        title=values["title"],
        link=values["link"],
        image=values["image"],
        price=parse_price(values["price"]),
    )


def normalize(raw_xml: str | bytes) -> list[Product]:
    """Parse a vendor feed and return its renderable products in order.

    Raises:
        ParseError: the markup is unparsable or has no items container.
    """
    root = _parse_tree(raw_xml)
    elements = _find_product_elements(root)
    products = [_element_to_product(e) for e in elements]
    valid, dropped = ProductValidator.validate(products)
    unpriced = sum(1 for p in valid if not p.has_price)
    logger.debug(
        "Normalized %d product elements: %d kept, %d dropped, %d unpriced",
        len(elements),
        len(valid),
        dropped,
        unpriced,
    )
    return valid
