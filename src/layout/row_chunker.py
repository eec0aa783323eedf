# src/layout/row_chunker.py

"""Split a product list into rows for one row-width variant.

Each width maps to a :class:`RowPolicy`.  A policy may stack several
visual rows into one rendered unit (one RSS item), which keeps the item
count down for narrow layouts while each item still shows a grid of
``width`` columns.
"""

import logging
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("catalog_feeds.layout")

Row = list[Product]


@dataclass(frozen=True)
class RowPolicy:
    """Grouping rule for one row width."""

    width: int
    rows_per_unit: int = 1

    @property
    def unit_size(self) -> int:
        """Products per rendered unit."""
        if self.width == 1:
            return 1
        return self.width * self.rows_per_unit


def default_policies() -> dict[int, RowPolicy]:
    """Policies from ``Settings.ROWS_PER_UNIT``; other widths use one row."""
    return {
        width: RowPolicy(width=width, rows_per_unit=rows)
        for width, rows in Settings.ROWS_PER_UNIT.items()
    }


def policy_for(
    width: int,
    policies: dict[int, RowPolicy] | None = None,
) -> RowPolicy:
    """Look up the policy for *width*, falling back to a single visual row."""
    table = default_policies() if policies is None else policies
    return table.get(width, RowPolicy(width=width))


def chunk(
    products: list[Product],
    width: int,
    policies: dict[int, RowPolicy] | None = None,
) -> list[Row]:
    """Group *products* into order-preserving rows for *width*.

    Width 1 always yields one product per row.  The final row may be
    shorter than the unit size.  An empty product list yields no rows.
    """
    if width < 1:
        msg = f"Row width must be >= 1, got {width}"
        raise ValueError(msg)

    size = policy_for(width, policies).unit_size
    rows = [
        products[start:start + size]
        for start in range(0, len(products), size)
    ]
    logger.debug(
        "Chunked %d products at width %d into %d rows of up to %d",
        len(products),
        width,
        len(rows),
        size,
    )
    return rows
