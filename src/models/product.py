# src/models/product.py

"""Product data model shared by the parser, renderers and exports."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A single normalized catalog product.

    ``price`` is ``nan`` when the vendor value could not be parsed; the
    renderers fall back to a placeholder instead of failing the feed.
    """

    id: str
    title: str
    link: str
    image: str = ""
    price: float = math.nan

    @property
    def has_price(self) -> bool:
        """True when the price is a finite number."""
        return math.isfinite(self.price)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the JSON export shape (non-finite price → null)."""
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "image": self.image,
            "price": self.price if self.has_price else None,
        }
