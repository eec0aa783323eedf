# tests/test_product_validator.py

"""Tests for product validation."""

import math
import unittest

from src.filters.product_validator import ProductValidator
from src.models.product import Product


def _make(
    pid: str = "1",
    title: str = "Product",
    link: str = "https://shop.nl/p",
    image: str = "",
    price: float = 10.0,
) -> Product:
    return Product(
        id=pid, title=title, link=link, image=image, price=price
    )


class TestProductValidator(unittest.TestCase):
    """Verify required-field validation."""

    def test_valid_products_kept(self) -> None:
        products = [_make("1"), _make("2")]
        valid, dropped = ProductValidator.validate(products)
        self.assertEqual(len(valid), 2)
        self.assertEqual(dropped, 0)

    def test_empty_id_dropped(self) -> None:
        valid, dropped = ProductValidator.validate([_make(pid="")])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 1)

    def test_whitespace_title_dropped(self) -> None:
        valid, dropped = ProductValidator.validate([_make(title="   ")])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 1)

    def test_empty_link_dropped(self) -> None:
        valid, dropped = ProductValidator.validate([_make(link="")])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 1)

    def test_missing_image_and_price_kept(self) -> None:
        """Image and price degrade at render time, not here."""
        product = _make(image="", price=math.nan)
        valid, dropped = ProductValidator.validate([product])
        self.assertEqual(valid, [product])
        self.assertEqual(dropped, 0)

    def test_order_preserved(self) -> None:
        products = [_make("a"), _make("", title="x"), _make("b")]
        valid, dropped = ProductValidator.validate(products)
        self.assertEqual([p.id for p in valid], ["a", "b"])
        self.assertEqual(dropped, 1)

    def test_empty_list(self) -> None:
        valid, dropped = ProductValidator.validate([])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 0)


if __name__ == "__main__":
    unittest.main()
