# src/filters/product_validator.py

"""Product validation: drop records that cannot be rendered."""

import logging

from src.models.product import Product

logger = logging.getLogger("catalog_feeds.filters")


class ProductValidator:
    """Validate products and drop those with missing essential fields."""

    REQUIRED_FIELDS: tuple[str, ...] = ("id", "title", "link")

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with an empty id, title or link.

        Missing images and unparsable prices are kept; the renderers
        degrade those per product.

        Returns the valid products and the count of dropped items.
        """
        valid: list[Product] = []
        dropped = 0

        for product in products:
            missing = [
                name
                for name in ProductValidator.REQUIRED_FIELDS
                if not getattr(product, name).strip()
            ]
            if missing:
                logger.debug(
                    "Dropped product missing %s (id=%r, link=%r)",
                    ", ".join(missing),
                    product.id,
                    product.link,
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid products",
                dropped,
            )

        return valid, dropped
