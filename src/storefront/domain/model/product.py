"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``product_id`` is the business key every other record refers to;
    the storage row id never leaves the persistence layer.
    """

    product_id: str
    name: str
    price: Money
    brand: str = ""
    category_id: str = ""
    promotion_id: str | None = None

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected: their line items carry the price
        captured when they were placed.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
