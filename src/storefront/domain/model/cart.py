"""Cart and CompareList.

Both exist in two forms: ephemeral (held in the anonymous session) and
persistent (one document per account).  The shapes are identical so the
same model serves both, and the session form round-trips through
``to_session`` / ``from_session``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Quantity


@dataclass
class CartItem:
    product_id: str
    quantity: int


@dataclass
class Cart:
    """Invariant: a product identifier appears at most once."""

    items: list[CartItem] = field(default_factory=list)

    def add(self, product_id: str, quantity: int) -> None:
        """Add *quantity* units, merging into an existing entry if present."""
        qty = Quantity(quantity).value
        for item in self.items:
            if item.product_id == product_id:
                item.quantity += qty
                return
        self.items.append(CartItem(product_id=product_id, quantity=qty))

    def remove(self, product_id: str) -> None:
        """Drop the entry for *product_id*; a missing entry is not an error."""
        self.items = [i for i in self.items if i.product_id != product_id]

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_session(self) -> list[dict]:
        return [{"productId": i.product_id, "quantity": i.quantity} for i in self.items]

    @staticmethod
    def from_session(raw: list[dict] | None) -> Cart:
        cart = Cart()
        for entry in raw or []:
            cart.add(entry["productId"], entry["quantity"])
        return cart


@dataclass
class CompareList:
    """Ordered set of product identifiers."""

    product_ids: list[str] = field(default_factory=list)

    def add(self, product_id: str) -> None:
        if product_id not in self.product_ids:
            self.product_ids.append(product_id)

    def remove(self, product_id: str) -> None:
        self.product_ids = [p for p in self.product_ids if p != product_id]

    @property
    def is_empty(self) -> bool:
        return not self.product_ids

    def to_session(self) -> list[str]:
        return list(self.product_ids)

    @staticmethod
    def from_session(raw: list[str] | None) -> CompareList:
        compare = CompareList()
        for product_id in raw or []:
            compare.add(product_id)
        return compare
