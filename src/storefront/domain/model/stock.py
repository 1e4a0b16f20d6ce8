"""StockRecord: quantity on hand for one product."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass
class StockRecord:
    """One per product identifier.

    Invariant: ``quantity`` is never negative.  Order placement does not
    mutate this object; it goes through the repository's conditional
    decrement so the check and the write happen in one statement.
    """

    product_id: str
    quantity: int = 0

    def __post_init__(self) -> None:
        _check_quantity(self.quantity)


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"Stock quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity < 0:
        raise ValidationError("Stock quantity cannot be negative")
