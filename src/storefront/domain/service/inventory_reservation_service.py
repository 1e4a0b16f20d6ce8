"""Domain service: Inventory Reservation.

Stock is guarded in two phases:

  Phase 1 (pre-check): read a snapshot of every involved stock record
  and compare it to the requested quantity.  This is not atomic; it only
  exists so the common failure gets a precise message before anything
  is written.

  Phase 2 (deduct): inside the order's unit of work, every line item is
  deducted with the repository's conditional decrement.  A decrement
  that matches nothing means another order took the stock after
  phase 1, and the whole unit must be abandoned.

Phase 2 is never skipped because phase 1 passed.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import CommitFailedError, InsufficientStockError
from storefront.domain.model.order import Order
from storefront.domain.repository.stock_repository import StockRepository

logger = structlog.get_logger(__name__)


class InventoryReservationService:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def snapshot(self, product_ids: list[str]) -> dict[str, int]:
        """Batch-read stock levels; products with no record are absent."""
        unique_ids = list(dict.fromkeys(product_ids))
        return {
            record.product_id: record.quantity
            for record in self._stock_repo.get_many(unique_ids)
        }

    @staticmethod
    def check(product_id: str, quantity: int, snapshot: dict[str, int]) -> None:
        """Raise InsufficientStockError unless the snapshot covers *quantity*."""
        available = snapshot.get(product_id)
        if available is None or available < quantity:
            raise InsufficientStockError(product_id, quantity, available or 0)

    def deduct_for_order(self, order: Order) -> None:
        """Conditionally decrement stock for every line item.

        Line items naming the same product are deducted one after the
        other, so their demand accumulates against the same record.
        Must run inside the unit of work that also inserts the order.
        """
        for line in order.items:
            qty = line.quantity.value
            if not self._stock_repo.decrement_if_available(line.product_id, qty):
                logger.warning(
                    "stock_decrement_rejected",
                    order_id=order.order_id,
                    product_id=line.product_id,
                    quantity=qty,
                )
                raise CommitFailedError(
                    f"Stock update failed for product {line.product_id}: "
                    f"insufficient stock or product not found"
                )
