"""Abstract repository for StockRecord."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.stock import StockRecord


class StockRepository(ABC):

    @abstractmethod
    def get(self, product_id: str) -> StockRecord | None:
        """Return the stock record for a product, or None."""

    @abstractmethod
    def get_many(self, product_ids: list[str]) -> list[StockRecord]:
        """Return the stock records that exist for *product_ids*."""

    @abstractmethod
    def list_all(self) -> list[StockRecord]:
        """Return every stock record."""

    @abstractmethod
    def save(self, record: StockRecord) -> None:
        """Insert or overwrite the record for ``record.product_id``."""

    @abstractmethod
    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract *quantity* if at least that much is on hand.

        Returns False, leaving the record untouched, when the record is
        missing or holds less than *quantity* at the moment of the write.
        """
