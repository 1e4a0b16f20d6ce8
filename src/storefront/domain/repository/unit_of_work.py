"""Abstract unit of work.

A unit of work groups every write made through its repositories into
one transaction: nothing becomes visible until ``commit()``, and leaving
the ``with`` block without committing (or with an exception) rolls
everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import (
    CartRepository,
    CompareRepository,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.stock_repository import StockRepository


class UnitOfWork(ABC):

    products: ProductRepository
    stock: StockRepository
    orders: OrderRepository
    carts: CartRepository
    compares: CompareRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write in this unit visible at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes.  Safe to call after ``commit()``."""
