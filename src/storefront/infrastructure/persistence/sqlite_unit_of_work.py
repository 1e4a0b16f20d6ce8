"""SQLite-backed UnitOfWork.

Every unit runs on its own connection inside an explicit ``BEGIN``.
The transaction is deferred: reads take no write lock, and the first
write waits (up to the database timeout) for SQLite's single writer
lock, which is held until ``COMMIT`` or ``ROLLBACK``.
"""

from __future__ import annotations

import sqlite3

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.database import Database
from storefront.infrastructure.persistence.sqlite_cart_repository import (
    SqliteCartRepository,
    SqliteCompareRepository,
)
from storefront.infrastructure.persistence.sqlite_order_repository import (
    SqliteOrderRepository,
)
from storefront.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)
from storefront.infrastructure.persistence.sqlite_stock_repository import (
    SqliteStockRepository,
)


class SqliteUnitOfWork(UnitOfWork):

    def __init__(self, database: Database) -> None:
        self._database = database
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> SqliteUnitOfWork:
        conn = self._database.connect()
        conn.execute("BEGIN")
        self._conn = conn
        self.products = SqliteProductRepository(conn)
        self.stock = SqliteStockRepository(conn)
        self.orders = SqliteOrderRepository(conn)
        self.carts = SqliteCartRepository(conn)
        self.compares = SqliteCompareRepository(conn)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def commit(self) -> None:
        assert self._conn is not None
        self._conn.execute("COMMIT")

    def rollback(self) -> None:
        if self._conn is not None and self._conn.in_transaction:
            self._conn.execute("ROLLBACK")
