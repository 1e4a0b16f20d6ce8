"""SQLite-backed implementation of StockRepository."""

from __future__ import annotations

import sqlite3

from storefront.domain.model.stock import StockRecord
from storefront.domain.repository.stock_repository import StockRepository


class SqliteStockRepository(StockRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, product_id: str) -> StockRecord | None:
        row = self._conn.execute(
            "SELECT product_id, stock_quantity FROM product_stocks WHERE product_id = ?",
            (product_id,),
        ).fetchone()
        return self._to_domain(row) if row else None

    def get_many(self, product_ids: list[str]) -> list[StockRecord]:
        if not product_ids:
            return []
        placeholders = ", ".join("?" for _ in product_ids)
        rows = self._conn.execute(
            "SELECT product_id, stock_quantity FROM product_stocks "
            f"WHERE product_id IN ({placeholders})",
            tuple(product_ids),
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def list_all(self) -> list[StockRecord]:
        rows = self._conn.execute(
            "SELECT product_id, stock_quantity FROM product_stocks ORDER BY product_id"
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def save(self, record: StockRecord) -> None:
        self._conn.execute(
            "INSERT INTO product_stocks (product_id, stock_quantity) VALUES (?, ?) "
            "ON CONFLICT (product_id) DO UPDATE SET stock_quantity = excluded.stock_quantity",
            (record.product_id, record.quantity),
        )

    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        # The guard and the subtraction are one statement; there is no
        # window between reading the quantity and writing it.
        cursor = self._conn.execute(
            "UPDATE product_stocks SET stock_quantity = stock_quantity - ? "
            "WHERE product_id = ? AND stock_quantity >= ?",
            (quantity, product_id, quantity),
        )
        return cursor.rowcount == 1

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> StockRecord:
        return StockRecord(product_id=row["product_id"], quantity=row["stock_quantity"])
