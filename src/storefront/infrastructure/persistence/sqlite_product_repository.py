"""SQLite-backed implementation of ProductRepository."""

from __future__ import annotations

import sqlite3
from decimal import Decimal

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

_COLUMNS = "product_id, name, price, brand, category_id, promotion_id"


class SqliteProductRepository(ProductRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM products WHERE product_id = ?", (product_id,)
        ).fetchone()
        return self._to_domain(row) if row else None

    def get_many(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        placeholders = ", ".join("?" for _ in product_ids)
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM products WHERE product_id IN ({placeholders})",
            tuple(product_ids),
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def list_all(self) -> list[Product]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM products ORDER BY product_id"
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def save(self, product: Product) -> None:
        self._conn.execute(
            f"INSERT INTO products ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?) "
            "ON CONFLICT (product_id) DO UPDATE SET "
            "name = excluded.name, price = excluded.price, brand = excluded.brand, "
            "category_id = excluded.category_id, promotion_id = excluded.promotion_id",
            (
                product.product_id,
                product.name,
                str(product.price.amount),
                product.brand,
                product.category_id,
                product.promotion_id,
            ),
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Product:
        return Product(
            product_id=row["product_id"],
            name=row["name"],
            price=Money(Decimal(row["price"])),
            brand=row["brand"],
            category_id=row["category_id"],
            promotion_id=row["promotion_id"],
        )
