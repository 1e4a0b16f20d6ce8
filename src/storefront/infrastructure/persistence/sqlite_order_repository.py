"""SQLite-backed implementation of OrderRepository.

Headers go to ``orders``, line items to ``order_details``.  ``add``
writes both but does not commit; the unit of work decides.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.repository.order_repository import OrderRepository


class SqliteOrderRepository(OrderRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        address = order.shipping_address
        self._conn.execute(
            "INSERT INTO orders (order_id, customer_id, order_date, address, city, "
            "postal_code, country, payment_method, status, total_amount) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                order.order_id,
                order.customer_id,
                order.order_date.isoformat(),
                address.address,
                address.city,
                address.postal_code,
                address.country,
                order.payment_method.value,
                order.status.value,
                str(order.total.amount),
            ),
        )
        self._conn.executemany(
            "INSERT INTO order_details (order_id, product_id, quantity, unit_price) "
            "VALUES (?, ?, ?, ?)",
            [
                (order.order_id, item.product_id, item.quantity.value, str(item.unit_price.amount))
                for item in order.items
            ],
        )

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._conn.execute(
            "SELECT * FROM orders WHERE order_id = ?", (order_id,)
        ).fetchone()
        if row is None:
            return None
        return self._to_domain(row, self._load_items([order_id])[order_id])

    def list_for_customer(self, customer_id: str) -> list[Order]:
        rows = self._conn.execute(
            "SELECT * FROM orders WHERE customer_id = ? ORDER BY order_date DESC",
            (customer_id,),
        ).fetchall()
        items = self._load_items([row["order_id"] for row in rows])
        return [self._to_domain(row, items[row["order_id"]]) for row in rows]

    # --- Serialization --------------------------------------------------------

    def _load_items(self, order_ids: list[str]) -> dict[str, list[OrderLineItem]]:
        items: dict[str, list[OrderLineItem]] = {oid: [] for oid in order_ids}
        if not order_ids:
            return items
        placeholders = ", ".join("?" for _ in order_ids)
        rows = self._conn.execute(
            "SELECT order_id, product_id, quantity, unit_price FROM order_details "
            f"WHERE order_id IN ({placeholders}) ORDER BY id",
            tuple(order_ids),
        ).fetchall()
        for row in rows:
            items[row["order_id"]].append(
                OrderLineItem(
                    product_id=row["product_id"],
                    quantity=Quantity(row["quantity"]),
                    unit_price=Money(Decimal(row["unit_price"])),
                )
            )
        return items

    @staticmethod
    def _to_domain(row: sqlite3.Row, items: list[OrderLineItem]) -> Order:
        return Order(
            order_id=row["order_id"],
            customer_id=row["customer_id"],
            shipping_address=ShippingAddress(
                address=row["address"],
                city=row["city"],
                postal_code=row["postal_code"],
                country=row["country"],
            ),
            payment_method=PaymentMethod(row["payment_method"]),
            items=items,
            status=OrderStatus(row["status"]),
            order_date=datetime.fromisoformat(row["order_date"]),
        )
