"""SQLite-backed implementations of CartRepository and CompareRepository.

Each account has one row whose ``items`` column holds the JSON list in
the same shape the session uses.
"""

from __future__ import annotations

import json
import sqlite3

from storefront.domain.model.cart import Cart, CompareList
from storefront.domain.repository.cart_repository import (
    CartRepository,
    CompareRepository,
)


class SqliteCartRepository(CartRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, account_id: str) -> Cart | None:
        raw = _load(self._conn, "carts", account_id)
        return Cart.from_session(raw) if raw is not None else None

    def save(self, account_id: str, cart: Cart) -> None:
        _store(self._conn, "carts", account_id, cart.to_session())

    def delete(self, account_id: str) -> None:
        self._conn.execute("DELETE FROM carts WHERE account_id = ?", (account_id,))


class SqliteCompareRepository(CompareRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, account_id: str) -> CompareList | None:
        raw = _load(self._conn, "compares", account_id)
        return CompareList.from_session(raw) if raw is not None else None

    def save(self, account_id: str, compare: CompareList) -> None:
        _store(self._conn, "compares", account_id, compare.to_session())


# --- Row helpers --------------------------------------------------------------

def _load(conn: sqlite3.Connection, table: str, account_id: str) -> list | None:
    row = conn.execute(
        f"SELECT items FROM {table} WHERE account_id = ?", (account_id,)
    ).fetchone()
    return json.loads(row["items"]) if row else None


def _store(conn: sqlite3.Connection, table: str, account_id: str, items: list) -> None:
    conn.execute(
        f"INSERT INTO {table} (account_id, items) VALUES (?, ?) "
        "ON CONFLICT (account_id) DO UPDATE SET items = excluded.items",
        (account_id, json.dumps(items)),
    )
