"""SQLite storage client.

One ``Database`` is built at startup and closed at shutdown.  Each unit
of work gets its own connection from ``connect()`` so concurrent
requests never share a connection.  WAL journaling lets readers proceed
while a writer holds the lock; writers wait up to ``timeout`` seconds
for it.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    product_id   TEXT PRIMARY KEY,
    name         TEXT NOT NULL,
    price        TEXT NOT NULL,
    brand        TEXT NOT NULL DEFAULT '',
    category_id  TEXT NOT NULL DEFAULT '',
    promotion_id TEXT
);
CREATE TABLE IF NOT EXISTS product_stocks (
    product_id     TEXT PRIMARY KEY,
    stock_quantity INTEGER NOT NULL CHECK (stock_quantity >= 0)
);
CREATE TABLE IF NOT EXISTS orders (
    order_id       TEXT PRIMARY KEY,
    customer_id    TEXT NOT NULL,
    order_date     TEXT NOT NULL,
    address        TEXT NOT NULL,
    city           TEXT NOT NULL,
    postal_code    TEXT NOT NULL DEFAULT '',
    country        TEXT NOT NULL,
    payment_method TEXT NOT NULL,
    status         TEXT NOT NULL,
    total_amount   TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS ix_orders_customer ON orders (customer_id, order_date);
CREATE TABLE IF NOT EXISTS order_details (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    order_id   TEXT NOT NULL REFERENCES orders (order_id),
    product_id TEXT NOT NULL,
    quantity   INTEGER NOT NULL CHECK (quantity > 0),
    unit_price TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS ix_order_details_order ON order_details (order_id);
CREATE TABLE IF NOT EXISTS carts (
    account_id TEXT PRIMARY KEY,
    items      TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS compares (
    account_id TEXT PRIMARY KEY,
    items      TEXT NOT NULL
);
"""


class Database:

    def __init__(self, path: Path | str, timeout: float = 5.0) -> None:
        self._path = Path(path)
        self._timeout = timeout
        self._keeper: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> Database:
        """Create the file and schema if needed.  Idempotent."""
        if self._keeper is not None:
            return self
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._keeper = self._new_connection()
        self._keeper.execute("PRAGMA journal_mode=WAL")
        self._keeper.executescript(SCHEMA)
        logger.info("database_opened", path=str(self._path))
        return self

    def close(self) -> None:
        if self._keeper is not None:
            self._keeper.close()
            self._keeper = None
            logger.info("database_closed", path=str(self._path))

    def connect(self) -> sqlite3.Connection:
        """Return a fresh connection in manual-transaction mode."""
        if self._keeper is None:
            raise RuntimeError("Database is not open")
        return self._new_connection()

    def __enter__(self) -> Database:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _new_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            str(self._path),
            timeout=self._timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn
