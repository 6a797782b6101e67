from __future__ import annotations

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Optional, Union

import streamlit as st

from core.db import connect, ensure_schema, q, x, changes
from core.errors import DuplicateError
from core.models import Category, Sale, SaleInput
from core.schema import DEFAULT_CATEGORIES
from core.utils import iso_now, to_date

logger = logging.getLogger(__name__)

DateLike = Union[date, str]

_SALE_COLUMNS = (
    "date, item_name, category, quantity, unit_price, total_amount, "
    "payment_method, customer_name, notes"
)


def _iso(d: DateLike) -> str:
    return to_date(d).isoformat()


def _sale_params(sale: SaleInput) -> tuple:
    return (
        _iso(sale.date),
        str(sale.item_name),
        str(sale.category),
        int(sale.quantity),
        float(sale.unit_price),
        float(sale.total_amount),
        str(sale.payment_method),
        sale.customer_name or None,
        sale.notes or None,
    )


class SalesStore:
    """
    Owns the sales and categories tables of one SQLite file.

    Only NOT NULL / UNIQUE constraints are enforced here; field validation
    happens in core.services.sales before a sale reaches the store.

    Usage:
        with SalesStore.open(settings.db_path) as store:
            store.get_all()
    """

    def __init__(self, conn: sqlite3.Connection, db_path: Optional[Path] = None):
        self.conn = conn
        self.db_path = db_path

    @classmethod
    def open(cls, db_path: Union[Path, str]) -> "SalesStore":
        store = cls(connect(db_path), Path(db_path))
        ensure_schema(store.conn)
        store.seed_categories()
        logger.info(f"Opened sales store at {db_path}")
        return store

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.info(f"Closed sales store at {self.db_path}")

    def __enter__(self) -> "SalesStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -------------------------
    # Sales
    # -------------------------

    def create(self, sale: SaleInput) -> int:
        sale_id = x(
            self.conn,
            f"INSERT INTO sales ({_SALE_COLUMNS}, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            _sale_params(sale) + (iso_now(),),
        )
        logger.info(f"Sale #{sale_id} created: {sale.item_name} x{sale.quantity}")
        return sale_id

    def get_all(self) -> list[Sale]:
        rows = q(self.conn, "SELECT * FROM sales ORDER BY date DESC, created_at DESC, id DESC")
        return [Sale.from_row(r) for r in rows]

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        rows = q(self.conn, "SELECT * FROM sales WHERE id=?", (int(sale_id),))
        return Sale.from_row(rows[0]) if rows else None

    def get_by_date_range(self, start: DateLike, end: DateLike) -> list[Sale]:
        rows = q(
            self.conn,
            """
            SELECT * FROM sales
            WHERE date BETWEEN ? AND ?
            ORDER BY date DESC, created_at DESC, id DESC
            """,
            (_iso(start), _iso(end)),
        )
        return [Sale.from_row(r) for r in rows]

    def get_since(self, start: DateLike) -> list[Sale]:
        rows = q(self.conn, "SELECT * FROM sales WHERE date >= ? ORDER BY id", (_iso(start),))
        return [Sale.from_row(r) for r in rows]

    def get_in_insertion_order(self) -> list[Sale]:
        rows = q(self.conn, "SELECT * FROM sales ORDER BY id")
        return [Sale.from_row(r) for r in rows]

    def update(self, sale_id: int, sale: SaleInput) -> int:
        n = changes(
            self.conn,
            """
            UPDATE sales
            SET date=?, item_name=?, category=?, quantity=?, unit_price=?,
                total_amount=?, payment_method=?, customer_name=?, notes=?
            WHERE id=?
            """,
            _sale_params(sale) + (int(sale_id),),
        )
        logger.info(f"Sale #{sale_id} updated ({n} row)")
        return n

    def delete(self, sale_id: int) -> int:
        n = changes(self.conn, "DELETE FROM sales WHERE id=?", (int(sale_id),))
        logger.info(f"Sale #{sale_id} deleted ({n} row)")
        return n

    def wipe_sales(self) -> None:
        self.conn.execute("DELETE FROM sales;")
        self.conn.commit()
        logger.info("All sales wiped")

    # -------------------------
    # Categories
    # -------------------------

    def list_categories(self) -> list[Category]:
        rows = q(self.conn, "SELECT id, name FROM categories ORDER BY name")
        return [Category(id=int(r["id"]), name=str(r["name"])) for r in rows]

    def add_category(self, name: str) -> int:
        try:
            cat_id = x(self.conn, "INSERT INTO categories(name) VALUES (?)", (name,))
        except sqlite3.IntegrityError as e:
            self.conn.rollback()
            logger.warning(f"Category {name!r} rejected: {e}")
            raise DuplicateError(f"Category '{name}' already exists.") from e
        logger.info(f"Category {name!r} added")
        return cat_id

    def seed_categories(self) -> None:
        n = q(self.conn, "SELECT COUNT(*) AS n FROM categories")[0]["n"]
        if int(n) > 0:
            return
        for name in DEFAULT_CATEGORIES:
            self.conn.execute("INSERT INTO categories(name) VALUES (?)", (name,))
        self.conn.commit()
        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")

    def count_rows(self) -> dict[str, int]:
        rows = q(
            self.conn,
            """
            SELECT 'sales' AS table_name, COUNT(*) AS n FROM sales
            UNION ALL SELECT 'categories', COUNT(*) FROM categories
            """,
        )
        return {str(r["table_name"]): int(r["n"]) for r in rows}


@st.cache_resource
def get_store(db_path: Path) -> SalesStore:
    return SalesStore.open(db_path)


def release_store(store: SalesStore) -> None:
    """Close the cached store and drop it, so the next get_store() reopens."""
    store.close()
    st.cache_resource.clear()
