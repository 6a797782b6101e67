from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

import pandas as pd

from core.models import Sale
from core.store import SalesStore
from core.utils import to_date

logger = logging.getLogger(__name__)

WEEK_LOOKBACK_DAYS = 7
RECENT_SALES_LIMIT = 10


def sales_frame(sales: Iterable[Sale]) -> pd.DataFrame:
    rows = [s.to_dict() for s in sales]
    return pd.DataFrame(rows)


def sum_in_range(sales: Iterable[Sale], start, end) -> float:
    lo = to_date(start).isoformat()
    hi = to_date(end).isoformat()
    return float(sum(s.total_amount for s in sales if lo <= s.date <= hi))


def today_total(store: SalesStore, today: date) -> float:
    return sum_in_range(store.get_by_date_range(today, today), today, today)


def week_total(store: SalesStore, today: date) -> float:
    # date >= today - 7 days: eight calendar days including today.
    start = today - timedelta(days=WEEK_LOOKBACK_DAYS)
    return float(sum(s.total_amount for s in store.get_since(start)))


def month_total(store: SalesStore, today: date) -> float:
    start = today.replace(day=1)
    return float(sum(s.total_amount for s in store.get_since(start)))


def _grouped(df: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    """
    Group in first-appearance order (sort=False) so later stable sorts
    break ties by insertion order.
    """
    return (
        df.groupby(keys, sort=False)
        .agg(
            n_sales=("id", "size"),
            total_quantity=("quantity", "sum"),
            total=("total_amount", "sum"),
        )
        .reset_index()
    )


def top_selling_items(store: SalesStore, limit: int = 5) -> list[dict]:
    """
    Items ranked by units sold. Each item is keyed by (item_name, category).
    Ties keep the order in which the items were first sold.
    """
    if int(limit) <= 0:
        return []
    df = sales_frame(store.get_in_insertion_order())
    if df.empty:
        return []

    g = _grouped(df, ["item_name", "category"])
    g = g.sort_values("total_quantity", ascending=False, kind="mergesort").head(int(limit))
    return [
        {
            "item_name": str(r.item_name),
            "category": str(r.category),
            "total_quantity": int(r.total_quantity),
            "total_revenue": float(r.total),
        }
        for r in g.itertuples(index=False)
    ]


def by_category(store: SalesStore) -> list[dict]:
    df = sales_frame(store.get_in_insertion_order())
    if df.empty:
        return []

    g = _grouped(df, ["category"]).sort_values("total", ascending=False, kind="mergesort")
    return [
        {"category": str(r.category), "count": int(r.n_sales), "total": float(r.total)}
        for r in g.itertuples(index=False)
    ]


def by_payment_method(store: SalesStore) -> list[dict]:
    df = sales_frame(store.get_in_insertion_order())
    if df.empty:
        return []

    g = _grouped(df, ["payment_method"])
    return [
        {"payment_method": str(r.payment_method), "count": int(r.n_sales), "total": float(r.total)}
        for r in g.itertuples(index=False)
    ]


@dataclass
class DashboardStats:
    today: float = 0.0
    week: float = 0.0
    month: float = 0.0
    top_items: list[dict] = field(default_factory=list)
    recent_sales: list[Sale] = field(default_factory=list)
    by_category: list[dict] = field(default_factory=list)
    by_payment_method: list[dict] = field(default_factory=list)


def dashboard_stats(store: SalesStore, today: date) -> DashboardStats:
    stats = DashboardStats(
        today=today_total(store, today),
        week=week_total(store, today),
        month=month_total(store, today),
        top_items=top_selling_items(store, 5),
        recent_sales=store.get_all()[:RECENT_SALES_LIMIT],
        by_category=by_category(store),
        by_payment_method=by_payment_method(store),
    )
    logger.info(f"Dashboard stats for {today}: today={stats.today:,.2f} week={stats.week:,.2f} month={stats.month:,.2f}")
    return stats
