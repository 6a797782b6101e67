from __future__ import annotations

from datetime import timedelta

import pytest

from core.services import analytics
from core.services.sales import add_sale, get_all_sales

from tests.conftest import TODAY


def test_sum_in_range_single_day(store, make_form):
    add_sale(store, make_form(item_name="A", unit_price=100))
    add_sale(store, make_form(item_name="B", unit_price=50))
    add_sale(store, make_form(item_name="C", unit_price=999, date=TODAY - timedelta(days=1)))

    sales = store.get_by_date_range(TODAY, TODAY)
    assert analytics.sum_in_range(sales, TODAY, TODAY) == 150.0
    assert analytics.sum_in_range(get_all_sales(store), TODAY, TODAY) == 150.0


def test_sum_in_range_empty_is_zero():
    assert analytics.sum_in_range([], TODAY, TODAY) == 0.0


def test_window_totals(store, make_form):
    for days_ago, price in [(0, 10), (3, 20), (7, 40), (8, 80), (25, 160)]:
        add_sale(store, make_form(unit_price=price, date=TODAY - timedelta(days=days_ago)))

    assert analytics.today_total(store, TODAY) == 10.0
    # date >= today - 7: 0, 3 and 7 days ago
    assert analytics.week_total(store, TODAY) == 70.0
    # October 2026: days 19, 16, 12, 11 (25 days ago is in September)
    assert analytics.month_total(store, TODAY) == 150.0


def test_window_totals_empty_store(store):
    assert analytics.today_total(store, TODAY) == 0.0
    assert analytics.week_total(store, TODAY) == 0.0
    assert analytics.month_total(store, TODAY) == 0.0


def test_top_selling_items_groups_and_ranks(store, make_form):
    add_sale(store, make_form(item_name="Shirt", category="Shirts", quantity=3, unit_price=10))
    add_sale(store, make_form(item_name="Shirt", category="Shirts", quantity=2, unit_price=10))
    add_sale(store, make_form(item_name="Pants", category="Pants", quantity=10, unit_price=5))

    top = analytics.top_selling_items(store, 2)
    assert top == [
        {"item_name": "Pants", "category": "Pants", "total_quantity": 10, "total_revenue": 50.0},
        {"item_name": "Shirt", "category": "Shirts", "total_quantity": 5, "total_revenue": 50.0},
    ]


def test_top_selling_items_same_name_different_category(store, make_form):
    add_sale(store, make_form(item_name="Basic", category="Shirts", quantity=1))
    add_sale(store, make_form(item_name="Basic", category="Pants", quantity=2))
    top = analytics.top_selling_items(store)
    assert [(t["category"], t["total_quantity"]) for t in top] == [("Pants", 2), ("Shirts", 1)]


def test_top_selling_items_ties_keep_insertion_order(store, make_form):
    for name in ["Zeta", "Alpha", "Mid"]:
        add_sale(store, make_form(item_name=name, quantity=2))
    assert [t["item_name"] for t in analytics.top_selling_items(store)] == ["Zeta", "Alpha", "Mid"]


def test_top_selling_items_limit(store, make_form):
    for i in range(7):
        add_sale(store, make_form(item_name=f"Item {i}", quantity=i + 1))
    assert len(analytics.top_selling_items(store)) == 5
    assert analytics.top_selling_items(store, 0) == []
    assert analytics.top_selling_items(store, -3) == []


def test_by_category_sorted_by_total(store, make_form):
    add_sale(store, make_form(category="Shirts", unit_price=100))
    add_sale(store, make_form(category="Shoes", unit_price=300))
    add_sale(store, make_form(category="Shirts", unit_price=150))

    assert analytics.by_category(store) == [
        {"category": "Shoes", "count": 1, "total": 300.0},
        {"category": "Shirts", "count": 2, "total": 250.0},
    ]


def test_by_payment_method_in_first_seen_order(store, make_form):
    add_sale(store, make_form(payment_method="Card", unit_price=10))
    add_sale(store, make_form(payment_method="Cash", unit_price=500))
    add_sale(store, make_form(payment_method="Card", unit_price=30))

    assert analytics.by_payment_method(store) == [
        {"payment_method": "Card", "count": 2, "total": 40.0},
        {"payment_method": "Cash", "count": 1, "total": 500.0},
    ]


def test_breakdowns_empty(store):
    assert analytics.by_category(store) == []
    assert analytics.by_payment_method(store) == []
    assert analytics.top_selling_items(store) == []


def test_dashboard_stats(store, make_form):
    for i in range(12):
        add_sale(store, make_form(item_name=f"Item {i}", unit_price=10))

    stats = analytics.dashboard_stats(store, TODAY)
    assert stats.today == pytest.approx(120.0)
    assert stats.month == pytest.approx(120.0)
    assert len(stats.recent_sales) == analytics.RECENT_SALES_LIMIT
    assert stats.recent_sales[0].item_name == "Item 11"
    assert len(stats.top_items) == 5
    assert stats.by_category == [{"category": "Shirts", "count": 12, "total": 120.0}]
