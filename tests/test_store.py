from __future__ import annotations

import sqlite3

import pytest

from core.errors import DuplicateError
from core.models import SaleInput
from core.schema import DEFAULT_CATEGORIES
from core.store import SalesStore, get_store, release_store


def _sale(**overrides) -> SaleInput:
    values = dict(
        date="2026-10-19",
        item_name="Oxford Shirt",
        category="Shirts",
        quantity=2,
        unit_price=1500.0,
        total_amount=3000.0,
        payment_method="Card",
        customer_name="Ayesha",
        notes="gift wrap",
    )
    values.update(overrides)
    return SaleInput(**values)


def test_open_seeds_default_categories_once(tmp_path):
    path = tmp_path / "sales.db"
    with SalesStore.open(path) as store:
        assert sorted(c.name for c in store.list_categories()) == sorted(DEFAULT_CATEGORIES)
        store.add_category("Hats")

    with SalesStore.open(path) as store:
        assert len(store.list_categories()) == len(DEFAULT_CATEGORIES) + 1


def test_close_releases_connection(tmp_path):
    store = SalesStore.open(tmp_path / "sales.db")
    store.close()
    assert store.conn is None
    store.close()


def test_create_then_get_by_id_round_trips(store):
    sale = _sale()
    sale_id = store.create(sale)

    got = store.get_by_id(sale_id)
    assert got is not None
    assert got.id == sale_id
    assert got.created_at
    assert got.to_input() == sale


def test_get_by_id_missing_returns_none(store):
    assert store.get_by_id(999) is None


def test_get_all_orders_by_date_then_creation_desc(store):
    a = store.create(_sale(date="2026-10-17", item_name="A"))
    b = store.create(_sale(date="2026-10-19", item_name="B"))
    c = store.create(_sale(date="2026-10-19", item_name="C"))
    d = store.create(_sale(date="2026-10-18", item_name="D"))

    assert [s.id for s in store.get_all()] == [c, b, d, a]


def test_get_by_date_range_is_inclusive(store):
    store.create(_sale(date="2026-10-01", item_name="before"))
    first = store.create(_sale(date="2026-10-05", item_name="first"))
    last = store.create(_sale(date="2026-10-10", item_name="last"))
    store.create(_sale(date="2026-10-11", item_name="after"))

    got = store.get_by_date_range("2026-10-05", "2026-10-10")
    assert [s.id for s in got] == [last, first]


def test_update_overwrites_mutable_fields_only(store):
    sale_id = store.create(_sale())
    before = store.get_by_id(sale_id)

    changed = _sale(item_name="Flannel Shirt", quantity=3, unit_price=1000.0, total_amount=3000.0,
                    customer_name=None, notes=None)
    assert store.update(sale_id, changed) == 1

    after = store.get_by_id(sale_id)
    assert after.to_input() == changed
    assert after.created_at == before.created_at


def test_update_missing_returns_zero(store):
    assert store.update(42, _sale()) == 0


def test_delete(store):
    sale_id = store.create(_sale())
    assert store.delete(sale_id) == 1
    assert store.get_by_id(sale_id) is None
    assert store.delete(sale_id) == 0


def test_list_categories_sorted_by_name(store):
    store.add_category("Bags")
    names = [c.name for c in store.list_categories()]
    assert names == sorted(names)
    assert "Bags" in names


def test_duplicate_category_rejected_and_table_unchanged(store):
    before = store.count_rows()["categories"]
    with pytest.raises(DuplicateError):
        store.add_category("Shirts")
    assert store.count_rows()["categories"] == before


def test_store_does_not_recompute_total(store):
    # total_amount is the caller's responsibility
    sale_id = store.create(_sale(quantity=2, unit_price=10.0, total_amount=5.0))
    assert store.get_by_id(sale_id).total_amount == 5.0


def test_not_null_constraint_surfaces(store):
    with pytest.raises(sqlite3.IntegrityError):
        store.conn.execute("INSERT INTO sales (date) VALUES ('2026-10-19')")


def test_wipe_sales_keeps_categories(store):
    store.create(_sale())
    store.wipe_sales()
    counts = store.count_rows()
    assert counts["sales"] == 0
    assert counts["categories"] == len(DEFAULT_CATEGORIES)


def test_release_store_closes_cached_handle(tmp_path):
    path = tmp_path / "sales.db"
    store = get_store(path)
    assert get_store(path) is store

    release_store(store)
    assert store.conn is None

    reopened = get_store(path)
    assert reopened is not store
    assert reopened.conn is not None
    release_store(reopened)
