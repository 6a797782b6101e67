from __future__ import annotations

from datetime import date

import pytest

from core.services.sales import SaleForm
from core.store import SalesStore

TODAY = date(2026, 10, 19)


@pytest.fixture
def store(tmp_path):
    s = SalesStore.open(tmp_path / "sales.db")
    yield s
    s.close()


@pytest.fixture
def make_form():
    def _make(**overrides) -> SaleForm:
        values = dict(
            date=TODAY,
            item_name="Linen Shirt",
            category="Shirts",
            quantity=1,
            unit_price=100.0,
            payment_method="Cash",
            customer_name=None,
            notes=None,
        )
        values.update(overrides)
        return SaleForm(**values)

    return _make
