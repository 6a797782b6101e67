from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from core.errors import NotFoundError, ValidationError
from core.models import Category, Sale, SaleInput
from core.store import SalesStore
from core.utils import to_date

logger = logging.getLogger(__name__)


@dataclass
class SaleForm:
    """Raw values collected by the Add Sale page (or any other caller)."""

    date: Union[date, str, None]
    item_name: str
    category: str
    quantity: Union[int, str, None]
    unit_price: Union[float, str, None]
    payment_method: str = "Cash"
    customer_name: Optional[str] = None
    notes: Optional[str] = None


def _normalize_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def compute_total(quantity: int, unit_price: float) -> float:
    return int(quantity) * float(unit_price)


def validate_sale(form: SaleForm) -> SaleInput:
    """
    Check required fields and build the row the store writes.
    total_amount is always derived from quantity * unit_price here.
    """
    errors: dict[str, str] = {}

    item_name = _normalize_text(form.item_name)
    if not item_name:
        errors["item_name"] = "Item name is required."

    category = _normalize_text(form.category)
    if not category:
        errors["category"] = "Please select a category."

    quantity = 0
    try:
        quantity = int(form.quantity)
        if quantity <= 0 or float(form.quantity) != quantity:
            raise ValueError
    except (TypeError, ValueError, OverflowError):
        errors["quantity"] = "Quantity must be a whole number greater than 0."

    unit_price = 0.0
    try:
        unit_price = float(form.unit_price)
        if not math.isfinite(unit_price) or not unit_price > 0:
            raise ValueError
    except (TypeError, ValueError):
        errors["unit_price"] = "Price must be greater than 0."

    sale_date = None
    if form.date in (None, ""):
        errors["date"] = "Date is required."
    else:
        try:
            sale_date = to_date(form.date)
        except ValueError:
            errors["date"] = "Date must be a valid YYYY-MM-DD date."

    payment_method = _normalize_text(form.payment_method)
    if not payment_method:
        errors["payment_method"] = "Payment method is required."

    if errors:
        raise ValidationError(errors)

    return SaleInput(
        date=sale_date.isoformat(),
        item_name=item_name,
        category=category,
        quantity=quantity,
        unit_price=unit_price,
        total_amount=compute_total(quantity, unit_price),
        payment_method=payment_method,
        customer_name=_normalize_text(form.customer_name),
        notes=_normalize_text(form.notes),
    )


# -------------------------
# Boundary operations
# -------------------------

def add_sale(store: SalesStore, form: SaleForm) -> int:
    return store.create(validate_sale(form))


def get_all_sales(store: SalesStore) -> list[Sale]:
    return store.get_all()


def get_sale(store: SalesStore, sale_id: int) -> Sale:
    sale = store.get_by_id(sale_id)
    if sale is None:
        raise NotFoundError("Sale", int(sale_id))
    return sale


def update_sale(store: SalesStore, sale_id: int, form: SaleForm) -> int:
    return store.update(sale_id, validate_sale(form))


def delete_sale(store: SalesStore, sale_id: int) -> int:
    return store.delete(sale_id)


def get_sales_by_date_range(store: SalesStore, start, end) -> list[Sale]:
    return store.get_by_date_range(start, end)


def get_all_categories(store: SalesStore) -> list[Category]:
    return store.list_categories()


def add_category(store: SalesStore, name: str) -> int:
    clean = _normalize_text(name)
    if not clean:
        raise ValidationError({"name": "Category name is required."})
    return store.add_category(clean)


# -------------------------
# Sales list filters
# -------------------------

def filter_sales(
    sales: Iterable[Sale],
    *,
    search: str = "",
    category: Optional[str] = None,
    payment_method: Optional[str] = None,
    date_from=None,
    date_to=None,
) -> list[Sale]:
    """
    search matches item or customer name, case-insensitive.
    Date bounds are inclusive; empty values mean no filter.
    """
    needle = (search or "").strip().lower()
    lo = to_date(date_from).isoformat() if date_from else None
    hi = to_date(date_to).isoformat() if date_to else None

    out: list[Sale] = []
    for s in sales:
        if needle and needle not in s.item_name.lower() and needle not in (s.customer_name or "").lower():
            continue
        if category and s.category != category:
            continue
        if payment_method and s.payment_method != payment_method:
            continue
        if lo and s.date < lo:
            continue
        if hi and s.date > hi:
            continue
        out.append(s)
    return out


def sales_totals(sales: Iterable[Sale]) -> tuple[int, float]:
    sales = list(sales)
    return len(sales), float(sum(s.total_amount for s in sales))
