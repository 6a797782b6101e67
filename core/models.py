from __future__ import annotations

import sqlite3
from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class SaleInput:
    """Mutable fields of a sale, as written by the store."""

    date: str
    item_name: str
    category: str
    quantity: int
    unit_price: float
    total_amount: float
    payment_method: str
    customer_name: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class Sale:
    id: int
    date: str
    item_name: str
    category: str
    quantity: int
    unit_price: float
    total_amount: float
    payment_method: str
    customer_name: Optional[str]
    notes: Optional[str]
    created_at: str

    @classmethod
    def from_row(cls, r: sqlite3.Row) -> "Sale":
        return cls(
            id=int(r["id"]),
            date=str(r["date"]),
            item_name=str(r["item_name"]),
            category=str(r["category"]),
            quantity=int(r["quantity"]),
            unit_price=float(r["unit_price"]),
            total_amount=float(r["total_amount"]),
            payment_method=str(r["payment_method"]),
            customer_name=r["customer_name"],
            notes=r["notes"],
            created_at=str(r["created_at"]),
        )

    def to_input(self) -> SaleInput:
        return SaleInput(
            date=self.date,
            item_name=self.item_name,
            category=self.category,
            quantity=self.quantity,
            unit_price=self.unit_price,
            total_amount=self.total_amount,
            payment_method=self.payment_method,
            customer_name=self.customer_name,
            notes=self.notes,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Category:
    id: int
    name: str
