from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Optional

from core.schema import PAYMENT_METHODS
from core.services.sales import SaleForm, add_sale
from core.store import SalesStore

logger = logging.getLogger(__name__)

DEMO_ITEMS = [
    ("Linen Shirt", "Shirts", 2450.0),
    ("Oxford Shirt", "Shirts", 2900.0),
    ("Chino Pants", "Pants", 3400.0),
    ("Denim Jeans", "Pants", 4200.0),
    ("Summer Dress", "Dresses", 5200.0),
    ("Rain Jacket", "Jackets", 7800.0),
    ("Leather Belt", "Accessories", 1500.0),
    ("Canvas Sneakers", "Shoes", 6100.0),
]
DEMO_CUSTOMERS = [None, None, "Nimal", "Ayesha", "Kasun", "Dilani"]


def wipe_all(store: SalesStore) -> None:
    # Categories stay: they are never deleted.
    store.wipe_sales()


def load_demo_data(store: SalesStore, *, today: Optional[date] = None, days: int = 30, seed: int = 7) -> int:
    rng = random.Random(seed)
    today = today or date.today()

    n = 0
    for offset in range(days, -1, -1):
        day = today - timedelta(days=offset)
        for _ in range(rng.randint(0, 4)):
            name, category, price = rng.choice(DEMO_ITEMS)
            add_sale(
                store,
                SaleForm(
                    date=day,
                    item_name=name,
                    category=category,
                    quantity=rng.randint(1, 4),
                    unit_price=price,
                    payment_method=rng.choice(PAYMENT_METHODS),
                    customer_name=rng.choice(DEMO_CUSTOMERS),
                    notes="Demo sale",
                ),
            )
            n += 1

    logger.info(f"Loaded {n} demo sales")
    return n
