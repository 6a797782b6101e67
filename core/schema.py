SCHEMA_SQL = r"""
-- Sales (one row per transaction line)
CREATE TABLE IF NOT EXISTS sales (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  date TEXT NOT NULL,                    -- ISO date
  item_name TEXT NOT NULL,
  category TEXT NOT NULL,                -- denormalized category name, no FK
  quantity INTEGER NOT NULL,
  unit_price REAL NOT NULL,
  total_amount REAL NOT NULL,            -- quantity * unit_price, computed by the caller
  payment_method TEXT NOT NULL,
  customer_name TEXT,
  notes TEXT,
  created_at TEXT NOT NULL               -- ISO datetime, set once
);

CREATE INDEX IF NOT EXISTS idx_sales_date ON sales(date);

-- Categories
CREATE TABLE IF NOT EXISTS categories (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL UNIQUE
);
"""

DEFAULT_CATEGORIES = ["Shirts", "Pants", "Dresses", "Jackets", "Accessories", "Shoes"]

PAYMENT_METHODS = ["Cash", "Card", "Online Transfer", "Check"]
