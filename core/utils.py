from __future__ import annotations

import calendar
from datetime import datetime, date, timezone


def iso_now() -> str:
    # Microseconds kept so created_at orders rows inserted within one second.
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def safe_div(n: float, d: float) -> float:
    return float(n) / float(d) if d else 0.0


def to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def month_bounds(today: date) -> tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def format_currency(amount: float, currency: str = "LKR") -> str:
    return f"{currency} {float(amount):,.2f}"


def format_date(value) -> str:
    # "2026-10-19" -> "October 19, 2026"
    d = to_date(value)
    return f"{d.strftime('%B')} {d.day}, {d.year}"
