"""
Date-range sales reports.

build_report() turns the sales of an inclusive date range into a
SalesReport; core.services.excel_export lays that structure out as a
spreadsheet.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from core.errors import EmptyReportError, InvalidRangeError
from core.store import SalesStore
from core.utils import format_date, month_bounds, safe_div, to_date

logger = logging.getLogger(__name__)

REPORT_TWO_WEEK = "2-week"
REPORT_MONTHLY = "monthly"
REPORT_CUSTOM = "custom"
REPORT_TYPES = [REPORT_TWO_WEEK, REPORT_MONTHLY, REPORT_CUSTOM]

TWO_WEEK_DAYS = 14


@dataclass
class ReportSummary:
    count: int = 0
    total: float = 0.0
    average: float = 0.0


@dataclass
class ReportLine:
    date: str
    item: str
    category: str
    qty: int
    unit_price: float
    total: float
    payment: str
    customer: str


@dataclass
class SalesReport:
    title: str
    start: str
    end: str
    date_range_label: str
    summary: ReportSummary
    category_breakdown: list[dict] = field(default_factory=list)
    payment_breakdown: list[dict] = field(default_factory=list)
    transactions: list[ReportLine] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return report_filename(self.start, self.end)


def resolve_date_range(
    mode: str,
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> tuple[date, date]:
    if mode == REPORT_TWO_WEEK:
        return today - timedelta(days=TWO_WEEK_DAYS), today
    if mode == REPORT_MONTHLY:
        return month_bounds(today)
    if mode == REPORT_CUSTOM:
        if not start or not end:
            raise InvalidRangeError("Please select both start and end dates for custom report.")
        start, end = to_date(start), to_date(end)
        if start > end:
            raise InvalidRangeError("Start date must be before end date.")
        return start, end
    raise InvalidRangeError(f"Unknown report type: {mode!r}.")


def report_filename(start, end) -> str:
    return f"Sales_Report_{to_date(start).isoformat()}_to_{to_date(end).isoformat()}.xlsx"


def _totals_by(rows: Iterable[ReportLine], key: str) -> list[dict]:
    # dict keeps first-occurrence order
    totals: dict[str, float] = {}
    for r in rows:
        name = getattr(r, key)
        totals[name] = totals.get(name, 0.0) + float(r.total)
    return [{"name": k, "total": v} for k, v in totals.items()]


def summarize_transactions(transactions: Iterable[ReportLine]) -> ReportSummary:
    transactions = list(transactions)
    total = float(sum(t.total for t in transactions))
    count = len(transactions)
    return ReportSummary(count=count, total=total, average=safe_div(total, count))


def build_report(store: SalesStore, start, end, title: str) -> SalesReport:
    start, end = to_date(start), to_date(end)
    sales = store.get_by_date_range(start, end)
    if not sales:
        logger.warning(f"No sales between {start} and {end}; report not built")
        raise EmptyReportError("No sales found in the selected date range.")

    lines = [
        ReportLine(
            date=s.date,
            item=s.item_name,
            category=s.category,
            qty=int(s.quantity),
            unit_price=float(s.unit_price),
            total=float(s.total_amount),
            payment=s.payment_method,
            customer=s.customer_name or "-",
        )
        for s in sales
    ]

    report = SalesReport(
        title=title,
        start=start.isoformat(),
        end=end.isoformat(),
        date_range_label=f"{format_date(start)} - {format_date(end)}",
        summary=summarize_transactions(lines),
        category_breakdown=_totals_by(lines, "category"),
        payment_breakdown=_totals_by(lines, "payment"),
        transactions=lines,
    )
    logger.info(
        f"Report {start}..{end}: {report.summary.count} sales, total {report.summary.total:,.2f}"
    )
    return report
