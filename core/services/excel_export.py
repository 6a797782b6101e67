from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from core.services.reports import SalesReport
from core.utils import format_currency, format_date

logger = logging.getLogger(__name__)

SHEET_TITLE = "Sales Report"
COLUMN_WIDTHS = {"A": 12, "B": 25, "C": 15, "D": 10, "E": 12, "F": 12, "G": 15, "H": 20}
DETAIL_HEADERS = ["Date", "Item Name", "Category", "Qty", "Unit Price", "Total", "Payment", "Customer"]
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE0E0E0")
HEADER_BORDER = Border(bottom=Side(style="thin"))


class ExcelExporter:
    """
    Writes a SalesReport to a single-sheet workbook.

    Usage:
        exporter = ExcelExporter(report, output_dir=settings.export_dir)
        path = exporter.export()
    """

    def __init__(
        self,
        report: SalesReport,
        output_dir: Optional[Path] = None,
        filename: Optional[str] = None,
        currency: str = "LKR",
    ):
        self.report = report
        self.output_dir = Path(output_dir) if output_dir else Path.home() / "Downloads"
        self.filename = filename or report.filename
        self.filepath = self.output_dir / self.filename
        self.currency = currency

    def export(self) -> Path:
        logger.info(f"Excel export started: {self.filepath}")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.build_workbook().save(self.filepath)
        logger.info(f"Excel export finished: {self.filepath}")
        return self.filepath

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.build_workbook().save(buf)
        return buf.getvalue()

    def build_workbook(self) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE
        for col, width in COLUMN_WIDTHS.items():
            ws.column_dimensions[col].width = width

        row = self._write_header(ws, 1)
        row = self._write_summary(ws, row)
        row = self._write_breakdown(ws, row, "SALES BY CATEGORY", self.report.category_breakdown)
        row = self._write_breakdown(ws, row, "SALES BY PAYMENT METHOD", self.report.payment_breakdown)
        self._write_transactions(ws, row + 1)
        return wb

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency)

    def _merged_line(self, ws: Worksheet, row: int, value: str, size: int, bold: bool) -> None:
        ws.merge_cells(f"A{row}:H{row}")
        cell = ws[f"A{row}"]
        cell.value = value
        cell.font = Font(size=size, bold=bold)
        cell.alignment = Alignment(horizontal="center")

    def _section_title(self, ws: Worksheet, row: int, value: str) -> None:
        ws[f"A{row}"] = value
        ws[f"A{row}"].font = Font(size=12, bold=True)

    def _write_header(self, ws: Worksheet, row: int) -> int:
        self._merged_line(ws, row, self.report.title, 18, True)
        row += 2
        self._merged_line(ws, row, "SALES REPORT", 14, True)
        row += 1
        self._merged_line(ws, row, self.report.date_range_label, 12, False)
        return row + 2

    def _write_summary(self, ws: Worksheet, row: int) -> int:
        s = self.report.summary
        self._section_title(ws, row, "SUMMARY")
        row += 1
        ws[f"A{row}"] = "Total Transactions:"
        ws[f"B{row}"] = s.count
        row += 1
        ws[f"A{row}"] = "Total Revenue:"
        ws[f"B{row}"] = self._money(s.total)
        ws[f"B{row}"].font = Font(bold=True)
        row += 1
        ws[f"A{row}"] = "Average Sale:"
        ws[f"B{row}"] = self._money(s.average)
        return row + 2

    def _write_breakdown(self, ws: Worksheet, row: int, title: str, entries: list[dict]) -> int:
        self._section_title(ws, row, title)
        row += 1
        for e in entries:
            ws[f"A{row}"] = e["name"]
            ws[f"B{row}"] = self._money(e["total"])
            row += 1
        return row + 1

    def _write_transactions(self, ws: Worksheet, row: int) -> int:
        self._section_title(ws, row, "DETAILED TRANSACTIONS")
        row += 1

        for col, header in enumerate(DETAIL_HEADERS, start=1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL
            cell.border = HEADER_BORDER
        row += 1

        for t in self.report.transactions:
            values = [
                format_date(t.date),
                t.item,
                t.category,
                t.qty,
                self._money(t.unit_price),
                self._money(t.total),
                t.payment,
                t.customer,
            ]
            for col, value in enumerate(values, start=1):
                ws.cell(row=row, column=col, value=value)
            row += 1
        return row
