"""
CSV and PDF exports of the customer collection.

Both are read-only over the records. The PDF is drawn directly on a
reportlab canvas: a header, the income summary, then one row per customer.
"""

import csv
import logging
from datetime import date
from typing import BinaryIO, Iterable, Optional, TextIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from suraksha.analytics.statistics import IncomeStats
from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Name",
    "Phone",
    "Address",
    "Service Date",
    "Service Type",
    "Price",
    "Next Service Date",
    "Reminder Sent",
    "Visits",
    "Notes",
]

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 15 * mm
FONT_NORMAL = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE_S = 8
FONT_SIZE_M = 10
FONT_SIZE_L = 14

# x offsets of the customer table columns
TABLE_COLUMNS = [
    ("Name", 0),
    ("Phone", 45 * mm),
    ("Date", 80 * mm),
    ("Type", 105 * mm),
    ("Price", 135 * mm),
    ("Next", 155 * mm),
]


def _csv_row(customer: CustomerRecord) -> list[str]:
    return [
        customer.name,
        customer.phone,
        customer.address,
        customer.service_date,
        customer.label,
        str(customer.price),
        customer.next_service_date or "",
        "Yes" if customer.reminder_sent else "No",
        str(len(customer.history) + 1),
        customer.notes or "",
    ]


def export_csv(customers: Iterable[CustomerRecord], stream: TextIO) -> int:
    """Write one row per customer (current visit). Returns rows written."""
    writer = csv.writer(stream)
    writer.writerow(CSV_COLUMNS)
    count = 0
    for customer in customers:
        writer.writerow(_csv_row(customer))
        count += 1
    logger.info("Exported %d customers to CSV", count)
    return count


class ServiceReportGenerator:
    """Multi-page PDF report: income summary and customer table."""

    def __init__(
        self,
        buffer: BinaryIO,
        customers: Iterable[CustomerRecord],
        stats: IncomeStats,
        today: Optional[date] = None,
    ) -> None:
        self.c = canvas.Canvas(buffer, pagesize=A4)
        self.customers = list(customers)
        self.stats = stats
        self.today = today or date.today()
        self.cursor_y = PAGE_HEIGHT - MARGIN

    def _move_down(self, amount: float) -> None:
        self.cursor_y -= amount

    def _ensure_space(self, needed: float) -> None:
        if self.cursor_y - needed < MARGIN:
            self.c.showPage()
            self.cursor_y = PAGE_HEIGHT - MARGIN

    def _draw_text(self, text: str, font: str = FONT_NORMAL, size: int = FONT_SIZE_M) -> None:
        self._ensure_space(size + 2)
        self.c.setFont(font, size)
        self.c.drawString(MARGIN, self.cursor_y, text)
        self._move_down(size + 4)

    def _draw_line(self) -> None:
        self._move_down(2)
        self.c.line(MARGIN, self.cursor_y, PAGE_WIDTH - MARGIN, self.cursor_y)
        self._move_down(10)

    def _draw_header(self) -> None:
        self._draw_text(f"{settings.business.name} - Service Report", FONT_BOLD, FONT_SIZE_L)
        self._draw_text(f"Generated {self.today.isoformat()}", size=FONT_SIZE_S)
        self._draw_line()

    def _draw_summary(self) -> None:
        symbol = settings.business.currency_symbol
        self._draw_text("Income Summary", FONT_BOLD)
        self._draw_text(f"Total income: {symbol}{self.stats.total_income:,}")
        self._draw_text(f"This week: {symbol}{self.stats.weekly_income:,}")
        self._draw_text(f"Today: {symbol}{self.stats.daily_income:,}")
        for month, income in sorted(self.stats.monthly_income.items()):
            self._draw_text(f"{month}: {symbol}{income:,}", size=FONT_SIZE_S)
        self._draw_line()

    def _draw_row(self, values: list[str], font: str = FONT_NORMAL) -> None:
        self._ensure_space(FONT_SIZE_S + 4)
        self.c.setFont(font, FONT_SIZE_S)
        for (_, offset), value in zip(TABLE_COLUMNS, values):
            self.c.drawString(MARGIN + offset, self.cursor_y, value[:28])
        self._move_down(FONT_SIZE_S + 4)

    def _draw_customers(self) -> None:
        self._draw_text(f"Customers ({len(self.customers)})", FONT_BOLD)
        self._draw_row([name for name, _ in TABLE_COLUMNS], FONT_BOLD)
        for customer in self.customers:
            self._draw_row([
                customer.name,
                customer.phone,
                customer.service_date,
                customer.label,
                f"{customer.price:,}",
                customer.next_service_date or "-",
            ])

    def generate(self) -> None:
        self._draw_header()
        self._draw_summary()
        self._draw_customers()
        self.c.save()
        logger.info("PDF report generated for %d customers", len(self.customers))


def export_pdf(
    customers: Iterable[CustomerRecord],
    stats: IncomeStats,
    buffer: BinaryIO,
    today: Optional[date] = None,
) -> None:
    ServiceReportGenerator(buffer, customers, stats, today).generate()
