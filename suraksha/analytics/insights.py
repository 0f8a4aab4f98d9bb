"""Dashboard and analytics views derived from the collection.

These are read-only summaries for display. The income figures come from
``IncomeStats``; the per-category and recent-performance breakdowns look
at current visits only, the way the dashboard cards do.
"""

import logging
from calendar import monthrange
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from suraksha.analytics.statistics import IncomeStats
from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord
from suraksha.utils import month_key, parse_iso_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    total_income: int
    month_income: int
    customers_this_month: int
    top_service_type: str


@dataclass(frozen=True)
class ServiceTypeShare:
    name: str
    customers: int
    income: int


@dataclass(frozen=True)
class MonthPerformance:
    month: str
    customers: int
    income: int


def dashboard_summary(
    customers: Iterable[CustomerRecord],
    stats: IncomeStats,
    today: Optional[date] = None,
) -> DashboardSummary:
    """Headline figures: totals, this month's income and customers, top category."""
    customers = list(customers)
    current_month = month_key(today or date.today())
    this_month = sum(1 for c in customers if c.service_date[:7] == current_month)
    counts = Counter(c.service_type.value for c in customers)
    top = counts.most_common(1)[0][0] if counts else "N/A"
    return DashboardSummary(
        total_income=stats.total_income,
        month_income=stats.monthly_income.get(current_month, 0),
        customers_this_month=this_month,
        top_service_type=top,
    )


def monthly_series(stats: IncomeStats) -> list[tuple[str, int]]:
    """(YYYY-MM, income) pairs in chronological order."""
    return sorted(stats.monthly_income.items())


def service_type_breakdown(customers: Iterable[CustomerRecord]) -> list[ServiceTypeShare]:
    """Customer count and income per category, in first-seen order."""
    shares: dict[str, list[int]] = {}
    for customer in customers:
        bucket = shares.setdefault(customer.service_type.value, [0, 0])
        bucket[0] += 1
        bucket[1] += customer.price
    return [ServiceTypeShare(name, count, income) for name, (count, income) in shares.items()]


def _months_back(day: date, months: int) -> date:
    year, month = divmod(day.year * 12 + (day.month - 1) - months, 12)
    month += 1
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def recent_performance(
    customers: Iterable[CustomerRecord],
    today: Optional[date] = None,
    months: Optional[int] = None,
) -> list[MonthPerformance]:
    """Customers served and income per month over the last few months."""
    today = today or date.today()
    months = months or settings.schedule.performance_months
    cutoff = _months_back(today, months)

    per_month: dict[str, list[int]] = {}
    for customer in customers:
        served = parse_iso_date(customer.service_date)
        if served is None or served < cutoff:
            continue
        bucket = per_month.setdefault(month_key(served), [0, 0])
        bucket[0] += 1
        bucket[1] += customer.price

    return [
        MonthPerformance(month, count, income)
        for month, (count, income) in sorted(per_month.items())
    ]
