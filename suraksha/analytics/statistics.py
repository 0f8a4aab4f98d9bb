"""
Income statistics derived from the customer collection.

Every visit counts: the current visit of each customer and every entry in
its history. Figures are recomputed in full from the collection on each
change; there is no incremental state.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord
from suraksha.utils import month_key, parse_iso_date

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class IncomeStats:
    """Total, per-month, this-week and today income, in whole rupees."""

    total_income: int = 0
    monthly_income: dict[str, int] = field(default_factory=dict)
    weekly_income: int = 0
    daily_income: int = 0


def week_bounds(today: date, week_start: Optional[int] = None) -> tuple[date, date]:
    """First and last day of the calendar week containing ``today``.

    ``week_start`` is a weekday index (Monday=0, Sunday=6).
    """
    start_index = settings.schedule.week_start_index if week_start is None else week_start
    offset = (today.weekday() - start_index) % DAYS_PER_WEEK
    first = today - timedelta(days=offset)
    return first, first + timedelta(days=DAYS_PER_WEEK - 1)


def iter_visits(customers: Iterable[CustomerRecord]) -> Iterable[tuple[str, int]]:
    """Flatten customers into (date, price) pairs, current visit first."""
    for customer in customers:
        yield from customer.visits()


def compute_income_stats(
    customers: Iterable[CustomerRecord],
    today: Optional[date] = None,
    week_start: Optional[int] = None,
) -> IncomeStats:
    """Fold every visit of every customer into the four income figures.

    A visit whose date does not parse still counts toward the total but
    falls outside every month, week and day bucket.
    """
    today = today or date.today()
    first, last = week_bounds(today, week_start)

    total = 0
    weekly = 0
    daily = 0
    monthly: dict[str, int] = {}
    unparsed = 0

    for raw_date, price in iter_visits(customers):
        total += price
        visit_date = parse_iso_date(raw_date)
        if visit_date is None:
            unparsed += 1
            continue
        key = month_key(visit_date)
        monthly[key] = monthly.get(key, 0) + price
        if first <= visit_date <= last:
            weekly += price
        if visit_date == today:
            daily += price

    if unparsed:
        logger.debug("%d visits had unparseable dates and were left out of buckets", unparsed)

    return IncomeStats(
        total_income=total,
        monthly_income=monthly,
        weekly_income=weekly,
        daily_income=daily,
    )
