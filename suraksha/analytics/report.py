"""Plain-text analytics report for the terminal."""

from datetime import date
from typing import Iterable, Optional

from suraksha.analytics.insights import (
    dashboard_summary,
    monthly_series,
    recent_performance,
    service_type_breakdown,
)
from suraksha.analytics.statistics import IncomeStats
from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord


def format_amount(amount: int) -> str:
    return f"{settings.business.currency_symbol}{amount:,}"


def format_report(
    customers: Iterable[CustomerRecord],
    stats: IncomeStats,
    today: Optional[date] = None,
) -> str:
    """Format income figures and breakdowns into a human-readable report."""
    customers = list(customers)
    today = today or date.today()
    summary = dashboard_summary(customers, stats, today)

    lines = [
        "=" * 60,
        f"{settings.business.name.upper()} - INCOME REPORT ({today.isoformat()})",
        "=" * 60,
        "",
        "INCOME",
        f"  Total:                  {format_amount(stats.total_income)}",
        f"  This month:             {format_amount(summary.month_income)}",
        f"  This week:              {format_amount(stats.weekly_income)}",
        f"  Today:                  {format_amount(stats.daily_income)}",
        "",
        "CUSTOMERS",
        f"  On record:              {len(customers)}",
        f"  Serviced this month:    {summary.customers_this_month}",
        f"  Top service type:       {summary.top_service_type}",
        "",
        "MONTHLY INCOME",
    ]
    series = monthly_series(stats)
    if not series:
        lines.append("  (no dated visits)")
    for month, income in series:
        lines.append(f"  {month}                 {format_amount(income)}")

    lines += ["", "SERVICE TYPES"]
    for share in service_type_breakdown(customers):
        lines.append(
            f"  {share.name:<8} {share.customers:>4} customers  {format_amount(share.income)}"
        )

    lines += ["", f"LAST {settings.schedule.performance_months} MONTHS"]
    for perf in recent_performance(customers, today):
        lines.append(
            f"  {perf.month}  {perf.customers:>4} customers  {format_amount(perf.income)}"
        )
    lines.append("=" * 60)
    return "\n".join(lines)
