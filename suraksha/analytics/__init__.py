from suraksha.analytics.insights import (
    dashboard_summary,
    monthly_series,
    recent_performance,
    service_type_breakdown,
)
from suraksha.analytics.report import format_report
from suraksha.analytics.statistics import IncomeStats, compute_income_stats

__all__ = [
    "IncomeStats", "compute_income_stats",
    "dashboard_summary", "monthly_series", "recent_performance",
    "service_type_breakdown", "format_report",
]
