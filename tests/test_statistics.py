"""Tests for the income statistics aggregator."""

from datetime import date

from suraksha.analytics.statistics import IncomeStats, compute_income_stats, week_bounds
from tests.conftest import make_record, make_visit

# Wednesday; with a Sunday start the week is 2024-06-09 .. 2024-06-15
TODAY = date(2024, 6, 12)
SUNDAY = 6
MONDAY = 0


class TestWeekBounds:
    def test_sunday_start(self):
        assert week_bounds(TODAY, SUNDAY) == (date(2024, 6, 9), date(2024, 6, 15))

    def test_monday_start(self):
        assert week_bounds(TODAY, MONDAY) == (date(2024, 6, 10), date(2024, 6, 16))

    def test_today_is_week_start(self):
        assert week_bounds(date(2024, 6, 9), SUNDAY)[0] == date(2024, 6, 9)


class TestComputeIncomeStats:
    def test_empty_collection(self):
        assert compute_income_stats([], today=TODAY) == IncomeStats()

    def test_total_counts_current_and_history(self):
        customers = [
            make_record(id="a", price=1000, history=[make_visit(price=500), make_visit(price=250)]),
            make_record(id="b", phone="+912222222222", price=300),
        ]
        stats = compute_income_stats(customers, today=TODAY)
        assert stats.total_income == 2050

    def test_monthly_buckets_include_history(self):
        customers = [
            make_record(service_date="2024-06-01", price=1000,
                        history=[make_visit(date="2024-05-20", price=400),
                                 make_visit(date="2024-06-02", price=100)]),
        ]
        stats = compute_income_stats(customers, today=TODAY)
        assert stats.monthly_income == {"2024-06": 1100, "2024-05": 400}

    def test_weekly_income_uses_sunday_week(self):
        customers = [
            make_record(id="a", service_date="2024-06-09", price=100),
            make_record(id="b", phone="+912", service_date="2024-06-15", price=200),
            make_record(id="c", phone="+913", service_date="2024-06-08", price=400),
            make_record(id="d", phone="+914", service_date="2024-06-16", price=800),
        ]
        stats = compute_income_stats(customers, today=TODAY, week_start=SUNDAY)
        assert stats.weekly_income == 300

    def test_daily_income_exact_date_only(self):
        customers = [
            make_record(id="a", service_date="2024-06-12", price=100,
                        history=[make_visit(date="2024-06-12", price=50)]),
            make_record(id="b", phone="+912", service_date="2024-06-11", price=200),
        ]
        stats = compute_income_stats(customers, today=TODAY)
        assert stats.daily_income == 150

    def test_malformed_date_counts_in_total_only(self):
        customers = [
            make_record(id="a", service_date="not-a-date", price=700),
            make_record(id="j", phone="+919", service_date="2024-06-12garbage", price=40),
            make_record(id="b", phone="+912", service_date="2024-06-12", price=100,
                        history=[make_visit(date="", price=30)]),
        ]
        stats = compute_income_stats(customers, today=TODAY)
        assert stats.total_income == 870
        assert stats.monthly_income == {"2024-06": 100}
        assert stats.weekly_income == 100
        assert stats.daily_income == 100

    def test_timestamp_dates_bucket_by_day(self):
        customers = [make_record(service_date="2024-06-12T08:30:00", price=90)]
        stats = compute_income_stats(customers, today=TODAY)
        assert stats.daily_income == 90

    def test_recomputes_from_scratch(self):
        customers = [make_record(price=100)]
        first = compute_income_stats(customers, today=TODAY)
        second = compute_income_stats(customers, today=TODAY)
        assert first == second
        assert first is not second
