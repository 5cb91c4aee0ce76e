"""
Unit tests for aggregation and trailing-window queries.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from mrr.aggregation import aggregate, month_key, months_newest_first, mrr_since, trailing_windows
from mrr.models import RevenueRecord


def record(start: datetime, amount: str, sub_id: str = "sub") -> RevenueRecord:
    return RevenueRecord(subscription_id=sub_id, start_date=start, amount=Decimal(amount))


@pytest.fixture
def records(now):
    return [
        record(now - timedelta(days=40), "40", "sub_d"),
        record(now, "10", "sub_a"),
        record(now - timedelta(days=10), "30", "sub_c"),
        record(now - timedelta(days=1), "20", "sub_b"),
    ]


class TestAggregate:
    """Test suite for aggregate."""

    def test_total(self, records):
        assert aggregate(records).total_mrr == Decimal("100")

    def test_month_buckets(self, records):
        buckets = aggregate(records).month_buckets

        assert [b.key for b in buckets] == ["2024-05", "2024-06"]
        assert (buckets[0].subscriptions, buckets[0].revenue) == (1, Decimal("40"))
        assert (buckets[1].subscriptions, buckets[1].revenue) == (3, Decimal("60"))

    def test_sorted_newest_first(self, records):
        ids = [r.subscription_id for r in aggregate(records).sorted_records]

        assert ids == ["sub_a", "sub_b", "sub_c", "sub_d"]

    def test_repeated_runs_are_identical(self, records):
        first = aggregate(records)
        second = aggregate(records)

        assert first == second

    def test_empty(self):
        result = aggregate([])

        assert result.total_mrr == Decimal("0")
        assert result.month_buckets == ()
        assert result.sorted_records == ()

    def test_months_newest_first(self, records):
        buckets = months_newest_first(aggregate(records).month_buckets)

        assert [b.key for b in buckets] == ["2024-06", "2024-05"]

    def test_month_key_across_year(self):
        assert month_key(datetime(2023, 12, 31, 23, 59, tzinfo=timezone.utc)) == "2023-12"


class TestMrrSince:
    """Test suite for mrr_since."""

    def test_prefix_after_cutoff(self, now):
        ordered = [
            record(now, "10"),
            record(now - timedelta(days=1), "20"),
            record(now - timedelta(days=10), "30"),
            record(now - timedelta(days=40), "40"),
        ]

        assert mrr_since(now - timedelta(days=7), ordered) == Decimal("30")

    def test_record_exactly_at_cutoff_counts(self, now):
        ordered = [record(now, "10"), record(now - timedelta(days=7), "20")]

        assert mrr_since(now - timedelta(days=7), ordered) == Decimal("30")

    def test_nothing_after_cutoff(self, now):
        ordered = [record(now - timedelta(days=10), "10")]

        assert mrr_since(now - timedelta(days=1), ordered) == Decimal("0")

    def test_everything_after_cutoff(self, now):
        ordered = [record(now, "10"), record(now - timedelta(days=2), "5")]

        assert mrr_since(now - timedelta(days=30), ordered) == Decimal("15")

    def test_empty(self, now):
        assert mrr_since(now, []) == Decimal("0")


class TestTrailingWindows:
    def test_default_windows(self, now, records):
        ordered = aggregate(records).sorted_records

        assert trailing_windows(now, ordered) == {
            1: Decimal("30"),
            7: Decimal("30"),
            30: Decimal("60"),
            90: Decimal("100"),
        }

    def test_custom_windows(self, now, records):
        ordered = aggregate(records).sorted_records

        assert trailing_windows(now, ordered, days=[14]) == {14: Decimal("60")}
