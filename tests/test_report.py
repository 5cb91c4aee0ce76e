"""
Tests for report rendering.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from mrr.models import MonthBucket, RevenueRecord, RevenueReport
from mrr.report import format_report, money, report_to_dict


@pytest.fixture
def report():
    start = datetime(2024, 6, 1, tzinfo=timezone.utc)
    return RevenueReport(
        total_mrr=Decimal("25.005"),
        months=(
            MonthBucket(key="2024-06", revenue=Decimal("13"), subscriptions=1),
            MonthBucket(key="2024-04", revenue=Decimal("12.005"), subscriptions=2),
        ),
        trailing={7: Decimal("13"), 1: Decimal("0")},
        records=(
            RevenueRecord("sub_1", start, Decimal("13")),
            RevenueRecord("sub_2", start, Decimal("6")),
            RevenueRecord("sub_3", start, Decimal("6.005")),
        ),
    )


def test_money_rounds_half_up():
    assert money(Decimal("1.005")) == "1.01"
    assert money(Decimal("13")) == "13.00"


def test_format_report(report):
    assert format_report(report).splitlines() == [
        "MRR is\t25.01",
        "Month over month stats",
        "=====================================",
        "2024-06 New subscriptions: 1 MRR: 13.00",
        "2024-04 New subscriptions: 2 MRR: 12.01",
        "MRR added in the last day\t0.00",
        "MRR added in the last 7 days\t13.00",
    ]


def test_report_to_dict(report):
    assert report_to_dict(report) == {
        "mrr": "25.01",
        "subscriptions": 3,
        "months": [
            {"month": "2024-06", "new_subscriptions": 1, "mrr": "13.00"},
            {"month": "2024-04", "new_subscriptions": 2, "mrr": "12.01"},
        ],
        "trailing": {"1": "0.00", "7": "13.00"},
    }
