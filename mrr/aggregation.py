"""
Revenue aggregation and trailing-window queries.
"""

from bisect import bisect_left
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

from mrr.models import MonthBucket, RevenueRecord


@dataclass(frozen=True)
class Aggregate:
    total_mrr: Decimal
    month_buckets: Tuple[MonthBucket, ...]  # ascending by month key
    sorted_records: Tuple[RevenueRecord, ...]  # start date descending


def month_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m")


def aggregate(records: Iterable[RevenueRecord]) -> Aggregate:
    """
    Fold revenue records into a total, month buckets and a sorted list.

    Every call starts from empty accumulators, so repeated calls over the
    same records give the same result.
    """
    records = list(records)
    total = Decimal("0")
    buckets: Dict[str, MonthBucket] = {}

    for record in records:
        total += record.amount
        key = month_key(record.start_date)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthBucket(key=key)
        bucket.revenue += record.amount
        bucket.subscriptions += 1

    return Aggregate(
        total_mrr=total,
        month_buckets=tuple(buckets[key] for key in sorted(buckets)),
        sorted_records=tuple(sorted(records, key=lambda r: r.start_date, reverse=True)),
    )


def mrr_since(cutoff: datetime, records: Sequence[RevenueRecord]) -> Decimal:
    """
    Sum revenue of records that started at or after cutoff.

    records must be sorted by start date, newest first (as returned by
    aggregate). Unsorted input gives wrong sums; it is not checked.
    """
    end = bisect_left(records, True, key=lambda r: cutoff > r.start_date)
    return sum((r.amount for r in records[:end]), Decimal("0"))


def trailing_windows(
    now: datetime,
    records: Sequence[RevenueRecord],
    days: Iterable[int] = (1, 7, 30, 90)
) -> Dict[int, Decimal]:
    """MRR added in each trailing window of the given lengths in days."""
    return {d: mrr_since(now - timedelta(days=d), records) for d in days}


def months_newest_first(buckets: Sequence[MonthBucket]) -> List[MonthBucket]:
    return list(reversed(buckets))
