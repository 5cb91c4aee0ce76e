"""
MRR report generation.

Runs every subscription of every customer through the resolver, folds the
records into totals and month buckets, and computes trailing windows. A tier
lookup failure aborts the run; the result says so instead of raising, so
callers decide whether to stop or degrade.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from mrr.aggregation import aggregate, months_newest_first, trailing_windows
from mrr.errors import NoSubscriptions, RevenueError, TierLookupFailure, UnsupportedBillingScheme
from mrr.logging import log_action
from mrr.models import Customer, RevenueRecord, RevenueReport
from mrr.resolver import TierLookup, resolve

logger = logging.getLogger(__name__)

DEFAULT_WINDOWS = (1, 7, 30, 90)


@dataclass
class ReportOutcome:
    success: bool
    report: Optional[RevenueReport] = None
    error: Optional[TierLookupFailure] = None
    diagnostics: List[RevenueError] = field(default_factory=list)


def build_report(
    customers: Iterable[Customer],
    lookup_tiers: TierLookup,
    now: Optional[datetime] = None,
    windows: Sequence[int] = DEFAULT_WINDOWS
) -> ReportOutcome:
    """
    Build the MRR report for a set of customers.

    Args:
        customers: Customers with their subscriptions, in source order
        lookup_tiers: Callable returning the tier schedule for a plan id
        now: Reference time, defaults to the current UTC time. A naive
            value is taken as local time and converted to UTC
        windows: Trailing window lengths in days

    Returns:
        ReportOutcome with the report, or with the fatal error and no report
    """
    now = now.astimezone(timezone.utc) if now else datetime.now(timezone.utc)
    records: List[RevenueRecord] = []
    diagnostics: List[RevenueError] = []

    for customer in customers:
        if not customer.subscriptions:
            diagnostic = NoSubscriptions(customer.id)
            diagnostics.append(diagnostic)
            log_action("no_subscriptions", str(diagnostic), level="warning", customer_id=customer.id)
            continue

        for subscription in customer.subscriptions:
            try:
                record = resolve(subscription, customer.discount, now, lookup_tiers)
            except UnsupportedBillingScheme as e:
                diagnostics.append(e)
                log_action(
                    "unsupported_billing_scheme",
                    str(e),
                    level="warning",
                    customer_id=customer.id,
                    subscription_id=subscription.id,
                )
                continue
            except TierLookupFailure as e:
                logger.error(f"{e}: {e.__cause__}")
                return ReportOutcome(success=False, error=e, diagnostics=diagnostics)

            if record is not None:
                records.append(record)

    result = aggregate(records)
    report = RevenueReport(
        total_mrr=result.total_mrr,
        months=tuple(months_newest_first(result.month_buckets)),
        trailing=trailing_windows(now, result.sorted_records, windows),
        records=result.sorted_records,
    )
    logger.info(
        f"MRR report built: {len(records)} subscriptions, "
        f"{len(report.months)} months, {len(diagnostics)} diagnostics"
    )
    return ReportOutcome(success=True, report=report, diagnostics=diagnostics)
