"""
MRR - recurring revenue estimation for Stripe subscriptions.

Graduated tier pricing, discount stacking, monthly normalisation, month
buckets and trailing-window MRR.
"""

from .aggregation import Aggregate, aggregate, mrr_since, trailing_windows
from .discounts import apply_discount, apply_discounts
from .engine import ReportOutcome, build_report
from .errors import (
    NoSubscriptions,
    RevenueError,
    TierLookupFailure,
    UnsupportedBillingScheme,
)
from .models import (
    UNBOUNDED,
    BillingInterval,
    BillingScheme,
    Coupon,
    Customer,
    Discount,
    MonthBucket,
    Plan,
    RevenueRecord,
    RevenueReport,
    Subscription,
    SubscriptionStatus,
    Tier,
    TierSchedule,
    TiersMode,
)
from .resolver import resolve
from .tiers import evaluate

__all__ = [
    'Aggregate',
    'aggregate',
    'mrr_since',
    'trailing_windows',
    'apply_discount',
    'apply_discounts',
    'ReportOutcome',
    'build_report',
    'NoSubscriptions',
    'RevenueError',
    'TierLookupFailure',
    'UnsupportedBillingScheme',
    'UNBOUNDED',
    'BillingInterval',
    'BillingScheme',
    'Coupon',
    'Customer',
    'Discount',
    'MonthBucket',
    'Plan',
    'RevenueRecord',
    'RevenueReport',
    'Subscription',
    'SubscriptionStatus',
    'Tier',
    'TierSchedule',
    'TiersMode',
    'resolve',
    'evaluate',
]
