"""
Subscription revenue resolution.

Turns one subscription into its monthly-equivalent revenue record, or
excludes it.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from mrr.discounts import apply_discounts, discount_horizon
from mrr.errors import TierLookupFailure, UnsupportedBillingScheme
from mrr.models import (
    BillingInterval,
    BillingScheme,
    Discount,
    RevenueRecord,
    Subscription,
    SubscriptionStatus,
    TierSchedule,
)
from mrr.tiers import price_schedule

logger = logging.getLogger(__name__)

TierLookup = Callable[[str], TierSchedule]

MONTHS_PER_YEAR = Decimal("12")
MINOR_UNITS = Decimal("100")


def will_lapse(subscription: Subscription, now: datetime) -> bool:
    """True if the subscription cancels at period end within the next year."""
    if not subscription.cancel_at_period_end:
        return False
    if subscription.canceled_at is None:
        return True
    return subscription.canceled_at < discount_horizon(now)


def resolve(
    subscription: Subscription,
    customer_discount: Optional[Discount],
    now: datetime,
    lookup_tiers: TierLookup
) -> Optional[RevenueRecord]:
    """
    Resolve a subscription's monthly recurring revenue.

    Args:
        subscription: Subscription to price
        customer_discount: Discount attached to the owning customer
        now: Reference time
        lookup_tiers: Callable returning the tier schedule for a plan id

    Returns:
        RevenueRecord in major currency units, or None if excluded

    Raises:
        UnsupportedBillingScheme: Plan is not tiered
        TierLookupFailure: lookup_tiers raised
    """
    if will_lapse(subscription, now):
        logger.debug(f"Skipping {subscription.id}: cancels within a year")
        return None
    if subscription.status != SubscriptionStatus.ACTIVE:
        logger.debug(f"Skipping {subscription.id}: status {subscription.status.value}")
        return None

    plan = subscription.plan
    if plan.billing_scheme != BillingScheme.TIERED:
        raise UnsupportedBillingScheme(
            subscription.id, getattr(plan.billing_scheme, "value", None)
        )

    try:
        schedule = lookup_tiers(plan.id)
    except Exception as e:
        raise TierLookupFailure(plan.id, subscription.id) from e

    amount = price_schedule(subscription.quantity, schedule)
    if plan.interval == BillingInterval.YEAR:
        amount = amount / MONTHS_PER_YEAR

    amount = apply_discounts(amount, (subscription.discount, customer_discount), now)

    return RevenueRecord(
        subscription_id=subscription.id,
        start_date=subscription.start_date,
        amount=amount / MINOR_UNITS,
    )
