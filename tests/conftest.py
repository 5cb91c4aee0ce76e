"""
Pytest fixtures for the MRR engine tests.

Synthetic customers, subscriptions and tier schedules; nothing here talks
to Stripe.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

import pytest

from mrr.models import (
    UNBOUNDED,
    BillingInterval,
    BillingScheme,
    Coupon,
    Discount,
    Plan,
    Subscription,
    SubscriptionStatus,
    Tier,
    TierSchedule,
    TiersMode,
)


# =============================================================================
# CONSTANTS
# =============================================================================

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
PLAN_ID = "price_tiered"


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def two_tier_schedule() -> TierSchedule:
    """2 units at 500, everything after at 300."""
    return TierSchedule(
        plan_id=PLAN_ID,
        tiers_mode=TiersMode.GRADUATED,
        tiers=(
            Tier(up_to=2, unit_amount=Decimal("500")),
            Tier(up_to=UNBOUNDED, unit_amount=Decimal("300")),
        ),
    )


@pytest.fixture
def lookup(two_tier_schedule) -> Callable[[str], TierSchedule]:
    schedules: Dict[str, TierSchedule] = {PLAN_ID: two_tier_schedule}
    return schedules.__getitem__


@pytest.fixture
def make_discount() -> Callable[..., Discount]:
    def _make(
        amount_off: Optional[str] = None,
        percent_off: Optional[str] = None,
        end: Optional[datetime] = NOW + timedelta(days=730),
    ) -> Discount:
        return Discount(
            coupon=Coupon(
                amount_off=Decimal(amount_off) if amount_off is not None else None,
                percent_off=Decimal(percent_off) if percent_off is not None else None,
            ),
            end=end,
        )
    return _make


@pytest.fixture
def make_subscription() -> Callable[..., Subscription]:
    counter = {"n": 0}

    def _make(**overrides: Any) -> Subscription:
        counter["n"] += 1
        fields: Dict[str, Any] = {
            "id": f"sub_{counter['n']}",
            "status": SubscriptionStatus.ACTIVE,
            "start_date": NOW - timedelta(days=3),
            "quantity": 3,
            "plan": Plan(
                id=PLAN_ID,
                billing_scheme=BillingScheme.TIERED,
                interval=BillingInterval.MONTH,
            ),
        }
        fields.update(overrides)
        return Subscription(**fields)
    return _make
