"""
Revenue data models.

Plain immutable value types for the records the engine reads (customers,
subscriptions, plans, discounts) and the derived records it produces.
They carry no billing-provider schema; see stripe_source for the mapping.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple


class SubscriptionStatus(Enum):
    ACTIVE = "active"
    CANCELED = "canceled"
    PAST_DUE = "past_due"
    TRIALING = "trialing"
    INCOMPLETE = "incomplete"
    UNPAID = "unpaid"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SubscriptionStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class BillingScheme(Enum):
    TIERED = "tiered"
    PER_UNIT = "per_unit"


class TiersMode(Enum):
    GRADUATED = "graduated"
    VOLUME = "volume"


class BillingInterval(Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# Tier.up_to value marking the last, unbounded tier
UNBOUNDED = 0


@dataclass(frozen=True)
class Tier:
    up_to: int  # cumulative quantity bound, UNBOUNDED for the last tier
    unit_amount: Decimal  # minor currency units per unit

    @property
    def is_unbounded(self) -> bool:
        return self.up_to == UNBOUNDED


@dataclass(frozen=True)
class TierSchedule:
    """Price as returned by the tier lookup."""
    plan_id: str
    tiers_mode: Optional[TiersMode]
    tiers: Tuple[Tier, ...] = ()


@dataclass(frozen=True)
class Plan:
    id: str
    billing_scheme: Optional[BillingScheme]
    interval: BillingInterval


@dataclass(frozen=True)
class Coupon:
    amount_off: Optional[Decimal] = None  # minor currency units
    percent_off: Optional[Decimal] = None  # 0-100


@dataclass(frozen=True)
class Discount:
    coupon: Optional[Coupon]
    end: Optional[datetime] = None  # None means the discount never expires


@dataclass(frozen=True)
class Subscription:
    id: str
    status: SubscriptionStatus
    start_date: datetime
    quantity: int
    plan: Plan
    cancel_at_period_end: bool = False
    canceled_at: Optional[datetime] = None
    discount: Optional[Discount] = None


@dataclass(frozen=True)
class Customer:
    id: str
    subscriptions: Tuple[Subscription, ...] = ()
    discount: Optional[Discount] = None


@dataclass(frozen=True)
class RevenueRecord:
    subscription_id: str
    start_date: datetime
    amount: Decimal  # monthly-equivalent, major currency units


@dataclass
class MonthBucket:
    key: str  # YYYY-MM
    revenue: Decimal = Decimal("0")
    subscriptions: int = 0


@dataclass(frozen=True)
class RevenueReport:
    total_mrr: Decimal
    months: Tuple[MonthBucket, ...]  # most recent month first
    trailing: Dict[int, Decimal] = field(default_factory=dict)  # days -> MRR added
    records: Tuple[RevenueRecord, ...] = ()  # sorted by start date, newest first

    @property
    def subscription_count(self) -> int:
        return len(self.records)

    def window_days(self) -> List[int]:
        return sorted(self.trailing)
