"""
Stripe-backed data source.

Lists customers with their subscriptions and discounts, and looks up tier
schedules for tiered prices. Stripe objects are converted into the plain
value types in mrr.models; the converters take any mapping so they work on
raw API payloads as well.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

import stripe

from mrr.models import (
    UNBOUNDED,
    BillingInterval,
    BillingScheme,
    Coupon,
    Customer,
    Discount,
    Plan,
    Subscription,
    SubscriptionStatus,
    Tier,
    TierSchedule,
    TiersMode,
)
from mrr.logging import log_action
from mrr.retry import exponential_backoff

logger = logging.getLogger(__name__)


def _get(obj: Optional[Mapping[str, Any]], key: str) -> Any:
    if obj is None:
        return None
    try:
        return obj[key]
    except KeyError:
        return None


def _timestamp(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def _enum(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


def discount_from_stripe(data: Optional[Mapping[str, Any]]) -> Optional[Discount]:
    if not data:
        return None
    coupon_data = _get(data, "coupon")
    coupon = None
    if coupon_data:
        coupon = Coupon(
            amount_off=_decimal(_get(coupon_data, "amount_off")),
            percent_off=_decimal(_get(coupon_data, "percent_off")),
        )
    return Discount(coupon=coupon, end=_timestamp(_get(data, "end")))


def _first_item(data: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    items = _get(_get(data, "items"), "data") or []
    if len(items) > 1:
        log_action(
            "multiple_subscription_items",
            "Only the first subscription item is priced",
            level="warning",
            subscription_id=_get(data, "id"),
            items=len(items),
        )
    return items[0] if items else None


def plan_from_stripe(data: Mapping[str, Any]) -> Plan:
    interval = _get(data, "interval") or _get(_get(data, "recurring"), "interval")
    return Plan(
        id=data["id"],
        billing_scheme=_enum(BillingScheme, _get(data, "billing_scheme")),
        interval=_enum(BillingInterval, interval) or BillingInterval.MONTH,
    )


def subscription_from_stripe(data: Mapping[str, Any]) -> Subscription:
    item = _first_item(data)
    plan_data = _get(data, "plan") or _get(item, "plan") or _get(item, "price")
    quantity = _get(data, "quantity") or _get(item, "quantity") or 1

    return Subscription(
        id=data["id"],
        status=SubscriptionStatus.parse(_get(data, "status")),
        start_date=_timestamp(data["start_date"]),
        quantity=int(quantity),
        plan=plan_from_stripe(plan_data),
        cancel_at_period_end=bool(_get(data, "cancel_at_period_end")),
        canceled_at=_timestamp(_get(data, "canceled_at")),
        discount=discount_from_stripe(_get(data, "discount")),
    )


def customer_from_stripe(
    data: Mapping[str, Any],
    subscriptions: Optional[Iterable[Mapping[str, Any]]] = None
) -> Customer:
    """Convert a customer; subscriptions overrides the embedded first page."""
    if subscriptions is None:
        subscriptions = _get(_get(data, "subscriptions"), "data") or []
    return Customer(
        id=data["id"],
        subscriptions=tuple(subscription_from_stripe(s) for s in subscriptions),
        discount=discount_from_stripe(_get(data, "discount")),
    )


def tier_from_stripe(data: Mapping[str, Any]) -> Tier:
    amount = _get(data, "unit_amount_decimal")
    if amount is None:
        amount = _get(data, "unit_amount") or 0
    up_to = _get(data, "up_to")
    return Tier(
        up_to=UNBOUNDED if up_to in (None, "inf") else int(up_to),
        unit_amount=Decimal(str(amount)),
    )


def price_from_stripe(data: Mapping[str, Any]) -> TierSchedule:
    return TierSchedule(
        plan_id=data["id"],
        tiers_mode=_enum(TiersMode, _get(data, "tiers_mode")),
        tiers=tuple(tier_from_stripe(t) for t in (_get(data, "tiers") or [])),
    )


class StripeSource:
    """Customers and tier schedules from a Stripe account."""

    def __init__(self, api_key: str, page_size: int = 100, max_retries: int = 3):
        stripe.api_key = api_key
        self.page_size = page_size
        self._prices: Dict[str, TierSchedule] = {}
        self._retrieve_price = exponential_backoff(max_retries=max_retries)(self._fetch_price)

    def customers(self) -> Iterator[Customer]:
        """Yield every customer, following Stripe pagination."""
        page = stripe.Customer.list(
            limit=self.page_size,
            expand=["data.subscriptions", "data.discount"],
        )
        for data in page.auto_paging_iter():
            subscriptions = None
            if _get(_get(data, "subscriptions"), "has_more"):
                subscriptions = list(self._all_subscriptions(data["id"]))
            yield customer_from_stripe(data, subscriptions)

    def _all_subscriptions(self, customer_id: str) -> Iterator[Mapping[str, Any]]:
        """Every subscription of a customer whose embedded list was truncated."""
        logger.debug(f"Paging subscriptions for customer {customer_id}")
        page = stripe.Subscription.list(customer=customer_id, limit=self.page_size)
        return page.auto_paging_iter()

    def lookup_tiers(self, plan_id: str) -> TierSchedule:
        """Tier schedule for a price, fetched once per plan id."""
        schedule = self._prices.get(plan_id)
        if schedule is None:
            schedule = self._prices[plan_id] = price_from_stripe(self._retrieve_price(plan_id))
        return schedule

    def _fetch_price(self, plan_id: str) -> Mapping[str, Any]:
        logger.debug(f"Fetching tiers for price {plan_id}")
        return stripe.Price.retrieve(plan_id, expand=["tiers"])
