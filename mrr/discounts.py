"""
Discount application.

A discount only counts toward recurring revenue if it is still valid a year
from the reference time. Short-lived discounts are ignored so MRR reflects
steady-state revenue.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from mrr.models import Discount


def discount_horizon(now: datetime) -> datetime:
    """Same calendar date one year after now (Feb 29 maps to Feb 28)."""
    try:
        return now.replace(year=now.year + 1)
    except ValueError:
        return now.replace(year=now.year + 1, day=28)


def is_long_lived(discount: Discount, now: datetime) -> bool:
    if discount.end is None:
        return True
    return not discount.end < discount_horizon(now)


def apply_discount(amount: Decimal, discount: Optional[Discount], now: datetime) -> Decimal:
    """
    Apply one discount to an amount.

    Amount-off takes precedence over percent-off. The result is not floored
    at zero.

    Args:
        amount: Amount in minor currency units
        discount: Discount to apply, may be None
        now: Reference time for the expiry rule

    Returns:
        Discounted amount, or amount unchanged if the discount is ignored
    """
    if discount is None or discount.coupon is None:
        return amount
    if not is_long_lived(discount, now):
        return amount

    coupon = discount.coupon
    if coupon.amount_off:
        return amount - coupon.amount_off
    if coupon.percent_off:
        return amount - amount * coupon.percent_off / Decimal("100")
    return amount


def apply_discounts(
    amount: Decimal,
    discounts: Iterable[Optional[Discount]],
    now: datetime
) -> Decimal:
    """Apply discounts in order, each on the previous result."""
    for discount in discounts:
        amount = apply_discount(amount, discount, now)
    return amount
