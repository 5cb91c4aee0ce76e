"""
Graduated tier pricing.

Each unit of the quantity is billed at the rate of the bracket it falls
into, brackets applied cumulatively from the first unit.
"""

from decimal import Decimal
from typing import Sequence

from mrr.logging import log_action
from mrr.models import Tier, TierSchedule, TiersMode


def evaluate(quantity: int, tiers: Sequence[Tier]) -> Decimal:
    """
    Compute the raw billable amount for a quantity under graduated tiers.

    Tiers must be ordered ascending by up_to with the unbounded tier last.
    The order is not checked; an unsorted list prices units in the wrong
    brackets.

    Args:
        quantity: Number of units
        tiers: Tier list, ascending by up_to

    Returns:
        Amount in minor currency units
    """
    total = Decimal("0")
    for unit in range(1, quantity + 1):
        for tier in tiers:
            if tier.is_unbounded or unit <= tier.up_to:
                total += tier.unit_amount
                break
    return total


def price_schedule(quantity: int, schedule: TierSchedule) -> Decimal:
    """Raw amount for a looked-up schedule; non-graduated modes price at zero."""
    if schedule.tiers_mode != TiersMode.GRADUATED:
        log_action(
            "unsupported_tiers_mode",
            "Tiers mode is not graduated, pricing at zero",
            level="warning",
            plan_id=schedule.plan_id,
            tiers_mode=getattr(schedule.tiers_mode, "value", None),
        )
        return Decimal("0")
    return evaluate(quantity, schedule.tiers)
