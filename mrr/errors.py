"""
Revenue engine errors.

UnsupportedBillingScheme and NoSubscriptions are recoverable and only
produce diagnostics. TierLookupFailure aborts the report.
"""

from typing import Optional


class RevenueError(Exception):
    """Base class for revenue engine errors."""
    pass


class UnsupportedBillingScheme(RevenueError):
    """Raised when a subscription's plan is not priced with tiers."""

    def __init__(self, subscription_id: str, billing_scheme: Optional[str]):
        self.subscription_id = subscription_id
        self.billing_scheme = billing_scheme
        super().__init__(
            f"Unsupported billing scheme {billing_scheme!r} for subscription {subscription_id}"
        )


class NoSubscriptions(RevenueError):
    """A customer has no subscriptions."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} has no subscriptions")


class TierLookupFailure(RevenueError):
    """The tier schedule for a plan could not be fetched."""

    def __init__(self, plan_id: str, subscription_id: Optional[str] = None):
        self.plan_id = plan_id
        self.subscription_id = subscription_id
        super().__init__(f"Tier lookup failed for plan {plan_id}")
