"""
Report rendering: the plain-text table printed by the CLI and a JSON form.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from mrr.models import RevenueReport

CENTS = Decimal("0.01")


def money(amount: Decimal) -> str:
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


def window_label(days: int) -> str:
    return "last day" if days == 1 else f"last {days} days"


def format_report(report: RevenueReport) -> str:
    """Render the report as text, most recent month first."""
    lines: List[str] = [
        f"MRR is\t{money(report.total_mrr)}",
        "Month over month stats",
        "=" * 37,
    ]
    for bucket in report.months:
        lines.append(
            f"{bucket.key} New subscriptions: {bucket.subscriptions} MRR: {money(bucket.revenue)}"
        )
    for days in report.window_days():
        lines.append(f"MRR added in the {window_label(days)}\t{money(report.trailing[days])}")
    return "\n".join(lines)


def report_to_dict(report: RevenueReport) -> Dict[str, Any]:
    return {
        "mrr": money(report.total_mrr),
        "subscriptions": report.subscription_count,
        "months": [
            {
                "month": bucket.key,
                "new_subscriptions": bucket.subscriptions,
                "mrr": money(bucket.revenue),
            }
            for bucket in report.months
        ],
        "trailing": {str(days): money(report.trailing[days]) for days in report.window_days()},
    }
