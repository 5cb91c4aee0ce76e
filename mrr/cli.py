"""
stripe-mrr: estimate MRR from the subscriptions in a Stripe account.

Usage:
    stripe-mrr [--key KEY] [--json] [--windows 1,7,30,90]

The key may also come from the STRIPE_KEY environment variable.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from mrr.config import get_settings
from mrr.engine import build_report
from mrr.logging import configure_logging
from mrr.report import format_report, report_to_dict
from mrr.stripe_source import StripeSource

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2


def parse_windows(value: str) -> List[int]:
    try:
        days = [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid window list: {value!r}")
    if any(d <= 0 for d in days):
        raise argparse.ArgumentTypeError("windows must be positive day counts")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stripe-mrr",
        description="Estimate monthly recurring revenue from Stripe subscriptions",
    )
    parser.add_argument(
        "--key",
        default="",
        help="this is your stripe key, you may use an environment variable STRIPE_KEY.",
    )
    parser.add_argument("--json", action="store_true", help="print the report as JSON")
    parser.add_argument(
        "--windows",
        type=parse_windows,
        default=None,
        help="comma separated trailing windows in days (default 1,7,30,90)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    api_key = args.key or settings.stripe_key
    if not api_key:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    source = StripeSource(
        api_key,
        page_size=settings.page_size,
        max_retries=settings.price_lookup_retries,
    )
    windows = args.windows or settings.trailing_windows
    outcome = build_report(source.customers(), source.lookup_tiers, windows=windows)

    if not outcome.success:
        logger.error(f"Aborting, no report produced: {outcome.error}")
        return EXIT_FATAL

    if args.json:
        print(json.dumps(report_to_dict(outcome.report), indent=2))
    else:
        print(format_report(outcome.report))
    return EXIT_OK
