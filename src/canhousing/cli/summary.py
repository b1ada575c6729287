#!/usr/bin/env python
"""
CLI for printing the per-city price summary.

Usage:
    python -m canhousing.cli.summary --province Ontario --city Toronto
    python -m canhousing.cli.summary --province "Nova Scotia" --beds 2 --baths 1 --json
    python -m canhousing.cli.summary --province Ontario --compare Toronto Ottawa
"""

import argparse
import json
import sys

from canhousing.core.aggregation import compare_cities, summarize
from canhousing.core.filters import available_cities, filter_listings
from canhousing.core.loader import load_dataset
from canhousing.core.models import ConstraintSet
from canhousing.exceptions import DatasetError, InvalidComparisonError
from canhousing.logging_config import setup_logging, get_logger
from canhousing.utils.price_parser import format_price


def _print_table(rows) -> None:
    header = f"{'City':<24}{'Average':>14}{'Median':>14}{'Min':>14}{'Max':>14}{'Listings':>10}"
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.city:<24}"
            f"{format_price(row.average):>14}"
            f"{format_price(row.median):>14}"
            f"{format_price(row.minimum):>14}"
            f"{format_price(row.maximum):>14}"
            f"{row.count:>10}"
        )


def main(argv=None):
    """Main entry point for the summary CLI."""
    parser = argparse.ArgumentParser(
        description="Summarize listing prices per city for a set of filters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m canhousing.cli.summary --province Ontario
    python -m canhousing.cli.summary --province Ontario --city Toronto --min-price 500000
    python -m canhousing.cli.summary --province "British Columbia" --json
        """,
    )
    parser.add_argument("--data", type=str, default=None, help="Listings CSV (default: from config)")
    parser.add_argument(
        "--province", action="append", required=True, help="Province to include (repeatable)"
    )
    parser.add_argument(
        "--city",
        action="append",
        default=None,
        help="City to include (repeatable; default: every city in the provinces)",
    )
    parser.add_argument("--min-price", type=float, default=0.0, help="Minimum price (default: 0)")
    parser.add_argument(
        "--max-price", type=float, default=float("inf"), help="Maximum price (default: no limit)"
    )
    parser.add_argument("--beds", type=int, default=0, help="Minimum bedrooms (default: 0)")
    parser.add_argument("--baths", type=int, default=0, help="Minimum bathrooms (default: 0)")
    parser.add_argument(
        "--compare", nargs="+", default=None, metavar="CITY", help="Compare prices of two cities"
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set log level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, force=True)
    logger = get_logger(__name__)

    try:
        dataset = load_dataset(args.data)
    except DatasetError as e:
        logger.error("Could not load listings: %s", e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    cities = args.city or available_cities(dataset, args.province)
    constraints = ConstraintSet(
        provinces=frozenset(args.province),
        cities=frozenset(cities),
        price_min=args.min_price,
        price_max=args.max_price,
        min_beds=args.beds,
        min_baths=args.baths,
    )
    rows = summarize(filter_listings(dataset, constraints))

    comparison = None
    if args.compare is not None:
        try:
            comparison = compare_cities(dataset, args.compare)
        except InvalidComparisonError as e:
            print(f"Warning: {e.message}", file=sys.stderr)

    if args.json:
        result = {"summary": [row.to_dict() for row in rows]}
        if comparison is not None:
            result["comparison"] = comparison.to_dict()
        print(json.dumps(result, indent=2))
        return

    if not rows:
        print("No listings match these filters.")
    else:
        _print_table(rows)

    if comparison is not None:
        print()
        for city, prices in comparison.as_mapping().items():
            print(f"{city}: {len(prices)} listings")


if __name__ == "__main__":
    main()
