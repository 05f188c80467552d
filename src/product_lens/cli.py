"""Command-line interface for product-lens."""

import argparse
import logging
import sys

from product_lens import __version__, analyze
from product_lens.exceptions import AuthenticationError, ProductLensError


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="product-lens",
        description="Identify a product from photos and estimate its used price",
    )
    parser.add_argument("images", nargs="+", help="Paths to product photos (up to 5)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--provider",
        help="Model provider: gemini or openai (default: PRODUCT_LENS_PROVIDER env var, then gemini)",
    )
    parser.add_argument(
        "--api-key",
        help="Provider API key (default: GEMINI_API_KEY / OPENAI_API_KEY env var)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline steps to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"product-lens {__version__}",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        result = analyze(args.images, api_key=args.api_key, provider=args.provider)
    except AuthenticationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ProductLensError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(result.model_dump_json(indent=2, exclude_none=True))
    else:
        _print_formatted(result)

    return 0


def _print_formatted(result) -> None:
    """Print result in human-readable format."""
    print()
    print("  product-lens")
    print()

    enriched = result.enriched
    fields = [
        ("Title", enriched.title),
        ("Model", result.model),
        ("JAN", result.jan),
        ("UPC", result.upc),
        ("Release", enriched.official_release),
        ("Official Price", _format_yen(enriched.official_msrp)),
        ("Used Price", _format_range(enriched.used_hint_min, enriched.used_hint_max)),
        ("Confidence", result.confidence),
    ]

    for label, value in fields:
        display = value if value else "-"
        print(f"  {label + ':':<16} {display}")

    for label, text in (("Description", enriched.description), ("Market", enriched.market_overview)):
        if text:
            print()
            print(f"  {label}:")
            print(f"    {text}")

    print()


def _format_yen(amount) -> str | None:
    """Format an amount as yen with thousands separators."""
    if amount is None:
        return None
    return f"{round(amount):,}円"


def _format_range(low: int | None, high: int | None) -> str | None:
    if low is None or high is None:
        return None
    return f"{_format_yen(low)} - {_format_yen(high)}"


if __name__ == "__main__":
    sys.exit(main())
