"""
Quote Order File
================

Calculates delivery fees for every order in a CSV export and optionally
audits them against the fee that was charged.

Input columns:
    delivery_state, subtotal                 (required)
    delivery_city, item_count                (optional)
    delivery_fee                             (required with --audit)

Usage:
    python -m delivery.scripts.quote_orders orders.csv
    python -m delivery.scripts.quote_orders orders.csv -o orders_quoted.csv
    python -m delivery.scripts.quote_orders orders.csv --audit
    python -m delivery.scripts.quote_orders orders.csv --audit --charged-column fee_paid
"""

import argparse
import sys
from pathlib import Path

import polars as pl

from delivery.calculate_fees import calculate_fees, compare_to_charged
from delivery.orders import format_price


def load_orders(path: Path) -> pl.DataFrame:
    """Read an order CSV, keeping free-text columns as strings."""
    df = pl.read_csv(path)
    text_cols = [c for c in ("delivery_state", "delivery_city") if c in df.columns]
    return df.with_columns([pl.col(c).cast(pl.Utf8) for c in text_cols])


def summarize(df: pl.DataFrame) -> dict:
    """Headline numbers for a calculated order table."""
    return {
        "orders": len(df),
        "unmatched": int((~df["zone_matched"]).sum()) if len(df) else 0,
        "free_shipping": int(df["adjustment_free_shipping"].sum()) if len(df) else 0,
        "fee_total": float(df["fee_total"].sum()) if len(df) else 0.0,
    }


def print_summary(df: pl.DataFrame) -> None:
    """Print quote summary and per-zone breakdown."""
    stats = summarize(df)

    print("\n" + "=" * 60)
    print("QUOTE SUMMARY")
    print("=" * 60)
    print(f"Orders quoted:          {stats['orders']:,}")
    print(f"Unmatched destinations: {stats['unmatched']:,}")
    print(f"Free delivery:          {stats['free_shipping']:,}")
    print(f"Total delivery fees:    {format_price(stats['fee_total'])}")

    if stats["unmatched"]:
        unmatched = (
            df.filter(~pl.col("zone_matched"))
            .group_by("delivery_state")
            .len()
            .sort("len", descending=True)
        )
        print("\nUnmatched states (priced at fallback zone):")
        for state, count in unmatched.iter_rows():
            print(f"  {state!r}: {count:,}")

    by_zone = (
        df.group_by(["delivery_zone", "zone_name"])
        .agg([
            pl.len().alias("orders"),
            pl.col("fee_total").sum().alias("fees"),
        ])
        .sort("delivery_zone")
    )
    print("\nBy zone:")
    for zone, name, orders, fees in by_zone.iter_rows():
        print(f"  {zone!s:>4} {name or '-':<28} {orders:>7,} {format_price(fees):>14}")


def print_audit(df: pl.DataFrame, charged_column: str) -> None:
    """Print charged-vs-calculated mismatches."""
    mismatches = df.filter(pl.col("fee_mismatch"))

    print("\n" + "=" * 60)
    print("AUDIT")
    print("=" * 60)
    print(f"Orders checked:   {len(df):,}")
    print(f"Mismatched fees:  {len(mismatches):,}")
    if len(mismatches):
        print(f"Net difference:   {format_price(float(mismatches['fee_difference'].sum()))}")
        print("\nFirst mismatches:")
        preview = mismatches.select([
            "delivery_state", "delivery_zone", charged_column, "fee_total", "fee_difference"
        ]).head(10)
        print(preview)


def main():
    parser = argparse.ArgumentParser(
        description="Calculate delivery fees for an order CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m delivery.scripts.quote_orders orders.csv
  python -m delivery.scripts.quote_orders orders.csv -o orders_quoted.csv
  python -m delivery.scripts.quote_orders orders.csv --audit
        """
    )
    parser.add_argument("input", type=Path, help="Order CSV file")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Write the calculated table to this CSV"
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        help="Compare calculated fees to the charged fee column"
    )
    parser.add_argument(
        "--charged-column",
        type=str,
        default="delivery_fee",
        help="Column holding the charged fee (default: delivery_fee)"
    )
    args = parser.parse_args()

    try:
        orders = load_orders(args.input)
        print(f"Loaded {len(orders):,} orders from {args.input}")

        df = calculate_fees(orders)
        print_summary(df)

        if args.audit:
            df = compare_to_charged(df, args.charged_column)
            print_audit(df, args.charged_column)

        if args.output:
            df.write_csv(args.output)
            print(f"\nOutput saved to: {args.output}")

    except KeyboardInterrupt:
        print("\n\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
