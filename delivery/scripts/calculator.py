"""
Delivery Fee Calculator
=======================

CLI tool to quote the delivery fee for a single order.

Anything not passed on the command line is prompted for.

Usage:
    python -m delivery.scripts.calculator
    python -m delivery.scripts.calculator --state Lagos --city Ikeja --subtotal 25000 --items 4
"""

import argparse

from delivery.fees import FeeQuote, calculate_delivery_fee
from delivery.orders import format_price
from delivery.resolve import all_regions
from delivery.version import VERSION


def get_user_input(args: argparse.Namespace) -> dict:
    """Fill in order details missing from args by prompting."""
    print("\n=== Delivery Fee Calculator ===")
    print(f"Version: {VERSION}\n")

    state = args.state
    if state is None:
        print(f"States: {', '.join(all_regions())}")
        state = input("Delivery state: ").strip()

    city = args.city
    if city is None:
        city = input("Delivery city (optional): ").strip()

    subtotal = args.subtotal
    if subtotal is None:
        subtotal = float(input("Cart subtotal (NGN): "))

    items = args.items
    if items is None:
        items = int(input("Number of items: "))

    return {
        "state": state,
        "city": city,
        "subtotal": subtotal,
        "item_count": items,
    }


def format_quote(quote: FeeQuote, order: dict) -> list[str]:
    """Render a quote as report lines."""
    lines = [
        "=" * 50,
        "DELIVERY QUOTE",
        "=" * 50,
        "",
        f"Destination: {order['city'] + ', ' if order['city'] else ''}{order['state']}",
    ]

    if quote.zone is None:
        lines.append("Zone: none (zone table is empty, flat fallback fee)")
    else:
        zone_line = f"Zone: {quote.zone.zone} - {quote.zone.name}"
        if quote.matched is False:
            zone_line += " (destination not recognised, using fallback zone)"
        lines.append(zone_line)
        lines.append(f"Weight tier: {quote.weight_tier} ({order['item_count']} items)")

    lines.append(f"Estimated delivery: {quote.estimated_window}")
    lines.append("")
    lines.append("--- Cost Breakdown ---")
    lines.append(f"Subtotal:           {format_price(order['subtotal']):>12}")
    fee_text = format_price(quote.fee)
    if quote.free_shipping:
        fee_text += " (free delivery)"
    lines.append(f"Delivery:           {fee_text:>12}")
    lines.append(f"                    {'=' * 12}")
    lines.append(f"TOTAL:              {format_price(order['subtotal'] + quote.fee):>12}")
    return lines


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Quote the delivery fee for a single order",
    )
    parser.add_argument("--state", type=str, help="Delivery state (e.g., Lagos)")
    parser.add_argument("--city", type=str, help="Delivery city (e.g., Ikeja)")
    parser.add_argument("--subtotal", type=float, help="Cart subtotal in NGN")
    parser.add_argument("--items", type=int, help="Total number of items")
    args = parser.parse_args()

    try:
        order = get_user_input(args)

        quote = calculate_delivery_fee(
            order["state"],
            order["city"],
            order["subtotal"],
            order["item_count"],
        )

        print()
        print("\n".join(format_quote(quote, order)))
        print()

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
