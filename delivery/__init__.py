"""
Delivery Fees

Shipping zone resolution and delivery fee calculation for storefront
checkout and admin order management.

Origin: OKI, Ibadan, Oyo State. Destinations are priced by zone (ten zones,
from same-city Ibadan out to the far North-East) and by weight tier
(approximated by item count), with free delivery from NGN 100,000.

Structure:
    - zones.py           Zone / ZoneTable data model
    - data/              Reference data (zone CSVs, regions, thresholds)
    - resolve.py         Destination text -> zone
    - fees.py            Zone + order stats -> FeeQuote
    - adjustments/       Fee overrides (free shipping)
    - orders.py          Cart summary, checkout total, price formatting
    - calculate_fees.py  Order DataFrame in, priced DataFrame out
    - scripts/           Command line tools
"""

from .version import VERSION
from .zones import Zone, ZoneTable
from .data import load_zone_table, default_zone_table
from .resolve import (
    ZoneMatch,
    match_zone,
    resolve_zone,
    is_inside_home_city,
    all_regions,
    find_ambiguous_regions,
)
from .fees import FeeQuote, select_weight_tier, compute_fee, calculate_delivery_fee
from .orders import CartLine, CheckoutQuote, summarize_cart, quote_checkout, format_price
from .calculate_fees import calculate_fees, compare_to_charged


__all__ = [
    "VERSION",
    # Data model
    "Zone",
    "ZoneTable",
    "load_zone_table",
    "default_zone_table",
    # Resolution
    "ZoneMatch",
    "match_zone",
    "resolve_zone",
    "is_inside_home_city",
    "all_regions",
    "find_ambiguous_regions",
    # Fees
    "FeeQuote",
    "select_weight_tier",
    "compute_fee",
    "calculate_delivery_fee",
    # Checkout
    "CartLine",
    "CheckoutQuote",
    "summarize_cart",
    "quote_checkout",
    "format_price",
    # Order tables
    "calculate_fees",
    "compare_to_charged",
]
