"""
Delivery Fee Calculation

Turns a resolved zone plus order stats into a quote.

WEIGHT TIERS
------------
Clothing parcels are priced by item count as a stand-in for weight:
    0-3 items  -> light_fee
    4-6 items  -> medium_fee
    7+ items   -> heavy_fee

ADJUSTMENTS
-----------
After tier selection, adjustments (see delivery.adjustments) may override
the fee. Free shipping sets it to 0 for subtotals >= NGN 100,000 and leaves
the delivery window alone.

Nothing here validates input. Negative subtotals never reach the free
shipping threshold and negative item counts price as light.

USAGE
-----
    from delivery.fees import calculate_delivery_fee
    quote = calculate_delivery_fee("Lagos", "Ikeja", subtotal=25000, item_count=4)
"""

from dataclasses import dataclass

from .zones import Zone, ZoneTable
from .resolve import match_zone
from .adjustments import FreeShipping, first_applicable
from .data import (
    LIGHT,
    MEDIUM,
    HEAVY,
    MEDIUM_ITEM_THRESHOLD,
    HEAVY_ITEM_THRESHOLD,
    FALLBACK_FEE,
    FALLBACK_WINDOW,
)


@dataclass(frozen=True)
class FeeQuote:
    """
    Result of a fee calculation.

    Attributes:
        fee              - Amount to charge (NGN)
        zone             - Resolved zone, None only for an empty table
        estimated_window - Delivery time to display
        matched          - False when the zone is a fallback, None if unknown
        weight_tier      - "light", "medium" or "heavy" (None without a zone)
        free_shipping    - True when the free shipping override applied
    """

    fee: float
    zone: Zone | None
    estimated_window: str
    matched: bool | None = None
    weight_tier: str | None = None
    free_shipping: bool = False


def select_weight_tier(item_count: int | None) -> str:
    """Weight tier for an item count (None counts as 0)."""
    count = item_count or 0
    if count > HEAVY_ITEM_THRESHOLD:
        return HEAVY
    if count > MEDIUM_ITEM_THRESHOLD:
        return MEDIUM
    return LIGHT


def compute_fee(
    zone: Zone | None,
    subtotal: float | None,
    item_count: int | None = None,
    matched: bool | None = None
) -> FeeQuote:
    """
    Compute the delivery fee for a resolved zone.

    Args:
        zone: Zone from resolve_zone (None only if the table is empty)
        subtotal: Cart subtotal before delivery
        item_count: Total quantity across cart lines
        matched: Whether the zone came from a real match. Leave as None when
            the zone came from resolve_zone, which cannot tell; use
            match_zone or calculate_delivery_fee to get a definite answer.

    Returns:
        FeeQuote
    """
    if zone is None:
        return FeeQuote(
            fee=FALLBACK_FEE,
            zone=None,
            estimated_window=FALLBACK_WINDOW,
            matched=False,
        )

    tier = select_weight_tier(item_count)
    fee = zone.fee_for_tier(tier)

    adjustment = first_applicable(subtotal, item_count)
    if adjustment is not None:
        fee = adjustment.fee_override

    return FeeQuote(
        fee=fee,
        zone=zone,
        estimated_window=zone.estimated_window,
        matched=matched,
        weight_tier=tier,
        free_shipping=adjustment is FreeShipping,
    )


def calculate_delivery_fee(
    state: str,
    city: str | None = None,
    subtotal: float | None = None,
    item_count: int | None = None,
    table: ZoneTable | None = None
) -> FeeQuote:
    """
    Resolve a destination and price it in one call.

    This is the main entry point for checkout.
    """
    zone, matched = match_zone(state, city, table)
    return compute_fee(zone, subtotal, item_count, matched=matched)


__all__ = [
    "FeeQuote",
    "select_weight_tier",
    "compute_fee",
    "calculate_delivery_fee",
]
