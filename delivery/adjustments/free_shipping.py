"""
Free Shipping (FREE_SHIPPING)

Orders at or above the subtotal threshold ship free, whatever the zone or
item count. The delivery window is unaffected.
"""

import polars as pl

from ..data.reference.thresholds import FREE_SHIPPING_THRESHOLD
from .base import Adjustment


class FreeShipping(Adjustment):
    """Free delivery for subtotals at or above NGN 100,000."""

    # Identity
    name = "FREE_SHIPPING"

    # Effect
    fee_override = 0

    # Ordering
    priority = 1

    # Thresholds
    MIN_SUBTOTAL = FREE_SHIPPING_THRESHOLD

    @classmethod
    def applies(cls, subtotal: float | None, item_count: int | None = None) -> bool:
        return subtotal is not None and subtotal >= cls.MIN_SUBTOTAL

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (pl.col("subtotal") >= cls.MIN_SUBTOTAL).fill_null(False)
