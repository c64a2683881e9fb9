"""
Fee Adjustment Base Class

Shared base class for rules that override the tier fee of a quote.
"""

from abc import ABC
import polars as pl


class Adjustment(ABC):
    """
    Base class for all fee adjustments.

    Every adjustment is written twice over the same constants: once as a
    scalar check for single quotes and once as a polars expression for
    order tables. Both must agree.

    Attributes:
        IDENTITY
            name          - Short code (e.g., "FREE_SHIPPING")

        EFFECT
            fee_override  - Fee charged when triggered (replaces tier fee)

        ORDERING
            priority      - Rank among adjustments (1 = evaluated first, wins)
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str

    # -------------------------------------------------------------------------
    # EFFECT
    # -------------------------------------------------------------------------
    fee_override: float

    # -------------------------------------------------------------------------
    # ORDERING
    # -------------------------------------------------------------------------
    priority: int = 1

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def column(cls) -> str:
        """Flag column name in calculated order tables."""
        return f"adjustment_{cls.name.lower()}"

    @classmethod
    def applies(cls, subtotal: float | None, item_count: int | None) -> bool:
        """
        Whether this adjustment triggers for a single order.

        Default returns False. Override alongside conditions().
        """
        return False

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Polars expression for when this adjustment triggers.

        Evaluated against columns "subtotal" and "item_count".
        Default returns False.
        """
        return pl.lit(False)
