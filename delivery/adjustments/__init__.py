"""
Adjustments Package

Exports all fee adjustment classes in evaluation order.

Adjustments are checked in priority order (lowest number first). The first
one that triggers sets the fee; later ones are not consulted.
"""

from .base import Adjustment
from .free_shipping import FreeShipping


# All adjustments, in evaluation order
ALL = sorted([FreeShipping], key=lambda a: a.priority)


# =============================================================================
# HELPERS
# =============================================================================

def first_applicable(
    subtotal: float | None,
    item_count: int | None,
    adjustments: list[type[Adjustment]] | None = None,
) -> type[Adjustment] | None:
    """Highest priority adjustment that triggers for an order, or None."""
    for adjustment in ALL if adjustments is None else adjustments:
        if adjustment.applies(subtotal, item_count):
            return adjustment
    return None


# =============================================================================
# VALIDATION
# =============================================================================

def validate_adjustments() -> None:
    """
    Validate adjustment configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []

    names = [a.name for a in ALL]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        errors.append(f"duplicate adjustment names: {duplicates}")

    priorities = [a.priority for a in ALL]
    if len(set(priorities)) != len(priorities):
        errors.append(f"adjustment priorities must be unique (got {priorities})")

    for a in ALL:
        if a.fee_override is None or a.fee_override < 0:
            errors.append(f"{a.name}: fee_override must be a non-negative amount")

    if errors:
        raise ValueError("Adjustment configuration errors:\n  - " + "\n  - ".join(errors))


validate_adjustments()


__all__ = [
    "Adjustment",
    "FreeShipping",
    "ALL",
    "first_applicable",
    "validate_adjustments",
]
