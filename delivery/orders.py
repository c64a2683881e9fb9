"""
Checkout Helpers

Cart summary, checkout total and price formatting around the fee engine.
"""

from dataclasses import dataclass
from typing import Iterable

from .zones import ZoneTable
from .fees import FeeQuote, calculate_delivery_fee


CURRENCY_SYMBOL = "₦"  # Naira


@dataclass(frozen=True)
class CartLine:
    """One cart line: unit price and quantity."""
    price: float
    quantity: int


@dataclass(frozen=True)
class CheckoutQuote:
    """Cart totals with the delivery quote applied."""
    subtotal: float
    item_count: int
    delivery: FeeQuote

    @property
    def total(self) -> float:
        return self.subtotal + self.delivery.fee


def summarize_cart(lines: Iterable[CartLine]) -> tuple[float, int]:
    """
    Subtotal and total item quantity for a cart.

    Returns:
        (sum of price * quantity, sum of quantity)
    """
    subtotal = 0
    item_count = 0
    for line in lines:
        subtotal += line.price * line.quantity
        item_count += line.quantity
    return subtotal, item_count


def quote_checkout(
    lines: Iterable[CartLine],
    state: str,
    city: str | None = None,
    table: ZoneTable | None = None
) -> CheckoutQuote:
    """Price delivery for a cart and total the order."""
    subtotal, item_count = summarize_cart(lines)
    delivery = calculate_delivery_fee(state, city, subtotal, item_count, table)
    return CheckoutQuote(subtotal=subtotal, item_count=item_count, delivery=delivery)


def format_price(amount: float) -> str:
    """
    Format an amount in Naira, e.g. 1500 -> "₦1,500", 99.5 -> "₦99.5".

    Whole amounts have no decimals; others keep up to two.
    """
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}".rstrip("0").rstrip(".")
    return f"{sign}{CURRENCY_SYMBOL}{text}"


__all__ = [
    "CURRENCY_SYMBOL",
    "CartLine",
    "CheckoutQuote",
    "summarize_cart",
    "quote_checkout",
    "format_price",
]
