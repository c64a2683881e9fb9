"""
Unit Tests for Checkout Helpers

Run with: pytest delivery/tests/test_orders.py -v
"""

import pytest

from delivery.orders import CartLine, summarize_cart, quote_checkout, format_price


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def cart():
    """Two dresses and a scarf: 35,000 over 3 items."""
    return [CartLine(price=15_000, quantity=2), CartLine(price=5_000, quantity=1)]


# =============================================================================
# CART SUMMARY TESTS
# =============================================================================

class TestSummarizeCart:

    def test_subtotal_and_count(self, cart):
        assert summarize_cart(cart) == (35_000, 3)

    def test_empty_cart(self):
        assert summarize_cart([]) == (0, 0)

    def test_accepts_generator(self, cart):
        assert summarize_cart(line for line in cart) == (35_000, 3)


# =============================================================================
# CHECKOUT QUOTE TESTS
# =============================================================================

class TestQuoteCheckout:

    def test_total_includes_delivery(self, cart):
        quote = quote_checkout(cart, "Lagos", "Ikeja")
        assert quote.subtotal == pytest.approx(35_000)
        assert quote.item_count == 3
        assert quote.delivery.fee == pytest.approx(1800)
        assert quote.total == pytest.approx(36_800)

    def test_item_count_drives_tier(self, cart):
        """Four or more items move to the medium tier."""
        bigger = cart + [CartLine(price=2_000, quantity=1)]
        quote = quote_checkout(bigger, "Lagos")
        assert quote.delivery.weight_tier == "medium"
        assert quote.total == pytest.approx(37_000 + 4000)

    def test_free_delivery_total(self):
        quote = quote_checkout([CartLine(price=50_000, quantity=2)], "Sokoto")
        assert quote.delivery.fee == 0
        assert quote.total == pytest.approx(100_000)

    def test_ibadan_same_day(self, cart):
        quote = quote_checkout(cart, "Oyo", "Bodija")
        assert quote.delivery.zone.zone == 1
        assert quote.delivery.estimated_window == "Same day - 1 day"


# =============================================================================
# FORMATTING TESTS
# =============================================================================

class TestFormatPrice:

    @pytest.mark.parametrize("amount,expected", [
        (0, "₦0"),
        (100, "₦100"),
        (1000, "₦1,000"),
        (1500.5, "₦1,500.5"),
        (33000.0, "₦33,000"),
        (1234567.891, "₦1,234,567.89"),
        (-500, "-₦500"),
    ])
    def test_format(self, amount, expected):
        assert format_price(amount) == expected
