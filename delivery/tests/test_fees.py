"""
Unit Tests for Delivery Fee Calculation

Tests weight tiers, free shipping, fallback quotes and the checkout entry
point against the published price table.

Run with: pytest delivery/tests/test_fees.py -v
"""

import pytest
import polars as pl

from delivery.data import default_zone_table, FREE_SHIPPING_THRESHOLD, FALLBACK_FEE
from delivery.fees import FeeQuote, select_weight_tier, compute_fee, calculate_delivery_fee
from delivery.adjustments import ALL, FreeShipping, first_applicable, validate_adjustments
from delivery.resolve import resolve_zone


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def table():
    return default_zone_table()


@pytest.fixture
def lagos_zone():
    """South-West Extended: 1800 / 4000 / 8000."""
    return resolve_zone("Lagos")


# =============================================================================
# WEIGHT TIER TESTS
# =============================================================================

class TestWeightTiers:
    """Tests for item count -> tier selection."""

    @pytest.mark.parametrize("count", [None, 0, 1, 2, 3])
    def test_light_up_to_3(self, count):
        assert select_weight_tier(count) == "light"

    @pytest.mark.parametrize("count", [4, 5, 6])
    def test_medium_4_to_6(self, count):
        assert select_weight_tier(count) == "medium"

    @pytest.mark.parametrize("count", [7, 10, 250])
    def test_heavy_over_6(self, count):
        assert select_weight_tier(count) == "heavy"

    def test_negative_count_is_light(self):
        """Negative counts are not validated and price as light."""
        assert select_weight_tier(-4) == "light"

    def test_tier_fees_every_zone(self, table):
        """Tier bands pick the matching fee for every zone."""
        for zone in table.zones:
            assert compute_fee(zone, 0, 3).fee == zone.light_fee
            assert compute_fee(zone, 0, 4).fee == zone.medium_fee
            assert compute_fee(zone, 0, 6).fee == zone.medium_fee
            assert compute_fee(zone, 0, 7).fee == zone.heavy_fee

    def test_unknown_tier_raises(self, lagos_zone):
        with pytest.raises(ValueError, match="Unknown weight tier"):
            lagos_zone.fee_for_tier("bulky")


# =============================================================================
# FREE SHIPPING TESTS
# =============================================================================

class TestFreeShipping:
    """Tests for the subtotal override."""

    def test_at_threshold_is_free(self, lagos_zone):
        """Exactly NGN 100,000 ships free."""
        quote = compute_fee(lagos_zone, 100_000, 2)
        assert quote.fee == 0
        assert quote.free_shipping is True

    def test_below_threshold_is_charged(self, lagos_zone):
        quote = compute_fee(lagos_zone, 99_999.99, 2)
        assert quote.fee == pytest.approx(1800)
        assert quote.free_shipping is False

    def test_free_for_every_zone_and_tier(self, table):
        """Override holds regardless of zone or item count."""
        for zone in table.zones:
            for count in (0, 4, 7, 50):
                quote = compute_fee(zone, 150_000, count)
                assert quote.fee == 0
                assert quote.estimated_window == zone.estimated_window

    def test_tier_still_reported(self, lagos_zone):
        """Free orders still report the tier they would have priced at."""
        assert compute_fee(lagos_zone, 200_000, 8).weight_tier == "heavy"

    def test_negative_subtotal_not_free(self, lagos_zone):
        assert compute_fee(lagos_zone, -500, 1).fee == pytest.approx(1800)

    def test_missing_subtotal_not_free(self, lagos_zone):
        assert compute_fee(lagos_zone, None).fee == pytest.approx(1800)

    def test_scalar_and_expression_agree(self):
        """applies() and conditions() use the same threshold."""
        subtotals = [0.0, 99_999.0, 100_000.0, 250_000.0]
        df = pl.DataFrame({"subtotal": subtotals, "item_count": [1, 1, 1, 1]})
        flags = df.select(FreeShipping.conditions().alias("flag"))["flag"].to_list()
        assert flags == [FreeShipping.applies(s, 1) for s in subtotals]

    def test_expression_null_subtotal(self):
        df = pl.DataFrame({"subtotal": [None, 120_000.0]}, schema={"subtotal": pl.Float64})
        flags = df.select(FreeShipping.conditions().alias("flag"))["flag"].to_list()
        assert flags == [False, True]


# =============================================================================
# ADJUSTMENT CONFIGURATION TESTS
# =============================================================================

class TestAdjustments:
    """Tests for adjustment registry helpers."""

    def test_registry(self):
        assert ALL == [FreeShipping]
        assert FreeShipping.column() == "adjustment_free_shipping"
        assert FreeShipping.MIN_SUBTOTAL == FREE_SHIPPING_THRESHOLD

    def test_first_applicable(self):
        assert first_applicable(150_000, 1) is FreeShipping
        assert first_applicable(10_000, 1) is None

    def test_validate_adjustments_passes(self):
        validate_adjustments()


# =============================================================================
# FALLBACK QUOTE TESTS
# =============================================================================

class TestEmptyTableQuote:
    """Tests for the no-zone guard."""

    def test_no_zone_quote(self):
        quote = compute_fee(None, 20_000, 2)
        assert quote == FeeQuote(
            fee=FALLBACK_FEE,
            zone=None,
            estimated_window="3-5 days",
            matched=False,
        )

    def test_no_zone_ignores_free_shipping(self):
        """The guard is a flat quote; adjustments do not run."""
        assert compute_fee(None, 500_000, 9).fee == FALLBACK_FEE



# =============================================================================
# MATCHED FLAG TESTS
# =============================================================================

class TestMatchedFlag:
    """compute_fee only reports a match it was told about."""

    def test_unknown_without_resolution_info(self):
        quote = compute_fee(resolve_zone("Atlantis"), 1000, 1)
        assert quote.zone.zone == 10
        assert quote.matched is None

    def test_fallback_zone_not_reported_as_match(self):
        assert calculate_delivery_fee("Atlantis", subtotal=1000, item_count=1).matched is False

    def test_passed_through(self):
        zone = resolve_zone("Lagos")
        assert compute_fee(zone, 1000, 1, matched=True).matched is True
        assert compute_fee(zone, 1000, 1, matched=False).matched is False


# =============================================================================
# SCENARIO TESTS
# =============================================================================

class TestScenarios:
    """End-to-end quotes from the published price table."""

    def test_within_ibadan_light(self):
        quote = calculate_delivery_fee("Oyo", "Ibadan North", 20_000, 1)
        assert quote.zone.zone == 1
        assert quote.fee == pytest.approx(1000)
        assert quote.estimated_window == "Same day - 1 day"
        assert quote.matched is True

    def test_oyo_outside_ibadan_light(self):
        quote = calculate_delivery_fee("Oyo", "Ogbomoso", 20_000, 1)
        assert quote.zone.zone == 2
        assert quote.fee == pytest.approx(1400)

    def test_lagos_medium(self):
        quote = calculate_delivery_fee("Lagos", subtotal=30_000, item_count=4)
        assert quote.zone.zone == 4
        assert quote.weight_tier == "medium"
        assert quote.fee == pytest.approx(4000)
        assert quote.estimated_window == "2-3 days"

    def test_borno_free_over_threshold(self):
        quote = calculate_delivery_fee("Borno", subtotal=150_000, item_count=10)
        assert quote.zone.zone == 9
        assert quote.zone.heavy_fee == pytest.approx(33000)
        assert quote.fee == 0
        assert quote.free_shipping is True
        assert quote.estimated_window == "4-6 days"

    def test_unknown_region_priced_at_fallback(self):
        quote = calculate_delivery_fee("Atlantis", subtotal=10_000, item_count=1)
        assert quote.zone.zone == 10
        assert quote.zone.name == "Far South"
        assert quote.fee == pytest.approx(2500)
        assert quote.fee > 0
        assert quote.matched is False

    def test_lower_case_matches_title_case(self):
        assert (
            calculate_delivery_fee("oyo", "ibadan south-west", 20_000, 1)
            == calculate_delivery_fee("Oyo", "Ibadan North", 20_000, 1)
        )

    def test_defaults(self):
        """No subtotal or item count prices as light, not free."""
        quote = calculate_delivery_fee("Kano")
        assert quote.weight_tier == "light"
        assert quote.fee == pytest.approx(2500)

    def test_idempotent(self):
        first = calculate_delivery_fee("Enugu", "Nsukka", 45_000, 5)
        second = calculate_delivery_fee("Enugu", "Nsukka", 45_000, 5)
        assert first == second
        assert first.fee == pytest.approx(6000)
