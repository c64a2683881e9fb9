"""
Order Delivery Fee Calculator

DataFrame in, DataFrame out. The input can come from any source (order export,
CSV, manual creation) as long as it contains the required columns. The output
is the same DataFrame with zone, tier and fee columns appended. Each row gets
exactly what calculate_delivery_fee() would quote for it.

REQUIRED INPUT COLUMNS
----------------------
    delivery_state      - State text as entered at checkout
    subtotal            - Order subtotal before delivery (NGN)

OPTIONAL INPUT COLUMNS
----------------------
    delivery_city       - City text (missing / null -> "")
    item_count          - Total quantity (missing / null -> 0)

OUTPUT COLUMNS ADDED
--------------------
    supplement_orders() adds:
        - delivery_zone, zone_matched

    calculate() adds:
        - zone_name, estimated_window, weight_tier
        - fee_base (tier fee), adjustment_* flags
        - fee_total, order_total
        - calculator_version

USAGE
-----
    from delivery.calculate_fees import calculate_fees
    result = calculate_fees(df)
"""

import polars as pl

from .version import VERSION
from .zones import ZoneTable
from .resolve import match_zone
from .adjustments import ALL
from .data import (
    default_zone_table,
    LIGHT,
    MEDIUM,
    HEAVY,
    MEDIUM_ITEM_THRESHOLD,
    HEAVY_ITEM_THRESHOLD,
    FALLBACK_FEE,
    FALLBACK_WINDOW,
)


REQUIRED_COLUMNS = ["delivery_state", "subtotal"]

# Columns this module writes; replaced when an already priced frame is re-run
OUTPUT_COLUMNS = [
    "delivery_zone",
    "zone_matched",
    "zone_name",
    "estimated_window",
    "weight_tier",
    "fee_base",
    *(adjustment.column() for adjustment in ALL),
    "fee_total",
    "order_total",
    "calculator_version",
    "fee_difference",
    "fee_mismatch",
]


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_fees(
    df: pl.DataFrame,
    table: ZoneTable | None = None
) -> pl.DataFrame:
    """
    Calculate delivery fees for an order DataFrame.

    This is the main entry point. Takes raw order data and returns the same
    DataFrame with zone and fee columns appended.

    Args:
        df: Order DataFrame with required columns (see module docstring)
        table: Zone table (packaged table if not provided)

    Returns:
        DataFrame with zones, tiers, adjustment flags and fees

    Raises:
        ValueError: If required columns are missing
    """
    if table is None:
        table = default_zone_table()

    df = supplement_orders(df, table)
    df = calculate(df, table)
    return df


# =============================================================================
# SUPPLEMENT ORDERS
# =============================================================================

def supplement_orders(
    df: pl.DataFrame,
    table: ZoneTable | None = None
) -> pl.DataFrame:
    """
    Resolve each order's destination to a zone.

    Destinations repeat heavily across orders, so each distinct
    (state, city) pair is resolved once and joined back.

    Args:
        df: Raw order DataFrame
        table: Zone table (packaged table if not provided)

    Returns:
        DataFrame with added columns:
            - delivery_zone: Zone ordinal (null only for an empty table)
            - zone_matched: False when the fallback zone was used
        and item_count with nulls as 0. Columns from an earlier run are
        replaced.
    """
    if table is None:
        table = default_zone_table()

    _check_columns(df, REQUIRED_COLUMNS)

    df = _normalise_inputs(df)
    df = _lookup_zones(df, table)

    return df


def _normalise_inputs(df: pl.DataFrame) -> pl.DataFrame:
    """Drop earlier results, add temporary match keys, fill optional columns."""
    df = df.drop([col for col in OUTPUT_COLUMNS if col in df.columns])

    city = (
        pl.col("delivery_city").cast(pl.Utf8).fill_null("")
        if "delivery_city" in df.columns
        else pl.lit("")
    )
    items = (
        pl.col("item_count").fill_null(0)
        if "item_count" in df.columns
        else pl.lit(0, dtype=pl.Int64)
    )

    return df.with_columns([
        pl.col("delivery_state").cast(pl.Utf8).fill_null("").alias("_state"),
        city.alias("_city"),
        items.alias("item_count"),
    ])


def _lookup_zones(df: pl.DataFrame, table: ZoneTable) -> pl.DataFrame:
    """
    Join resolved zones onto orders by (state, city).

    Resolution is done in Python with the same matcher as single quotes,
    so batch and checkout results cannot drift apart.
    """
    destinations = df.select(["_state", "_city"]).unique()
    matches = [
        match_zone(state, city, table)
        for state, city in destinations.iter_rows()
    ]

    lookup = destinations.with_columns([
        pl.Series(
            "delivery_zone",
            [m.zone.zone if m.zone is not None else None for m in matches],
            dtype=pl.Int64,
        ),
        pl.Series(
            "zone_matched",
            [m.matched for m in matches],
            dtype=pl.Boolean,
        ),
    ])

    df = df.with_row_index("_row_id")
    df = df.join(lookup, on=["_state", "_city"], how="left")
    df = df.sort("_row_id").drop(["_row_id", "_state", "_city"])

    return df


# =============================================================================
# CALCULATE FEES
# =============================================================================

def calculate(
    df: pl.DataFrame,
    table: ZoneTable | None = None
) -> pl.DataFrame:
    """
    Calculate fees for supplemented orders.

    Args:
        df: Supplemented order DataFrame from supplement_orders
        table: Zone table used for supplementing

    Returns:
        DataFrame with tiers, adjustment flags, fees and totals

    Processing order:
        1. Zone prices     - join light/medium/heavy fees by delivery_zone
        2. Weight tier     - from item_count
        3. Base fee        - tier fee (empty-table fallback if no zone)
        4. Adjustments     - first triggered adjustment overrides the fee
        5. Totals          - fee_total, order_total
    """
    if table is None:
        table = default_zone_table()

    df = _join_zone_prices(df, table)
    df = _add_weight_tier(df)
    df = _calculate_base_fee(df)
    df = _apply_adjustments(df)
    df = _calculate_totals(df)
    df = _stamp_version(df)

    return df


def _join_zone_prices(df: pl.DataFrame, table: ZoneTable) -> pl.DataFrame:
    """Join zone name, tier prices and window by delivery_zone."""
    df = df.with_row_index("_row_id")
    df = df.join(table.to_frame(), on="delivery_zone", how="left")
    df = df.sort("_row_id").drop("_row_id")

    return df.with_columns(
        pl.col("estimated_window").fill_null(FALLBACK_WINDOW)
    )


def _add_weight_tier(df: pl.DataFrame) -> pl.DataFrame:
    """
    Select weight tier from item count.

    Tiers: <= 3 light, 4-6 medium, > 6 heavy. Null when there is no zone.
    """
    return df.with_columns(
        pl.when(pl.col("delivery_zone").is_null())
        .then(pl.lit(None, dtype=pl.Utf8))
        .when(pl.col("item_count") > HEAVY_ITEM_THRESHOLD)
        .then(pl.lit(HEAVY))
        .when(pl.col("item_count") > MEDIUM_ITEM_THRESHOLD)
        .then(pl.lit(MEDIUM))
        .otherwise(pl.lit(LIGHT))
        .alias("weight_tier")
    )


def _calculate_base_fee(df: pl.DataFrame) -> pl.DataFrame:
    """Pick the tier price, then drop the per-tier price columns."""
    df = df.with_columns(
        pl.when(pl.col("delivery_zone").is_null())
        .then(pl.lit(float(FALLBACK_FEE)))
        .when(pl.col("weight_tier") == HEAVY)
        .then(pl.col("heavy_fee"))
        .when(pl.col("weight_tier") == MEDIUM)
        .then(pl.col("medium_fee"))
        .otherwise(pl.col("light_fee"))
        .alias("fee_base")
    )

    return df.drop(["light_fee", "medium_fee", "heavy_fee"])


def _apply_adjustments(df: pl.DataFrame) -> pl.DataFrame:
    """
    Flag adjustments and compute fee_total.

    Only the highest priority adjustment that triggers wins. Orders without
    a zone keep the fallback fee untouched.
    """
    exclusion_mask = pl.col("delivery_zone").is_null()

    for adjustment in ALL:
        flag_col = adjustment.column()
        applies = adjustment.conditions() & ~exclusion_mask
        df = df.with_columns(applies.alias(flag_col))
        exclusion_mask = exclusion_mask | pl.col(flag_col)

    fee = pl.col("fee_base")
    for adjustment in reversed(ALL):
        fee = (
            pl.when(pl.col(adjustment.column()))
            .then(pl.lit(float(adjustment.fee_override)))
            .otherwise(fee)
        )

    return df.with_columns(fee.alias("fee_total"))


def _calculate_totals(df: pl.DataFrame) -> pl.DataFrame:
    """Calculate order_total as subtotal plus delivery fee."""
    return df.with_columns(
        (pl.col("subtotal") + pl.col("fee_total")).alias("order_total")
    )


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


# =============================================================================
# AUDIT
# =============================================================================

def compare_to_charged(
    df: pl.DataFrame,
    charged_column: str = "delivery_fee"
) -> pl.DataFrame:
    """
    Compare calculated fees with the fee actually charged on each order.

    Args:
        df: Calculated order DataFrame from calculate_fees
        charged_column: Column holding the charged delivery fee

    Returns:
        DataFrame with added columns:
            - fee_difference: charged - fee_total
            - fee_mismatch: True when the difference is non-zero

    Raises:
        ValueError: If the charged column or fee_total is missing
    """
    _check_columns(df, [charged_column, "fee_total"])

    df = df.with_columns(
        (pl.col(charged_column).cast(pl.Float64) - pl.col("fee_total"))
        .alias("fee_difference")
    )
    return df.with_columns(
        (pl.col("fee_difference").abs() > 1e-9).fill_null(True).alias("fee_mismatch")
    )


# =============================================================================
# HELPERS
# =============================================================================

def _check_columns(df: pl.DataFrame, columns: list[str]) -> None:
    """Raise ValueError naming any missing columns."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(
            f"Missing required column(s): {', '.join(missing)}. "
            f"Got: {', '.join(df.columns) or '(none)'}"
        )


__all__ = [
    "REQUIRED_COLUMNS",
    "calculate_fees",
    "supplement_orders",
    "calculate",
    "compare_to_charged",
]
