"""
Delivery Data

Reference data and loaders for the zone table, region catalog and thresholds.

Structure:
    - reference/zones.csv         One row per zone (prices, delivery window)
    - reference/zone_regions.csv  Zone membership in long format (zone, region)
    - reference/regions.py        Region catalog and Ibadan locality fragments
    - reference/thresholds.py     Tier, free-shipping and home-region constants
"""

import polars as pl
from functools import lru_cache
from pathlib import Path

from ..zones import Zone, ZoneTable
from .reference.regions import NIGERIA_STATES, IBADAN_LOCALITIES
from .reference.thresholds import (
    HOME_REGION,
    HOME_CITY,
    HOME_CITY_ZONE,
    HOME_REGION_ZONE,
    LIGHT,
    MEDIUM,
    HEAVY,
    WEIGHT_TIERS,
    MEDIUM_ITEM_THRESHOLD,
    HEAVY_ITEM_THRESHOLD,
    FREE_SHIPPING_THRESHOLD,
    FALLBACK_FEE,
    FALLBACK_WINDOW,
)


REFERENCE_DIR = Path(__file__).parent / "reference"


def load_zones(reference_dir: Path = REFERENCE_DIR) -> pl.DataFrame:
    """
    Load zone prices from CSV.

    Returns:
        DataFrame with columns: zone, name, light_fee, medium_fee,
        heavy_fee, estimated_window
    """
    return pl.read_csv(
        reference_dir / "zones.csv",
        schema_overrides={
            "zone": pl.Int64,
            "name": pl.Utf8,
            "light_fee": pl.Float64,
            "medium_fee": pl.Float64,
            "heavy_fee": pl.Float64,
            "estimated_window": pl.Utf8,
        }
    )


def load_zone_regions(reference_dir: Path = REFERENCE_DIR) -> pl.DataFrame:
    """
    Load zone membership from CSV.

    File order is match order within a zone, so it is preserved.

    Returns:
        DataFrame with columns: zone, region
    """
    return pl.read_csv(
        reference_dir / "zone_regions.csv",
        schema_overrides={
            "zone": pl.Int64,
            "region": pl.Utf8,
        }
    )


def load_zone_table(reference_dir: Path = REFERENCE_DIR) -> ZoneTable:
    """
    Build a ZoneTable from the reference files.

    Args:
        reference_dir: Directory holding zones.csv and zone_regions.csv

    Returns:
        Validated, immutable ZoneTable

    Raises:
        ValueError: If a zone has no regions, a region references an unknown
            zone, or the prices are inconsistent
    """
    zones = load_zones(reference_dir)
    memberships = load_zone_regions(reference_dir)

    known = set(zones["zone"].to_list())
    unknown = sorted(set(memberships["zone"].to_list()) - known)
    if unknown:
        raise ValueError(
            f"zone_regions.csv references unknown zone(s) {unknown}. "
            f"Check zones.csv."
        )

    regions_by_zone: dict[int, list[str]] = {}
    for row in memberships.iter_rows(named=True):
        regions_by_zone.setdefault(row["zone"], []).append(row["region"].strip())

    return ZoneTable(
        zones=tuple(
            Zone(
                zone=row["zone"],
                name=row["name"],
                regions=tuple(regions_by_zone.get(row["zone"], [])),
                light_fee=row["light_fee"],
                medium_fee=row["medium_fee"],
                heavy_fee=row["heavy_fee"],
                estimated_window=row["estimated_window"],
            )
            for row in zones.iter_rows(named=True)
        ),
        regions=tuple(NIGERIA_STATES),
        localities=tuple(IBADAN_LOCALITIES),
        home_region=HOME_REGION,
        home_city=HOME_CITY,
        home_city_zone=HOME_CITY_ZONE,
        home_region_zone=HOME_REGION_ZONE,
    )


@lru_cache(maxsize=1)
def default_zone_table() -> ZoneTable:
    """Packaged zone table, loaded once per process."""
    return load_zone_table()


__all__ = [
    # Loaders
    "load_zones",
    "load_zone_regions",
    "load_zone_table",
    "default_zone_table",
    "REFERENCE_DIR",
    # Region catalog
    "NIGERIA_STATES",
    "IBADAN_LOCALITIES",
    # Thresholds
    "HOME_REGION",
    "HOME_CITY",
    "HOME_CITY_ZONE",
    "HOME_REGION_ZONE",
    "LIGHT",
    "MEDIUM",
    "HEAVY",
    "WEIGHT_TIERS",
    "MEDIUM_ITEM_THRESHOLD",
    "HEAVY_ITEM_THRESHOLD",
    "FREE_SHIPPING_THRESHOLD",
    "FALLBACK_FEE",
    "FALLBACK_WINDOW",
]
