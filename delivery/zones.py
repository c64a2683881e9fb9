"""
Zone Data Model

Zone is one row of the delivery price table. ZoneTable bundles the zones with
the region catalog and home-city configuration so the resolver and fee
calculator can be handed a single immutable object.

Tables are built once (see delivery.data.load_zone_table) and never mutated.
To change pricing, build a new ZoneTable and pass it in.
"""

import polars as pl
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Zone:
    """
    One delivery zone.

    Attributes:
        zone             - Ordinal, unique; lower ordinals are matched first
        name             - Display label (e.g., "South-West Extended")
        regions          - Member region identifiers, in match order
        light_fee        - Fee for 0-3 items
        medium_fee       - Fee for 4-6 items
        heavy_fee        - Fee for 7+ items
        estimated_window - Display-only delivery time (e.g., "2-3 days")
    """

    zone: int
    name: str
    regions: tuple[str, ...]
    light_fee: float
    medium_fee: float
    heavy_fee: float
    estimated_window: str

    def fee_for_tier(self, tier: str) -> float:
        """Fee for a weight tier ("light", "medium" or "heavy")."""
        if tier not in ("light", "medium", "heavy"):
            raise ValueError(f"Unknown weight tier: {tier!r}")
        return getattr(self, f"{tier}_fee")


@dataclass(frozen=True)
class ZoneTable:
    """
    Immutable pricing configuration.

    Zones are stored sorted by ordinal. The last zone is the fallback for
    destinations that match nothing.

    Raises:
        ValueError: If the table is inconsistent (see validate)
    """

    zones: tuple[Zone, ...]
    regions: tuple[str, ...] = ()
    localities: tuple[str, ...] = ()
    home_region: str = ""
    home_city: str = ""
    home_city_zone: int | None = None
    home_region_zone: int | None = None
    _by_number: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        ordered = tuple(sorted(self.zones, key=lambda z: z.zone))
        object.__setattr__(self, "zones", ordered)
        object.__setattr__(self, "regions", tuple(self.regions))
        object.__setattr__(self, "localities", tuple(self.localities))
        object.__setattr__(self, "_by_number", {z.zone: z for z in ordered})
        self.validate()

    # -------------------------------------------------------------------------
    # LOOKUPS
    # -------------------------------------------------------------------------

    def get(self, zone: int | None) -> Zone | None:
        """Zone by ordinal, or None."""
        return self._by_number.get(zone)

    @property
    def fallback(self) -> Zone | None:
        """Last zone in ordinal order (most remote default)."""
        return self.zones[-1] if self.zones else None

    def __len__(self) -> int:
        return len(self.zones)

    # -------------------------------------------------------------------------
    # VALIDATION
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Validate table integrity.

        Collects every problem and raises once, so a bad reference file
        reports all of its issues in one go.
        """
        errors = []

        counts: dict[int, int] = {}
        for z in self.zones:
            counts[z.zone] = counts.get(z.zone, 0) + 1
        dupes = sorted(n for n, c in counts.items() if c > 1)
        if dupes:
            errors.append(f"duplicate zone ordinals: {dupes}")

        for z in self.zones:
            if min(z.light_fee, z.medium_fee, z.heavy_fee) < 0:
                errors.append(f"zone {z.zone}: fees must be non-negative")
            if not (z.light_fee <= z.medium_fee <= z.heavy_fee):
                errors.append(
                    f"zone {z.zone}: fees must satisfy light <= medium <= heavy "
                    f"(got {z.light_fee}, {z.medium_fee}, {z.heavy_fee})"
                )
            if not z.regions:
                errors.append(f"zone {z.zone}: has no member regions")

        if self.zones:
            for label, number in (
                ("home_city_zone", self.home_city_zone),
                ("home_region_zone", self.home_region_zone),
            ):
                if self.home_region and number not in self._by_number:
                    errors.append(f"{label} {number} not found in table")

        if errors:
            raise ValueError("Invalid zone table:\n  - " + "\n  - ".join(errors))

    # -------------------------------------------------------------------------
    # EXPORT
    # -------------------------------------------------------------------------

    def to_frame(self) -> pl.DataFrame:
        """
        Zone prices as a DataFrame, ready for joining on delivery_zone.

        Returns:
            DataFrame with columns: delivery_zone, zone_name, light_fee,
            medium_fee, heavy_fee, estimated_window
        """
        return pl.DataFrame(
            {
                "delivery_zone": [z.zone for z in self.zones],
                "zone_name": [z.name for z in self.zones],
                "light_fee": [float(z.light_fee) for z in self.zones],
                "medium_fee": [float(z.medium_fee) for z in self.zones],
                "heavy_fee": [float(z.heavy_fee) for z in self.zones],
                "estimated_window": [z.estimated_window for z in self.zones],
            },
            schema={
                "delivery_zone": pl.Int64,
                "zone_name": pl.Utf8,
                "light_fee": pl.Float64,
                "medium_fee": pl.Float64,
                "heavy_fee": pl.Float64,
                "estimated_window": pl.Utf8,
            },
        )


__all__ = [
    "Zone",
    "ZoneTable",
]
