"""
Zone Resolution

Maps free-text destination (state + optional city) to a delivery zone.

RESOLUTION ORDER
----------------
    1. Home region: state equals or contains "Oyo" (case-insensitive).
       City inside Ibadan -> "Within Ibadan", otherwise -> "Oyo State
       (Outside Ibadan)". This branch never falls through.
    2. Generic match: first zone (by ordinal) with a member region that
       equals the state text or is contained in it (case-insensitive).
    3. Fallback: last zone in the table (most remote). Reported with
       matched=False so callers can tell it apart from a real match.

Matching is plain substring containment, so a short region name embedded in
a longer one would match the wrong zone. find_ambiguous_regions() reports
such overlaps for the catalog.

USAGE
-----
    from delivery.resolve import resolve_zone
    zone = resolve_zone("Oyo", "Bodija")
"""

from typing import NamedTuple

from .zones import Zone, ZoneTable
from .data import default_zone_table


class ZoneMatch(NamedTuple):
    """Resolved zone and whether it came from a real match."""
    zone: Zone | None
    matched: bool


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================

def match_zone(
    region: str,
    locality: str | None = None,
    table: ZoneTable | None = None
) -> ZoneMatch:
    """
    Resolve a destination to a zone, flagging fallbacks.

    Args:
        region: State text, free-form (misspellings and extra words allowed)
        locality: City / town text, optional
        table: Zone table (packaged table if not provided)

    Returns:
        ZoneMatch(zone, matched). zone is None only for an empty table.
    """
    if table is None:
        table = default_zone_table()

    region_text = (region or "").strip()
    region_lower = region_text.lower()

    # Home region special case
    home = table.home_region
    if home and (region_text == home or home.lower() in region_lower):
        if is_inside_home_city(locality or "", table):
            zone = table.get(table.home_city_zone)
        else:
            zone = table.get(table.home_region_zone)
        return ZoneMatch(zone, zone is not None)

    # Generic match, first zone wins
    for zone in table.zones:
        if any(_region_matches(member, region_lower) for member in zone.regions):
            return ZoneMatch(zone, True)

    return ZoneMatch(table.fallback, False)


def resolve_zone(
    region: str,
    locality: str | None = None,
    table: ZoneTable | None = None
) -> Zone | None:
    """
    Resolve a destination to a zone.

    Total under any non-empty table: unknown destinations resolve to the
    fallback zone rather than None.
    """
    return match_zone(region, locality, table).zone


# =============================================================================
# SUPPORTING LOOKUPS
# =============================================================================

def is_inside_home_city(locality: str, table: ZoneTable | None = None) -> bool:
    """
    Check whether city text names a place inside the home city.

    True if the text contains any locality fragment or the home city name
    itself, case-insensitive.
    """
    if table is None:
        table = default_zone_table()

    text = (locality or "").strip().lower()
    if not text:
        return False

    if table.home_city and table.home_city.lower() in text:
        return True
    return any(fragment.lower() in text for fragment in table.localities)


def all_regions(table: ZoneTable | None = None) -> list[str]:
    """Region catalog for destination pickers, in display order."""
    if table is None:
        table = default_zone_table()
    return list(table.regions)


def find_ambiguous_regions(table: ZoneTable | None = None) -> dict[str, list[int]]:
    """
    Find catalog regions that generic matching would place in several zones.

    Resolution is first-match, so any entry here silently prices from the
    lowest zone. Regions handled by the home-region branch are skipped.

    Returns:
        {region: [zone ordinals that match it]} for ambiguous regions only
    """
    if table is None:
        table = default_zone_table()

    home = table.home_region.lower()
    ambiguous = {}
    for region in table.regions:
        region_lower = region.strip().lower()
        if home and home in region_lower:
            continue
        hits = [
            zone.zone for zone in table.zones
            if any(_region_matches(member, region_lower) for member in zone.regions)
        ]
        if len(hits) > 1:
            ambiguous[region] = hits
    return ambiguous


# =============================================================================
# HELPERS
# =============================================================================

def _region_matches(member: str, region_lower: str) -> bool:
    """Exact (case-insensitive) match, or member contained in region text."""
    member_lower = member.lower()
    return member_lower == region_lower or member_lower in region_lower


__all__ = [
    "ZoneMatch",
    "match_zone",
    "resolve_zone",
    "is_inside_home_city",
    "all_regions",
    "find_ambiguous_regions",
]
