"""
Pricing Thresholds

Fixed business constants for zone resolution and fee selection.
Origin is the OKI dispatch point in Ibadan, Oyo State.
"""

# Home region / home city
HOME_REGION = "Oyo"
HOME_CITY = "Ibadan"
HOME_CITY_ZONE = 1            # "Within Ibadan"
HOME_REGION_ZONE = 2          # "Oyo State (Outside Ibadan)"

# Weight tiers (approximated by item count)
LIGHT = "light"
MEDIUM = "medium"
HEAVY = "heavy"
WEIGHT_TIERS = (LIGHT, MEDIUM, HEAVY)

MEDIUM_ITEM_THRESHOLD = 3     # More than this many items -> medium
HEAVY_ITEM_THRESHOLD = 6      # More than this many items -> heavy

# Free delivery at or above this subtotal (NGN)
FREE_SHIPPING_THRESHOLD = 100_000

# Quote used only when the zone table is empty
FALLBACK_FEE = 5000
FALLBACK_WINDOW = "3-5 days"
