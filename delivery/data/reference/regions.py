"""
Region Reference Data

Destination catalog and home-city locality fragments.
"""

# All states plus the FCT, in dropdown order
NIGERIA_STATES = [
    "Abia", "Adamawa", "Akwa Ibom", "Anambra", "Bauchi", "Bayelsa", "Benue",
    "Borno", "Cross River", "Delta", "Ebonyi", "Edo", "Ekiti", "Enugu",
    "FCT Abuja", "Gombe", "Imo", "Jigawa", "Kaduna", "Kano", "Katsina",
    "Kebbi", "Kogi", "Kwara", "Lagos", "Nasarawa", "Niger", "Ogun",
    "Ondo", "Osun", "Oyo", "Plateau", "Rivers", "Sokoto", "Taraba",
    "Yobe", "Zamfara",
]

# Local government areas and neighbourhoods that count as inside Ibadan.
# Matched as case-insensitive substrings of the city text.
IBADAN_LOCALITIES = [
    "Ibadan North", "Ibadan North-East", "Ibadan North-West",
    "Ibadan South-East", "Ibadan South-West", "Akinyele", "Egbeda",
    "Ido", "Lagelu", "Oluyole", "Ona Ara", "OKI", "Challenge", "Ring Road",
    "Mokola", "Bodija", "UCH", "UI", "Dugbe", "Agodi", "Sango", "Ojoo",
    "Iwo Road", "Moniya", "Eleyele", "Apata", "Akobo",
]
