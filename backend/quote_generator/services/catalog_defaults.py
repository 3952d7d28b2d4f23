"""Built-in reference data.

Used when the catalog YAML cannot be loaded.
"""

DEFAULT_CURRENCIES = [
    {"code": "ZAR", "symbol": "R", "label": "South African Rand"},
    {"code": "USD", "symbol": "$", "label": "US Dollar"},
    {"code": "EUR", "symbol": "€", "label": "Euro"},
    {"code": "GBP", "symbol": "£", "label": "British Pound"},
]

DEFAULT_BRANDS = {
    "D'Aria": ["Merlot", "Shiraz", "Sauvignon Blanc"],
    "Durbanville Hills": ["Chardonnay", "Pinotage"],
    "Kanonkop": ["Pinotage", "Paul Sauer", "Kadette"],
    "Meerlust": ["Rubicon", "Merlot"],
}

INCOTERMS = ["EXW", "FOB", "CFR", "CIF", "DAP", "DDP"]

# Port of choice is suppressed for this incoterm
EXW = "EXW"
DEFAULT_INCOTERM = EXW
