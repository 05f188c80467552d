"""Catalog v1 entries."""

ITEMS = [
    {
        "title": "Nintendo Switch (有機ELモデル) ホワイト",
        "jan": "4902370548495",
        "upc": None,
        "model": "HEG-S-KAAAA",
        "official_release": "2021-10-08",
        "official_msrp": 37980,
        "currency": "JPY",
    },
    {
        "title": "PlayStation 5 (CFI-1200A01)",
        "jan": "4948872415598",
        "upc": None,
        "model": "CFI-1200A01",
        "official_release": "2022-09-15",
        "official_msrp": 60478,
        "currency": "JPY",
    },
    {
        "title": "Apple AirPods Pro (第2世代 USB-C)",
        "jan": "4549995402166",
        "upc": None,
        "model": "A2968",
        "official_release": "2023-09-22",
        "official_msrp": 39800,
        "currency": "JPY",
    },
]
