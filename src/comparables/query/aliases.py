"""Brand alias tables, one per marketplace.

Read-only after import; collectors receive them by reference.
"""

from __future__ import annotations

from types import MappingProxyType

LACENTRALE_BRAND_ALIASES = MappingProxyType({
    "peugeot": "peugeot",
    "renault": "renault",
    "citroen": "citroen",
    "citroën": "citroen",
    "volkswagen": "volkswagen",
    "vw": "volkswagen",
    "bmw": "bmw",
    "mercedes": "mercedes-benz",
    "mercedes-benz": "mercedes-benz",
    "mercedes benz": "mercedes-benz",
    "audi": "audi",
    "toyota": "toyota",
    "ford": "ford",
    "opel": "opel",
    "nissan": "nissan",
    "hyundai": "hyundai",
    "kia": "kia",
    "seat": "seat",
    "skoda": "skoda",
    "škoda": "skoda",
    "fiat": "fiat",
    "dacia": "dacia",
    "volvo": "volvo",
    "honda": "honda",
    "mazda": "mazda",
    "mini": "mini",
    "jeep": "jeep",
    "land rover": "land-rover",
    "landrover": "land-rover",
    "range rover": "land-rover",
    "tesla": "tesla",
    "ds": "ds",
    "ds automobiles": "ds",
    "alfa romeo": "alfa-romeo",
    "alfa": "alfa-romeo",
    "porsche": "porsche",
    "lexus": "lexus",
    "suzuki": "suzuki",
    "mitsubishi": "mitsubishi",
})

AUTOSCOUT_BRAND_ALIASES = MappingProxyType({
    "vw": "volkswagen",
    "mercedes": "mercedes-benz",
    "mercedes benz": "mercedes-benz",
    "citroën": "citroen",
    "škoda": "skoda",
    "land rover": "land-rover",
    "landrover": "land-rover",
    "range rover": "land-rover",
    "alfa romeo": "alfa-romeo",
    "alfa": "alfa-romeo",
    "ds": "ds-automobiles",
    "ds automobiles": "ds-automobiles",
})
