"""Query building: marketplace slugs, brand aliases and search windows."""

from .aliases import AUTOSCOUT_BRAND_ALIASES, LACENTRALE_BRAND_ALIASES
from .slug import brand_slug, model_slug, slugify
from .window import SearchWindow, build_search_window, mileage_ceiling

__all__ = [
    "AUTOSCOUT_BRAND_ALIASES",
    "LACENTRALE_BRAND_ALIASES",
    "SearchWindow",
    "brand_slug",
    "build_search_window",
    "mileage_ceiling",
    "model_slug",
    "slugify",
]
