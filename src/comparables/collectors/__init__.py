"""Comparables collectors - marketplace listings for a target vehicle."""

from .autoscout_collector import AutoScout24Collector
from .base_collector import BaseCollector, DocumentFetcher
from .lacentrale_collector import LaCentraleCollector
from .normalizer import FieldMap, normalize_listings
from .runner import COLLECTORS, build_collectors, collect_all
from .tiers import Strategy, Tier, TierResult, run_tiers

__all__ = [
    "AutoScout24Collector",
    "BaseCollector",
    "COLLECTORS",
    "DocumentFetcher",
    "FieldMap",
    "LaCentraleCollector",
    "Strategy",
    "Tier",
    "TierResult",
    "build_collectors",
    "collect_all",
    "normalize_listings",
    "run_tiers",
]
