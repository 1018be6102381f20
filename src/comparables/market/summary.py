"""Caller-side view of collected comparables.

Aggregates per-source listings into a few market figures and renders
them as compact text for a downstream pricing step. This is evidence,
not a price recommendation.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from statistics import median

from ...common.models import NormalizedListing

VERSION_MAX_CHARS = 40

# Below this many listings the evidence is only indicative
LIMITED_DATA_THRESHOLD = 5


class DataQuality(str, Enum):
    """How much the collected evidence can be trusted, by listing count."""
    GOOD = "bonne"
    LIMITED = "limitee"
    INSUFFICIENT = "insuffisante"

    @classmethod
    def for_count(cls, total: int) -> DataQuality:
        if total == 0:
            return cls.INSUFFICIENT
        if total < LIMITED_DATA_THRESHOLD:
            return cls.LIMITED
        return cls.GOOD


@dataclass
class MarketSummary:
    """Price figures over all listings from all sources."""

    total_listings: int = 0
    professional_listings: int = 0
    price_min: int | None = None
    price_median: int | None = None
    price_max: int | None = None
    sources: list[str] = field(default_factory=list)
    data_quality: DataQuality = DataQuality.INSUFFICIENT

    @property
    def has_data(self) -> bool:
        return self.total_listings > 0

    def to_dict(self) -> dict:
        return {
            "total_listings": self.total_listings,
            "professional_listings": self.professional_listings,
            "price_min": self.price_min,
            "price_median": self.price_median,
            "price_max": self.price_max,
            "sources": self.sources,
            "data_quality": self.data_quality.value,
        }


def summarize(results: Mapping[str, Sequence[NormalizedListing]]) -> MarketSummary:
    """Summarize ``{source: listings}`` as returned by collect_all()."""
    listings = [listing for items in results.values() for listing in items]
    if not listings:
        return MarketSummary()

    prices = [listing.price for listing in listings]
    return MarketSummary(
        total_listings=len(listings),
        professional_listings=sum(1 for listing in listings if listing.is_professional),
        price_min=min(prices),
        price_median=int(median(prices)),
        price_max=max(prices),
        sources=[source for source, items in results.items() if items],
        data_quality=DataQuality.for_count(len(listings)),
    )


def _thousands(value: int) -> str:
    # French grouping: 12 500
    return f"{value:,}".replace(",", " ")


def format_listing(index: int, listing: NormalizedListing) -> str:
    year = str(listing.year) if listing.year > 0 else "année inconnue"
    mileage = f"{_thousands(listing.mileage)} km" if listing.mileage > 0 else "km inconnu"
    seller = "PRO" if listing.is_professional else "PAR"
    version = f" - {listing.version[:VERSION_MAX_CHARS]}" if listing.version else ""
    return f"  {index}. {_thousands(listing.price)}€ | {year} | {mileage} | {seller}{version}"


def format_listings_for_prompt(listings: Sequence[NormalizedListing]) -> str:
    """One line per listing: ``price€ | year | km | PRO/PAR - version``."""
    if not listings:
        return "Aucune annonce disponible pour cette source."
    return "\n".join(format_listing(i, listing) for i, listing in enumerate(listings, 1))
