"""Extraction tiers and the fallback driver.

A collector describes its extraction as an ordered list of strategies,
most reliable first:

1. structured  - a JSON API response with a known layout
2. embedded    - a JSON blob the page's framework left in the HTML
                 (``__NEXT_DATA__``, ``window.__PRELOADED_STATE__``...)
3. pattern     - regex over the visible text for "12 500 €" / "45 000 km"

:func:`run_tiers` returns the first strategy that yields listings.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup

from ...common.models import NormalizedListing

logger = logging.getLogger(__name__)


class Tier(str, Enum):
    """Extraction strategies, in decreasing order of reliability."""
    STRUCTURED = "structured"
    EMBEDDED = "embedded"
    PATTERN = "pattern"


@dataclass(frozen=True)
class Strategy:
    """One rung of the ladder: a tier tag and the code that runs it."""
    tier: Tier
    run: Callable[[], list[NormalizedListing]]


@dataclass(frozen=True)
class TierResult:
    """Listings produced by the winning tier (``tier`` is None if none won)."""
    tier: Tier | None = None
    listings: list[NormalizedListing] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.listings)

    @property
    def reduced_confidence(self) -> bool:
        return self.tier == Tier.PATTERN


def run_tiers(strategies: Iterable[Strategy], source: str) -> TierResult:
    """Run strategies in order, return the first non-empty result.

    A strategy that raises counts as "no data"; the next one runs.
    """
    for strategy in strategies:
        try:
            listings = strategy.run()
        except Exception:
            logger.warning(
                "[%s] %s tier failed", source, strategy.tier.value, exc_info=True
            )
            continue

        if listings:
            if strategy.tier == Tier.PATTERN:
                logger.warning(
                    "[%s] pattern extraction: %d listings, reduced confidence "
                    "(positional price/mileage pairing, year unknown)",
                    source,
                    len(listings),
                )
            return TierResult(tier=strategy.tier, listings=listings)

        logger.debug("[%s] %s tier yielded nothing", source, strategy.tier.value)

    return TierResult()


# === Nested data lookup ===

def resolve_path(data: Any, path: str) -> Any:
    """Follow a dotted key path ("props.pageProps.listings") through dicts.

    Returns None as soon as a key is missing or a value is not a dict.
    """
    current = data
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def find_listing_array(data: Any, paths: Sequence[str]) -> list[Any]:
    """Return the first non-empty list found at one of ``paths``."""
    for path in paths:
        value = resolve_path(data, path)
        if isinstance(value, list) and value:
            return value
    return []


# === Embedded blobs ===

_WINDOW_STATE_RE = re.compile(
    r"window\.__(?:PRELOADED_STATE|INITIAL_STATE|APP_STATE)__\s*=\s*"
)


def extract_next_data(html: str) -> dict | None:
    """Parse the ``<script id="__NEXT_DATA__">`` payload of a Next.js page."""
    soup = BeautifulSoup(html, "lxml")
    script = soup.select_one("script#__NEXT_DATA__")
    if script is None or not script.string:
        return None

    try:
        data = json.loads(script.string)
    except json.JSONDecodeError:
        logger.debug("__NEXT_DATA__ is not valid JSON")
        return None
    return data if isinstance(data, dict) else None


def extract_window_state(html: str) -> dict | None:
    """Parse a ``window.__PRELOADED_STATE__ = {...};`` style assignment."""
    match = _WINDOW_STATE_RE.search(html)
    if not match:
        return None

    try:
        data, _ = json.JSONDecoder().raw_decode(html, match.end())
    except json.JSONDecodeError:
        logger.debug("window state assignment is not valid JSON")
        return None
    return data if isinstance(data, dict) else None


# === Pattern extraction ===

# "12 500 €", "12500€", "12 500 EUR"; groups may use regular or narrow no-break spaces
_PRICE_RE = re.compile(r"(?<!\d)(\d{1,3}(?:[ \u00a0\u202f]?\d{3})*)\s*(?:€|EUR\b)")
_MILEAGE_RE = re.compile(
    r"(?<!\d)(\d{1,3}(?:[ \u00a0\u202f]?\d{3})*)\s*km\b", re.IGNORECASE
)

PATTERN_PRICE_RANGE = (2_000, 100_000)
PATTERN_MILEAGE_RANGE = (1_000, 400_000)


def _numbers(pattern: re.Pattern, text: str, bounds: tuple[int, int]) -> list[int]:
    low, high = bounds
    values = []
    for match in pattern.finditer(text):
        digits = re.sub(r"\D", "", match.group(1))
        if len(digits) > len(str(high)):
            continue
        value = int(digits)
        if low <= value <= high:
            values.append(value)
    return values


def scrape_price_mileage(html: str, limit: int) -> list[dict[str, int]]:
    """Pair the i-th plausible price with the i-th plausible mileage.

    Approximate: listing boundaries are not parsed, so a listing with
    no mileage shown shifts every following pair. Prices without a
    matching mileage get 0.
    """
    text = BeautifulSoup(html, "lxml").get_text(" ")
    prices = _numbers(_PRICE_RE, text, PATTERN_PRICE_RANGE)
    mileages = _numbers(_MILEAGE_RE, text, PATTERN_MILEAGE_RANGE)

    count = min(len(prices), max(len(mileages), 1), limit)
    return [
        {"price": prices[i], "mileage": mileages[i] if i < len(mileages) else 0}
        for i in range(count)
    ]
