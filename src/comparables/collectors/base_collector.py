"""Base class for marketplace comparables collectors.

Provides the never-raise ``collect()`` contract, per-call document
fetching and the shared tier helpers. Marketplace collectors
(AutoScout24, La Centrale) inherit and implement build_strategies().
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

import requests
from pydantic import ValidationError

from ...common.models import ListingSource, NormalizedListing, TargetVehicle
from ..common.config import Config
from ..common.http_client import HTTPClient
from ..query.window import SearchWindow, build_search_window
from .normalizer import FieldMap, normalize_listings
from .tiers import (
    Strategy,
    TierResult,
    extract_next_data,
    extract_window_state,
    find_listing_array,
    run_tiers,
    scrape_price_mileage,
)

logger = logging.getLogger(__name__)

PATTERN_FIELD_MAP = FieldMap(price=("price",), mileage=("mileage",))


class DocumentFetcher:
    """Responses fetched during one collect() call, each URL at most once.

    Failed requests are logged and remembered as None, so a tier that
    reuses a failed document gives up without hitting the site again.
    """

    def __init__(self, client: HTTPClient, source: ListingSource) -> None:
        self._client = client
        self._source = source
        self._responses: dict[tuple, requests.Response | None] = {}

    def fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response | None:
        key = (url, tuple(sorted((params or {}).items())))
        if key in self._responses:
            return self._responses[key]

        response = None
        try:
            response = self._client.get(url, params=params, headers=headers)
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            logger.warning(
                "[%s] HTTP %s from %s, document skipped", self._source.value, status, url
            )
        except requests.RequestException as exc:
            logger.warning("[%s] request to %s failed: %s", self._source.value, url, exc)

        self._responses[key] = response
        return response


class BaseCollector(ABC):
    """Abstract base for comparables collectors.

    Subclasses set SOURCE, BRAND_ALIASES and FIELD_MAP and return their
    tier ladder from build_strategies().
    """

    SOURCE: ListingSource
    BRAND_ALIASES: Mapping[str, str] = MappingProxyType({})
    FIELD_MAP: FieldMap

    def __init__(
        self,
        config: Config | None = None,
        brand_aliases: Mapping[str, str] | None = None,
    ) -> None:
        self.config = config or Config()
        self.brand_aliases = (
            brand_aliases if brand_aliases is not None else self.BRAND_ALIASES
        )
        self._client = HTTPClient(self.config)

    @property
    def name(self) -> str:
        return self.SOURCE.value

    @abstractmethod
    def build_strategies(
        self,
        target: TargetVehicle,
        window: SearchWindow,
        documents: DocumentFetcher,
    ) -> list[Strategy]:
        """Ordered extraction tiers for this marketplace."""
        ...

    def run(self, target: TargetVehicle) -> TierResult:
        """Collect comparables and report which tier produced them.

        Never raises: every failure ends in an empty TierResult.
        """
        try:
            window = build_search_window(target)
            documents = DocumentFetcher(self._client, self.SOURCE)
            result = run_tiers(
                self.build_strategies(target, window, documents), self.name
            )
        except Exception:
            logger.warning("[%s] collection failed", self.name, exc_info=True)
            return TierResult()

        logger.info(
            "[%s] %d listings for %s %s %d (tier=%s)",
            self.name,
            len(result.listings),
            target.brand,
            target.model,
            target.year,
            result.tier.value if result.tier else "none",
        )
        return result

    def collect(self, target: TargetVehicle) -> list[NormalizedListing]:
        """Comparable listings for ``target``; empty list on any failure."""
        return self.run(target).listings

    def collect_for(
        self, brand: str, model: str, year: int, mileage: int
    ) -> list[NormalizedListing]:
        """Same as collect(), from loose arguments. Invalid input gives []."""
        try:
            target = TargetVehicle(brand=brand, model=model, year=year, mileage=mileage)
        except ValidationError as exc:
            logger.warning("[%s] invalid target vehicle: %s", self.name, exc)
            return []
        return self.collect(target)

    # === Tier helpers ===

    def base_headers(self, referer: str) -> dict[str, str]:
        return {
            "Accept": "application/json, text/html, */*",
            "Referer": referer,
            "Cache-Control": "no-cache",
        }

    def _normalize(self, records: Sequence[Any]) -> list[NormalizedListing]:
        return normalize_listings(
            records, self.FIELD_MAP, self.SOURCE, self.config.max_listings_per_source
        )

    def _from_json(
        self, response: requests.Response | None, paths: Sequence[str]
    ) -> list[NormalizedListing]:
        """Structured tier: a JSON body with the listing array at one of ``paths``."""
        if response is None:
            return []
        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            logger.debug("[%s] expected JSON, got %r", self.name, content_type)
            return []

        try:
            data = json.loads(response.text)
        except json.JSONDecodeError:
            logger.warning("[%s] failed to parse JSON response", self.name)
            return []

        return self._normalize(find_listing_array(data, paths))

    def _from_next_data(
        self, response: requests.Response | None, paths: Sequence[str]
    ) -> list[NormalizedListing]:
        """Embedded tier: the ``__NEXT_DATA__`` blob of an HTML page."""
        if response is None:
            return []
        data = extract_next_data(response.text)
        if data is None:
            logger.debug("[%s] __NEXT_DATA__ not found", self.name)
            return []
        return self._normalize(find_listing_array(data, paths))

    def _from_window_state(
        self, response: requests.Response | None, paths: Sequence[str]
    ) -> list[NormalizedListing]:
        """Embedded tier: a ``window.__*_STATE__`` assignment in an HTML page."""
        if response is None:
            return []
        data = extract_window_state(response.text)
        if data is None:
            return []
        return self._normalize(find_listing_array(data, paths))

    def _from_patterns(self, response: requests.Response | None) -> list[NormalizedListing]:
        """Pattern tier: regex price/mileage pairs, year unknown."""
        if response is None:
            return []
        limit = self.config.pattern_max_listings
        pairs = scrape_price_mileage(response.text, limit)
        return normalize_listings(pairs, PATTERN_FIELD_MAP, self.SOURCE, limit)
