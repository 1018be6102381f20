"""AutoScout24 comparables collector.

AutoScout24 serves its search page from Next.js. Asked for JSON
(``format=json`` + JSON accept header) it sometimes answers with the
listing payload directly; otherwise the same data sits in the page's
``__NEXT_DATA__`` script.

Search URL: GET https://www.autoscout24.fr/lst/{make}/{model}
"""

from __future__ import annotations

import logging

from ...common.models import ListingSource, TargetVehicle
from ..query.aliases import AUTOSCOUT_BRAND_ALIASES
from ..query.slug import brand_slug, model_slug
from ..query.window import SearchWindow
from .base_collector import BaseCollector, DocumentFetcher
from .normalizer import FieldMap
from .tiers import Strategy, Tier

logger = logging.getLogger(__name__)


class AutoScout24Collector(BaseCollector):
    """Collector for AutoScout24 (France) listings.

    Usage:
        collector = AutoScout24Collector()
        listings = collector.collect_for("Peugeot", "308", 2023, 18000)
    """

    SOURCE = ListingSource.AUTOSCOUT24
    BRAND_ALIASES = AUTOSCOUT_BRAND_ALIASES

    FIELD_MAP = FieldMap(
        price=("price.value", "price"),
        year=("firstRegistration",),
        mileage=("mileage.value", "mileage"),
        version=("title",),
        localisation=("location.city",),
        seller_type=("seller.type",),
        professional_values=frozenset({"dealer"}),
    )

    JSON_LISTING_PATHS = ("listings",)
    NEXT_DATA_LISTING_PATHS = (
        "props.pageProps.listings",
        "props.pageProps.initialState.search.listings",
        "props.pageProps.searchResults.listings",
    )

    PAGE_SIZE = 15

    def search_url(self, target: TargetVehicle) -> str:
        make = brand_slug(target.brand, self.brand_aliases)
        model = model_slug(target.model)
        return f"{self.config.autoscout_base_url}/lst/{make}/{model}"

    def search_params(self, window: SearchWindow) -> dict[str, str]:
        params = {
            "fregfrom": str(window.year_min),
            "fregto": str(window.year_max),
            "cy": "F",  # France
            "atype": "C",  # cars
            "sort": "price",
            "desc": "0",
            "size": str(self.PAGE_SIZE),
            "page": "1",
            "format": "json",
        }
        if window.has_mileage_ceiling:
            params["kmto"] = str(window.mileage_ceiling)
        return params

    def build_strategies(
        self,
        target: TargetVehicle,
        window: SearchWindow,
        documents: DocumentFetcher,
    ) -> list[Strategy]:
        url = self.search_url(target)
        params = self.search_params(window)
        headers = self.base_headers(f"{self.config.autoscout_base_url}/")
        logger.debug("[%s] search %s params=%s", self.name, url, params)

        def search_page():
            return documents.fetch(url, params=params, headers=headers)

        return [
            Strategy(
                Tier.STRUCTURED,
                lambda: self._from_json(search_page(), self.JSON_LISTING_PATHS),
            ),
            Strategy(
                Tier.EMBEDDED,
                lambda: self._from_next_data(search_page(), self.NEXT_DATA_LISTING_PATHS),
            ),
        ]
