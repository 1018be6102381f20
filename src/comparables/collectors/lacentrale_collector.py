"""La Centrale comparables collector.

La Centrale is the French professional reference for used-car prices,
so its listings are the most valuable evidence we collect. Three tiers:

1. JSON search API:  GET https://www.lacentrale.fr/api/search/vehicles
2. Listing page:     GET https://www.lacentrale.fr/listing, reading the
                     ``__NEXT_DATA__`` blob or a ``window.__*_STATE__``
                     assignment
3. Same page, regex price/mileage extraction as a last resort

The API has shipped both English and French field names
(price/Prix, mileage/Kilometrage...); both are mapped.
"""

from __future__ import annotations

import logging

from ...common.models import ListingSource, NormalizedListing, TargetVehicle
from ..query.aliases import LACENTRALE_BRAND_ALIASES
from ..query.slug import brand_slug, model_slug
from ..query.window import SearchWindow
from .base_collector import BaseCollector, DocumentFetcher
from .normalizer import FieldMap
from .tiers import Strategy, Tier

logger = logging.getLogger(__name__)


class LaCentraleCollector(BaseCollector):
    """Collector for La Centrale listings.

    Usage:
        collector = LaCentraleCollector()
        listings = collector.collect_for("Citroën", "C4", 2021, 60000)
    """

    SOURCE = ListingSource.LACENTRALE
    BRAND_ALIASES = LACENTRALE_BRAND_ALIASES

    FIELD_MAP = FieldMap(
        price=("price", "Prix"),
        year=("year", "Annee"),
        mileage=("mileage", "Kilometrage"),
        version=("version", "Version"),
        localisation=("city", "Ville"),
        seller_type=("sellerType", "TypeVendeur"),
        professional_values=frozenset({"pro"}),
    )

    API_LISTING_PATHS = ("ads", "data.ads", "vehicles", "results")
    NEXT_DATA_LISTING_PATHS = (
        "props.pageProps.vehicles",
        "props.pageProps.ads",
        "props.pageProps.searchResults.vehicles",
        "props.pageProps.initialState.vehicles",
    )
    WINDOW_STATE_LISTING_PATHS = ("search.vehicles", "vehicles.list", "ads")

    PAGE_SIZE = 15

    def search_filters(self, target: TargetVehicle, window: SearchWindow) -> dict[str, str]:
        make = brand_slug(target.brand, self.brand_aliases)
        model = model_slug(target.model)
        params = {
            "makesModelsCommercialNames": f"{make}:{model}",
            "yearMin": str(window.year_min),
            "yearMax": str(window.year_max),
            "sortBy": "PRICE_ASC",
        }
        if window.has_mileage_ceiling:
            params["mileageMax"] = str(window.mileage_ceiling)
        return params

    def build_strategies(
        self,
        target: TargetVehicle,
        window: SearchWindow,
        documents: DocumentFetcher,
    ) -> list[Strategy]:
        base = self.config.lacentrale_base_url
        filters = self.search_filters(target, window)
        headers = self.base_headers(f"{base}/")

        api_url = f"{base}/api/search/vehicles"
        api_params = {**filters, "size": str(self.PAGE_SIZE), "from": "0"}
        api_headers = {**headers, "Accept": "application/json"}

        listing_url = f"{base}/listing"
        logger.debug(
            "[%s] search %s and %s filters=%s", self.name, api_url, listing_url, filters
        )

        def listing_page():
            return documents.fetch(listing_url, params=filters, headers=headers)

        return [
            Strategy(
                Tier.STRUCTURED,
                lambda: self._from_json(
                    documents.fetch(api_url, params=api_params, headers=api_headers),
                    self.API_LISTING_PATHS,
                ),
            ),
            Strategy(Tier.EMBEDDED, lambda: self._from_embedded(listing_page())),
            Strategy(Tier.PATTERN, lambda: self._from_patterns(listing_page())),
        ]

    def _from_embedded(self, response) -> list[NormalizedListing]:
        listings = self._from_next_data(response, self.NEXT_DATA_LISTING_PATHS)
        if listings:
            return listings
        return self._from_window_state(response, self.WINDOW_STATE_LISTING_PATHS)
