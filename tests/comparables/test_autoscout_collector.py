"""Tests for the AutoScout24 collector with mocked HTTP."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
import requests

from src.common.models import ListingSource, SellerType, TargetVehicle
from src.comparables.collectors.autoscout_collector import AutoScout24Collector
from src.comparables.collectors.base_collector import BaseCollector
from src.comparables.collectors.tiers import Tier
from src.comparables.query.window import build_search_window


class TestAutoScout24Request:
    def test_search_url_uses_aliases_and_slugs(self, config):
        collector = AutoScout24Collector(config)
        target = TargetVehicle(brand="VW", model="Golf Plus", year=2019, mileage=90000)
        assert collector.search_url(target) == (
            "https://www.autoscout24.fr/lst/volkswagen/golf-plus"
        )

    def test_search_params(self, config, peugeot_308):
        collector = AutoScout24Collector(config)
        params = collector.search_params(build_search_window(peugeot_308))
        assert params["fregfrom"] == "2021"
        assert params["fregto"] == "2024"
        assert params["kmto"] == "30000"
        assert params["cy"] == "F"
        assert params["sort"] == "price"
        assert params["format"] == "json"

    def test_zero_mileage_omits_mileage_filter(self, config):
        collector = AutoScout24Collector(config)
        target = TargetVehicle(brand="Tesla", model="Model 3", year=2024, mileage=0)
        assert "kmto" not in collector.search_params(build_search_window(target))

    def test_request_headers(self, config, peugeot_308, json_response):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(return_value=json_response({"listings": []}))

        collector.collect(peugeot_308)

        _, kwargs = collector._client.get.call_args
        assert kwargs["headers"]["Referer"] == "https://www.autoscout24.fr/"
        assert "application/json" in kwargs["headers"]["Accept"]

    def test_custom_alias_table(self, config):
        collector = AutoScout24Collector(config, brand_aliases={"pug": "peugeot"})
        target = TargetVehicle(brand="Pug", model="208", year=2020, mileage=40000)
        assert collector.search_url(target).endswith("/lst/peugeot/208")


class TestAutoScout24Extraction:
    def test_structured_json(self, config, peugeot_308, json_response):
        payload = {
            "listings": [
                {
                    "title": "Peugeot 308 GT",
                    "price": {"value": 25900},
                    "firstRegistration": "06/2022",
                    "mileage": {"value": 15000},
                    "location": {"city": "Nantes"},
                    "seller": {"type": "dealer"},
                },
                {"price": {"value": 800}, "firstRegistration": "2021"},
            ]
        }
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(return_value=json_response(payload))

        result = collector.run(peugeot_308)

        assert result.tier == Tier.STRUCTURED
        assert len(result.listings) == 1
        listing = result.listings[0]
        assert listing.source == ListingSource.AUTOSCOUT24
        assert listing.price == 25900
        assert listing.year == 2022
        assert listing.mileage == 15000
        assert listing.version == "Peugeot 308 GT"
        assert listing.localisation == "Nantes"
        assert listing.seller_type == SellerType.PROFESSIONAL

    def test_embedded_next_data(self, config, peugeot_308, html_response, read_fixture):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(
            return_value=html_response(read_fixture("autoscout_search.html"))
        )

        result = collector.run(peugeot_308)

        assert result.tier == Tier.EMBEDDED
        # The 500 EUR wreck is dropped by the plausibility gate
        assert [listing.price for listing in result.listings] == [21490, 24900, 27990]
        assert [listing.year for listing in result.listings] == [2022, 2023, 2022]
        assert result.listings[0].seller_type == SellerType.PROFESSIONAL
        assert result.listings[2].seller_type == SellerType.PRIVATE
        assert result.listings[2].localisation == "Laval"
        # Both tiers read the same page: one request
        assert collector._client.get.call_count == 1

    def test_blocked_page_returns_empty(self, config, peugeot_308, html_response, read_fixture):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(
            return_value=html_response(read_fixture("blocked.html"))
        )
        result = collector.run(peugeot_308)
        assert result.tier is None
        assert collector.collect(peugeot_308) == []

    def test_malformed_json_returns_empty(self, config, peugeot_308, json_response):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(return_value=json_response('{"listings": [}'))
        assert collector.collect(peugeot_308) == []

    def test_end_to_end_cap(self, config, peugeot_308, json_response, twenty_autoscout_listings):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(
            return_value=json_response(twenty_autoscout_listings)
        )

        listings = collector.collect(peugeot_308)

        assert 0 < len(listings) <= 15
        assert len(listings) == config.max_listings_per_source
        assert all(1000 <= listing.price <= 150000 for listing in listings)
        # Source order, no re-sorting
        assert [listing.price for listing in listings] == [9000 + i * 1800 for i in range(12)]

    def test_search_logged_at_debug(self, config, peugeot_308, json_response, caplog):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(return_value=json_response({"listings": []}))

        with caplog.at_level(logging.DEBUG, logger="src.comparables.collectors"):
            collector.collect(peugeot_308)

        assert "search https://www.autoscout24.fr/lst/peugeot/308" in caplog.text

    def test_default_alias_table_is_read_only(self):
        with pytest.raises(TypeError):
            BaseCollector.BRAND_ALIASES["pug"] = "peugeot"


class TestAutoScout24Failures:
    def test_timeout_returns_empty(self, config, peugeot_308):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(side_effect=requests.Timeout("read timed out"))
        assert collector.collect(peugeot_308) == []

    def test_http_error_returns_empty(self, config, peugeot_308, caplog):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(
            side_effect=requests.HTTPError(response=MagicMock(status_code=403))
        )
        assert collector.collect(peugeot_308) == []
        assert "HTTP 403" in caplog.text
        # A failed document is not requested again by the next tier
        assert collector._client.get.call_count == 1

    def test_unexpected_error_returns_empty(self, config, peugeot_308):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(side_effect=RuntimeError("boom"))
        assert collector.collect(peugeot_308) == []

    def test_invalid_input_returns_empty(self, config):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock()
        assert collector.collect_for("", "308", 2023, 18000) == []
        assert collector.collect_for("Peugeot", "308", 2023, -1) == []
        collector._client.get.assert_not_called()

    def test_idempotent(self, config, peugeot_308, html_response, read_fixture):
        collector = AutoScout24Collector(config)
        collector._client.get = MagicMock(
            return_value=html_response(read_fixture("autoscout_search.html"))
        )
        first = collector.collect(peugeot_308)
        second = collector.collect(peugeot_308)
        assert first == second
        assert collector._client.get.call_count == 2
