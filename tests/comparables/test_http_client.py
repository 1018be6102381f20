"""Tests for the marketplace HTTP client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.comparables.common.http_client import HTTPClient


@pytest.fixture
def client(config) -> HTTPClient:
    return HTTPClient(config)


class TestHTTPClient:
    def test_browser_headers(self, client):
        headers = client.default_headers()
        assert headers["User-Agent"]
        assert headers["Accept-Language"] == "fr-FR,fr;q=0.9"
        assert "text/html" in headers["Accept"]

    @patch("src.comparables.common.http_client.requests.get")
    def test_get_uses_fixed_timeout(self, mock_get, client):
        mock_get.return_value = MagicMock(status_code=200)

        response = client.get("https://example.test/search", params={"page": "1"})

        assert response is mock_get.return_value
        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == 8.0
        assert kwargs["params"] == {"page": "1"}
        mock_get.return_value.raise_for_status.assert_called_once()

    @patch("src.comparables.common.http_client.requests.get")
    def test_extra_headers_override_defaults(self, mock_get, client):
        mock_get.return_value = MagicMock(status_code=200)

        client.get(
            "https://example.test/api",
            headers={"Accept": "application/json", "Referer": "https://example.test/"},
        )

        headers = mock_get.call_args.kwargs["headers"]
        assert headers["Accept"] == "application/json"
        assert headers["Referer"] == "https://example.test/"
        assert headers["Accept-Language"] == "fr-FR,fr;q=0.9"

    @patch("src.comparables.common.http_client.requests.get")
    def test_error_status_raises(self, mock_get, client):
        response = MagicMock(status_code=403)
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
        mock_get.return_value = response

        with pytest.raises(requests.HTTPError):
            client.get("https://example.test/search")

    @patch("src.comparables.common.http_client.requests.get")
    def test_timeout_not_retried(self, mock_get, client):
        mock_get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(requests.Timeout):
            client.get("https://example.test/search")
        assert mock_get.call_count == 1
