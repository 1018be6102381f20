"""Shared test fixtures for the comparables pipeline."""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.models import TargetVehicle
from src.comparables.common.config import Config


FIXTURES_DIR = PROJECT_ROOT / "tests" / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return FIXTURES_DIR


ENV_OVERRIDES = (
    "REQUEST_TIMEOUT",
    "COLLECTION_TIMEOUT",
    "MAX_LISTINGS_PER_SOURCE",
    "SCRAPER_USER_AGENT",
    "AUTOSCOUT_BASE_URL",
    "LACENTRALE_BASE_URL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove collector overrides that may be set in the developer's .env."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(clean_env) -> Config:
    """Collector config with fixed values, independent of the environment."""
    return Config(
        request_timeout=8.0,
        collection_timeout=10.0,
        max_listings_per_source=12,
        pattern_max_listings=10,
        autoscout_base_url="https://www.autoscout24.fr",
        lacentrale_base_url="https://www.lacentrale.fr",
    )


@pytest.fixture
def peugeot_308() -> TargetVehicle:
    return TargetVehicle(brand="Peugeot", model="308", year=2023, mileage=18000)


@pytest.fixture
def twenty_autoscout_listings() -> dict:
    """AutoScout24 JSON payload with 20 listings priced 9 000 - 45 000."""
    listings = []
    for i in range(20):
        listings.append({
            "id": f"as-{i}",
            "title": f"Peugeot 308 annonce {i}",
            "price": {"value": 9000 + i * 1800},
            "firstRegistration": f"0{i % 9 + 1}/{2021 + i % 4}",
            "mileage": {"value": 5000 + i * 1000},
            "location": {"city": "Nantes"},
            "seller": {"type": "dealer" if i % 2 else "private"},
        })
    return {"listings": listings}


def _make_response(text: str, content_type: str = "text/html; charset=utf-8") -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.text = text
    response.headers = {"Content-Type": content_type}
    return response


@pytest.fixture
def html_response():
    """Factory for a fake requests.Response with an HTML body."""
    return _make_response


@pytest.fixture
def json_response():
    """Factory for a fake requests.Response with a JSON body."""
    def factory(data) -> MagicMock:
        body = data if isinstance(data, str) else json.dumps(data)
        return _make_response(body, "application/json; charset=utf-8")
    return factory


@pytest.fixture
def read_fixture():
    """Read a file from tests/fixtures as text."""
    def reader(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")
    return reader
