"""Configuration management for the comparables collectors."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ...common.config import settings

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
load_dotenv(_PROJECT_ROOT / ".env")


@dataclass
class Config:
    """Collector configuration: settings.yaml defaults, then environment."""

    # HTTP
    request_timeout: float = field(
        default_factory=lambda: settings.scraper.request_timeout_seconds
    )
    collection_timeout: float = field(
        default_factory=lambda: settings.scraper.collection_timeout_seconds
    )
    user_agent: str = field(default_factory=lambda: settings.scraper.user_agent)
    accept_language: str = field(
        default_factory=lambda: settings.scraper.accept_language
    )

    # Result sizes
    max_listings_per_source: int = field(
        default_factory=lambda: settings.scraper.max_listings_per_source
    )
    pattern_max_listings: int = field(
        default_factory=lambda: settings.scraper.pattern_max_listings
    )

    # AutoScout24
    autoscout_base_url: str = "https://www.autoscout24.fr"

    # La Centrale
    lacentrale_base_url: str = "https://www.lacentrale.fr"

    def __post_init__(self) -> None:
        """Load overrides from environment."""
        if timeout := os.getenv("REQUEST_TIMEOUT"):
            self.request_timeout = float(timeout)
        if timeout := os.getenv("COLLECTION_TIMEOUT"):
            self.collection_timeout = float(timeout)
        if limit := os.getenv("MAX_LISTINGS_PER_SOURCE"):
            self.max_listings_per_source = int(limit)
        if ua := os.getenv("SCRAPER_USER_AGENT"):
            self.user_agent = ua
        if url := os.getenv("AUTOSCOUT_BASE_URL"):
            self.autoscout_base_url = url.rstrip("/")
        if url := os.getenv("LACENTRALE_BASE_URL"):
            self.lacentrale_base_url = url.rstrip("/")
