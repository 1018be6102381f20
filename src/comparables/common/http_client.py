"""HTTP client for marketplace requests: browser headers, fixed timeout, no retry."""

from __future__ import annotations

import logging
from typing import Any

import requests
from fake_useragent import UserAgent

from .config import Config

logger = logging.getLogger(__name__)


class HTTPClient:
    """Thin wrapper over requests for one-shot marketplace fetches.

    Each call opens and closes its own connection; nothing is pooled
    or cached between calls, so one instance can be used from several
    threads at once. Failures are raised to the caller, never retried.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self._ua = UserAgent(fallback=self.config.user_agent)

    def default_headers(self) -> dict[str, str]:
        """Headers a desktop browser would send with a search page request."""
        return {
            "User-Agent": self._ua.random,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self.config.accept_language,
            "Cache-Control": "no-cache",
        }

    def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Send a single GET request.

        Args:
            url: Target URL.
            params: Query parameters.
            headers: Extra headers (merged over the browser defaults).

        Returns:
            requests.Response object with a 2xx status.

        Raises:
            requests.HTTPError: On a non-success status.
            requests.RequestException: On timeout or connection failure.
        """
        merged_headers = self.default_headers()
        if headers:
            merged_headers.update(headers)

        logger.debug("GET %s params=%s", url, params)
        resp = requests.get(
            url,
            params=params,
            headers=merged_headers,
            timeout=self.config.request_timeout,
        )
        resp.raise_for_status()
        return resp
