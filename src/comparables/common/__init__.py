"""Common utilities shared across the comparables collectors."""

from .config import Config
from .http_client import HTTPClient

__all__ = ["Config", "HTTPClient"]
