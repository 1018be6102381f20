"""Market evidence summaries built from collected listings."""

from .summary import DataQuality, MarketSummary, format_listings_for_prompt, summarize

__all__ = ["DataQuality", "MarketSummary", "format_listings_for_prompt", "summarize"]
