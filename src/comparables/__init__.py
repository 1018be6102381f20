"""
Comparables: collect comparable used-car listings from marketplaces

Modules:
- query: URL slugs, brand alias tables, search window (years, mileage)
- collectors: AutoScout24 and La Centrale collectors, tier ladder,
  listing normalizer, concurrent runner, CLI
- market: summary figures and prompt text over collected listings
- common: Shared utilities (config, HTTP client)
"""

__version__ = "0.1.0"
