"""CLI entry point for the comparables collectors.

Usage:
    python -m src.comparables.collectors.main --brand Peugeot --model 308 --year 2023 --mileage 18000
    python -m src.comparables.collectors.main --brand VW --model Golf --year 2019 --mileage 90000 --source lacentrale
    python -m src.comparables.collectors.main --brand Renault --model Clio --year 2020 --mileage 45000 --output clio.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from ...common.logging import setup_logging
from ...common.models import TargetVehicle
from ..common.config import Config
from ..market.summary import format_listings_for_prompt, summarize
from ..query.window import build_search_window
from .runner import COLLECTORS, build_collectors, collect_all

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Comparable listings collector")
    parser.add_argument("--brand", type=str, required=True, help="Brand (e.g., 'Peugeot')")
    parser.add_argument("--model", type=str, required=True, help="Model (e.g., '308')")
    parser.add_argument("--year", type=int, required=True, help="Model year")
    parser.add_argument("--mileage", type=int, required=True, help="Odometer in km")
    parser.add_argument(
        "--source",
        type=str,
        nargs="+",
        default=["all"],
        choices=[*COLLECTORS, "all"],
        help="Marketplaces to query (default: all)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Overall deadline in seconds (default: COLLECTION_TIMEOUT)",
    )
    parser.add_argument("--output", type=str, help="Output JSON file path")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        target = TargetVehicle(
            brand=args.brand, model=args.model, year=args.year, mileage=args.mileage
        )
    except ValidationError as exc:
        logger.error("Invalid vehicle: %s", exc)
        return 2

    config = Config()
    names = list(COLLECTORS) if "all" in args.source else args.source
    collectors = build_collectors(names, config)

    window = build_search_window(target)
    logger.info(
        "Searching %s %s: years %d-%d, max %s km",
        target.brand,
        target.model,
        window.year_min,
        window.year_max,
        window.mileage_ceiling if window.has_mileage_ceiling else "any",
    )

    results = collect_all(target, collectors, timeout=args.timeout)
    summary = summarize(results)

    for source, listings in results.items():
        logger.info("%s:\n%s", source, format_listings_for_prompt(listings))

    output_data: dict = {
        "target": target.model_dump(),
        "search_window": {
            "year_min": window.year_min,
            "year_max": window.year_max,
            "mileage_ceiling": window.mileage_ceiling,
        },
        "listings_by_source": {
            source: [listing.model_dump(mode="json") for listing in listings]
            for source, listings in results.items()
        },
        "summary": summary.to_dict(),
    }

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(output_data, f, ensure_ascii=False, indent=2)
        logger.info("Output written to %s", args.output)
    else:
        json.dump(output_data, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
