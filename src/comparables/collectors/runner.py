"""Run several collectors concurrently for one target vehicle."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from collections.abc import Sequence

from ...common.models import NormalizedListing, TargetVehicle
from ..common.config import Config
from .autoscout_collector import AutoScout24Collector
from .base_collector import BaseCollector
from .lacentrale_collector import LaCentraleCollector

logger = logging.getLogger(__name__)

# Registry of available collectors
COLLECTORS: dict[str, type[BaseCollector]] = {
    "autoscout24": AutoScout24Collector,
    "lacentrale": LaCentraleCollector,
}


def build_collectors(
    names: Sequence[str] | None = None,
    config: Config | None = None,
) -> list[BaseCollector]:
    """Instantiate collectors by registry name (all of them by default)."""
    config = config or Config()
    return [COLLECTORS[name](config) for name in (names or COLLECTORS)]


def collect_all(
    target: TargetVehicle,
    collectors: Sequence[BaseCollector] | None = None,
    timeout: float | None = None,
) -> dict[str, list[NormalizedListing]]:
    """Collect from every collector in parallel.

    Waits at most ``timeout`` seconds overall (config.collection_timeout
    by default). A collector still running at the deadline, or one that
    raised anyway, contributes an empty list.

    Returns:
        {source label: listings}, in collector order.
    """
    if collectors is None:
        collectors = build_collectors()
    if not collectors:
        return {}
    if timeout is None:
        timeout = collectors[0].config.collection_timeout

    results: dict[str, list[NormalizedListing]] = {c.name: [] for c in collectors}

    executor = ThreadPoolExecutor(
        max_workers=len(collectors), thread_name_prefix="collector"
    )
    try:
        futures = {executor.submit(c.collect, target): c for c in collectors}
        done, not_done = wait(futures, timeout=timeout)

        for future in done:
            collector = futures[future]
            try:
                results[collector.name] = future.result()
            except Exception:
                logger.warning(
                    "[%s] collector raised", collector.name, exc_info=True
                )

        for future in not_done:
            logger.warning(
                "[%s] no answer within %.1fs, treated as empty",
                futures[future].name,
                timeout,
            )
    finally:
        # Stragglers keep their own request timeout; do not wait for them.
        executor.shutdown(wait=False, cancel_futures=True)

    logger.info(
        "Collected %s",
        " | ".join(f"{name}: {len(listings)}" for name, listings in results.items()),
    )
    return results
