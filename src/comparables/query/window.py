"""Search window around a target vehicle (year range + mileage ceiling)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ...common.models import TargetVehicle

YEARS_BEFORE = 2
YEARS_AFTER = 1
MILEAGE_FACTOR = 1.4
MILEAGE_STEP = 10_000
MILEAGE_CAP = 300_000


@dataclass(frozen=True)
class SearchWindow:
    """Year bounds and mileage ceiling for a comparables search.

    mileage_ceiling is a multiple of MILEAGE_STEP in [0, MILEAGE_CAP];
    0 means there is no usable mileage bound.
    """

    year_min: int
    year_max: int
    mileage_ceiling: int

    @property
    def has_mileage_ceiling(self) -> bool:
        return self.mileage_ceiling > 0


def mileage_ceiling(mileage: int) -> int:
    """Round mileage * MILEAGE_FACTOR to the nearest step, capped.

    Halves round up: 25 000 km * 1.4 = 35 000 -> 40 000.
    """
    raw = Decimal(mileage) * Decimal(str(MILEAGE_FACTOR)) / MILEAGE_STEP
    steps = int(raw.to_integral_value(rounding=ROUND_HALF_UP))
    return min(max(steps, 0) * MILEAGE_STEP, MILEAGE_CAP)


def build_search_window(target: TargetVehicle) -> SearchWindow:
    return SearchWindow(
        year_min=target.year - YEARS_BEFORE,
        year_max=target.year + YEARS_AFTER,
        mileage_ceiling=mileage_ceiling(target.mileage),
    )
