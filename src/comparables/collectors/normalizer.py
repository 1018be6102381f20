"""Map raw marketplace records onto NormalizedListing.

Each source declares a :class:`FieldMap`: for every logical field, the
raw keys (dotted paths allowed) to try in order. The first present,
non-null value wins, so a source that renamed "price" to "Prix" between
API versions only needs one more candidate.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ...common.models import ListingSource, NormalizedListing, SellerType
from .tiers import resolve_path

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"(?<!\d)(19\d{2}|20\d{2})(?!\d)")
_DECIMAL_TAIL_RE = re.compile(r"[,.]\d{1,2}$")

# Longer digit runs are corrupt data, never a price or a mileage.
MAX_DIGITS = 9


@dataclass(frozen=True)
class FieldMap:
    """Candidate raw keys per NormalizedListing field, in priority order."""

    price: tuple[str, ...]
    year: tuple[str, ...] = ()
    mileage: tuple[str, ...] = ()
    version: tuple[str, ...] = ()
    localisation: tuple[str, ...] = ()
    seller_type: tuple[str, ...] = ()
    # Seller indicator values (compared case-insensitively) meaning "professional"
    professional_values: frozenset[str] = frozenset()


def first_present(record: dict, candidates: Iterable[str]) -> Any:
    """Value of the first candidate key that is present and not null/empty."""
    for path in candidates:
        value = resolve_path(record, path)
        if value is not None and value != "":
            return value
    return None


def parse_int(value: Any) -> int | None:
    """Coerce 12500, 12500.0, "12500", "12 500 €" or "12 500,00 €" to an int.

    Dots and spaces are thousands separators; a trailing one or two digit
    decimal part is dropped.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        sign = -1 if text.startswith("-") else 1
        # French formats: "12 500,00 €", "12.500", "12500.90"
        text = _DECIMAL_TAIL_RE.sub("", re.sub(r"[^\d,.]", "", text))
        digits = re.sub(r"\D", "", text)
        if not digits or len(digits) > MAX_DIGITS:
            return None
        return sign * int(digits)
    return None


def parse_year(value: Any) -> int:
    """Year from 2021, "2021" or "03/2021"; 0 when unknown or implausible."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value if 1900 <= value <= 2100 else 0
    if isinstance(value, str):
        match = _YEAR_RE.search(value)
        return int(match.group(1)) if match else 0
    return 0


def parse_mileage(value: Any) -> int:
    mileage = parse_int(value)
    if mileage is None or mileage < 0:
        return 0
    return mileage


def parse_seller_type(value: Any, professional_values: frozenset[str]) -> SellerType:
    if isinstance(value, str) and value.strip().casefold() in professional_values:
        return SellerType.PROFESSIONAL
    return SellerType.PRIVATE


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_record(
    record: dict,
    field_map: FieldMap,
    source: ListingSource,
) -> NormalizedListing | None:
    """Build one listing, or None if the record fails the plausibility gate."""
    price = parse_int(first_present(record, field_map.price))
    if price is None:
        logger.debug("[%s] dropped record without price", source.value)
        return None

    try:
        return NormalizedListing(
            source=source,
            price=price,
            year=parse_year(first_present(record, field_map.year)),
            mileage=parse_mileage(first_present(record, field_map.mileage)),
            version=_text(first_present(record, field_map.version)),
            localisation=_text(first_present(record, field_map.localisation)),
            seller_type=parse_seller_type(
                first_present(record, field_map.seller_type),
                field_map.professional_values,
            ),
        )
    except ValidationError:
        logger.debug("[%s] dropped implausible record (price=%s)", source.value, price)
        return None


def normalize_listings(
    records: Iterable[Any],
    field_map: FieldMap,
    source: ListingSource,
    limit: int,
) -> list[NormalizedListing]:
    """Normalize records in source order, keeping the first ``limit`` valid ones."""
    listings: list[NormalizedListing] = []
    for record in records:
        if len(listings) >= limit:
            break
        if not isinstance(record, dict):
            continue
        listing = normalize_record(record, field_map, source)
        if listing is not None:
            listings.append(listing)
    return listings
