"""Shared Pydantic data models for the comparables pipeline.

These models define the data contracts between the marketplace
collectors and whoever consumes their output (pricing, persistence,
HTTP layer). All modules import from here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


# === Enums ===

class ListingSource(str, Enum):
    """Marketplaces a comparable listing can come from."""
    AUTOSCOUT24 = "AutoScout24"
    LACENTRALE = "La Centrale"


class SellerType(str, Enum):
    """Who published the advertisement."""
    PRIVATE = "private"
    PROFESSIONAL = "professional"


# === Input ===

class TargetVehicle(BaseModel):
    """Vehicle we are looking for comparables of."""
    brand: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int = Field(ge=0)
    mileage: int = Field(ge=0, description="Odometer in km")

    model_config = {"frozen": True}

    @field_validator("brand", "model")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


# === Output ===

PRICE_MIN = 1_000
PRICE_MAX = 150_000


class NormalizedListing(BaseModel):
    """A comparable listing, identical in shape whatever the source.

    Construction is the plausibility gate: a price outside
    [PRICE_MIN, PRICE_MAX] raises ValidationError. Year and mileage use
    0 for "unknown".
    """
    source: ListingSource
    price: int = Field(ge=PRICE_MIN, le=PRICE_MAX, description="Price in EUR")
    year: int = Field(default=0, ge=0)
    mileage: int = Field(default=0, ge=0, description="Odometer in km")
    version: str | None = None
    localisation: str | None = None
    seller_type: SellerType = SellerType.PRIVATE

    model_config = {"frozen": True}

    @property
    def is_professional(self) -> bool:
        return self.seller_type == SellerType.PROFESSIONAL
