"""Data models for product-lens."""

import math
import re
import unicodedata
from typing import Any

from pydantic import BaseModel, Field, field_validator

DISPLAY_CURRENCY = "JPY"

Number = int | float

_NUMBER_NOISE = re.compile(r"[,\s]|円|¥|JPY|USD|US\$|\$|yen", re.IGNORECASE)


def coerce_text(value: Any) -> str | None:
    """Return a stripped string, or None for blanks and non-scalar values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def coerce_number(value: Any) -> Number | None:
    """Return a finite number, or None when the value cannot be read as one.

    Models sometimes render prices as display strings ("60,478円"); separators
    and currency marks are dropped before parsing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = _NUMBER_NOISE.sub("", unicodedata.normalize("NFKC", value))
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


class ExtractionResult(BaseModel):
    """Structured product fields read from product photos."""

    name: str | None = None
    model: str | None = None
    jan: str | None = None
    upc: str | None = None
    release_date: str | None = None
    msrp_currency: str | None = None
    msrp: Number | None = None
    confidence: Number | None = None
    notes: str | None = None

    @field_validator("name", "model", "jan", "upc", "release_date", "msrp_currency", "notes", mode="before")
    @classmethod
    def _text_field(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("msrp", "confidence", mode="before")
    @classmethod
    def _number_field(cls, value: Any) -> Number | None:
        return coerce_number(value)

    def search_query(self) -> str | None:
        """First identifying value usable as a research query."""
        for value in (self.name, self.jan, self.upc, self.model):
            if value:
                return value
        return None


class EnrichmentResult(BaseModel):
    """Descriptive fields returned by the research call, in yen."""

    detail_description: str | None = None
    market_overview: str | None = None
    official_release: str | None = None
    official_msrp_jpy: Number | None = None

    @field_validator("detail_description", "market_overview", "official_release", mode="before")
    @classmethod
    def _text_field(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("official_msrp_jpy", mode="before")
    @classmethod
    def _number_field(cls, value: Any) -> Number | None:
        return coerce_number(value)


class PriceRange(BaseModel):
    """Estimated used-price band."""

    min: int
    max: int


class EnrichedInfo(BaseModel):
    """Best-available product details assembled from every source."""

    title: str | None = None
    official_release: str | None = None
    official_msrp: Number | None = None
    currency: str = DISPLAY_CURRENCY
    description: str | None = None
    market_overview: str | None = None
    used_hint_min: int | None = None
    used_hint_max: int | None = None


class MergedResult(ExtractionResult):
    """Response payload: extracted fields plus the enriched block."""

    msrp_currency: str | None = DISPLAY_CURRENCY
    enriched: EnrichedInfo = Field(default_factory=EnrichedInfo)
    used_price_min: int | None = None
    used_price_max: int | None = None
    used_price_currency: str = DISPLAY_CURRENCY
