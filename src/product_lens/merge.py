"""Combine extraction, enrichment and catalog data into one response."""

from __future__ import annotations

from product_lens.catalog import CatalogEntry
from product_lens.pricing import estimate_used_price
from product_lens.schema import (
    DISPLAY_CURRENCY,
    EnrichedInfo,
    EnrichmentResult,
    ExtractionResult,
    MergedResult,
    Number,
)


def _first(*values):
    for value in values:
        if value:
            return value
    return None


def reference_price(
    extraction: ExtractionResult,
    enrichment: EnrichmentResult | None,
    catalog: CatalogEntry | None,
) -> Number | None:
    """First positive official price, preferring enrichment over catalog over extraction."""
    candidates = (
        enrichment.official_msrp_jpy if enrichment else None,
        catalog.official_msrp if catalog else None,
        extraction.msrp,
    )
    for price in candidates:
        if price and price > 0:
            return price
    return None


def merge_result(
    extraction: ExtractionResult,
    enrichment: EnrichmentResult | None = None,
    catalog: CatalogEntry | None = None,
) -> MergedResult:
    """Build the response for one analysis.

    Every best-available value resolves enrichment first, then catalog, then
    the raw extraction. Currency is always the display currency.
    """
    price = reference_price(extraction, enrichment, catalog)
    used = estimate_used_price(price)

    enriched = EnrichedInfo(
        title=_first(catalog.title if catalog else None, extraction.name),
        official_release=_first(
            enrichment.official_release if enrichment else None,
            catalog.official_release if catalog else None,
            extraction.release_date,
        ),
        official_msrp=price,
        currency=DISPLAY_CURRENCY,
        description=enrichment.detail_description if enrichment else None,
        market_overview=enrichment.market_overview if enrichment else None,
        used_hint_min=used.min if used else None,
        used_hint_max=used.max if used else None,
    )

    return MergedResult(
        **extraction.model_dump(exclude={"msrp_currency"}),
        msrp_currency=DISPLAY_CURRENCY,
        enriched=enriched,
        used_price_min=used.min if used else None,
        used_price_max=used.max if used else None,
        used_price_currency=DISPLAY_CURRENCY,
    )
