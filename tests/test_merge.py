"""Tests for merging extraction, enrichment and catalog data."""

from product_lens import EnrichmentResult, ExtractionResult
from product_lens.catalog import CatalogEntry
from product_lens.merge import merge_result, reference_price

CATALOG = CatalogEntry(
    title="PlayStation 5 (CFI-1200A01)",
    jan="4948872415598",
    model="CFI-1200A01",
    official_release="2022-09-15",
    official_msrp=60478,
)


def test_currency_is_forced_to_yen():
    extraction = ExtractionResult(name="Widget", msrp_currency="USD", msrp=499)

    result = merge_result(extraction)

    assert result.msrp_currency == "JPY"
    assert result.enriched.currency == "JPY"
    assert result.used_price_currency == "JPY"
    # The raw extracted price is kept as reported.
    assert result.msrp == 499


def test_enrichment_outranks_catalog_and_extraction():
    extraction = ExtractionResult(name="PS5", release_date="2020", msrp=49980)
    enrichment = EnrichmentResult(official_release="2022-09", official_msrp_jpy=66980)

    result = merge_result(extraction, enrichment, CATALOG)

    assert result.enriched.official_release == "2022-09"
    assert result.enriched.official_msrp == 66980
    assert result.enriched.used_hint_min == 23443
    assert result.enriched.used_hint_max == 46886


def test_catalog_outranks_extraction():
    extraction = ExtractionResult(name="PS5", release_date="2020", msrp=49980)

    result = merge_result(extraction, None, CATALOG)

    assert result.enriched.title == "PlayStation 5 (CFI-1200A01)"
    assert result.enriched.official_release == "2022-09-15"
    assert result.enriched.official_msrp == 60478


def test_extraction_is_last_resort():
    extraction = ExtractionResult(name="Mystery Gadget", release_date="2019-04", msrp=12000)

    result = merge_result(extraction)

    assert result.enriched.title == "Mystery Gadget"
    assert result.enriched.official_release == "2019-04"
    assert result.enriched.official_msrp == 12000
    assert result.used_price_min == 4200
    assert result.used_price_max == 8400


def test_zero_enrichment_price_falls_through_to_catalog():
    enrichment = EnrichmentResult(official_msrp_jpy=0, detail_description="desc")

    result = merge_result(ExtractionResult(msrp=0), enrichment, CATALOG)

    assert result.enriched.official_msrp == 60478


def test_description_and_market_only_from_enrichment():
    extraction = ExtractionResult(name="PS5", notes="box is damaged")

    without = merge_result(extraction, None, CATALOG)
    with_enrichment = merge_result(
        extraction,
        EnrichmentResult(detail_description="据え置き型ゲーム機", market_overview="中古相場は4万円前後"),
        CATALOG,
    )

    assert without.enriched.description is None
    assert without.enriched.market_overview is None
    assert with_enrichment.enriched.description == "据え置き型ゲーム機"
    assert with_enrichment.enriched.market_overview == "中古相場は4万円前後"
    assert with_enrichment.notes == "box is damaged"


def test_empty_sources_give_empty_result():
    result = merge_result(ExtractionResult())

    assert result.name is None
    assert result.enriched.title is None
    assert result.enriched.official_msrp is None
    assert result.used_price_min is None
    assert result.used_price_max is None
    assert result.enriched.used_hint_min is None


def test_legacy_fields_mirror_enriched_hint():
    result = merge_result(ExtractionResult(msrp=37980))

    assert (result.used_price_min, result.used_price_max) == (13293, 26586)
    assert (result.enriched.used_hint_min, result.enriched.used_hint_max) == (13293, 26586)


def test_reference_price_order():
    extraction = ExtractionResult(msrp=100)
    assert reference_price(extraction, EnrichmentResult(official_msrp_jpy=300), CATALOG) == 300
    assert reference_price(extraction, EnrichmentResult(), CATALOG) == 60478
    assert reference_price(extraction, None, None) == 100
    assert reference_price(ExtractionResult(msrp=-5), None, None) is None


def test_serialized_result_omits_absent_fields():
    data = merge_result(ExtractionResult(name="PS5")).model_dump(exclude_none=True)

    assert data["name"] == "PS5"
    assert data["msrp_currency"] == "JPY"
    assert "jan" not in data
    assert data["enriched"] == {"title": "PS5", "currency": "JPY"}
