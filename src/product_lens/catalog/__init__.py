"""Static product catalog for product-lens."""

from product_lens.catalog.repository import (
    CatalogEntry,
    CatalogMatch,
    CatalogQuery,
    CatalogRepository,
    get_catalog,
    lookup_catalog,
    normalize_code,
)

__all__ = [
    "CatalogEntry",
    "CatalogMatch",
    "CatalogQuery",
    "CatalogRepository",
    "get_catalog",
    "lookup_catalog",
    "normalize_code",
]
