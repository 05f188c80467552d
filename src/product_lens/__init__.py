"""product-lens: Identify products from photos and estimate their used price."""

from product_lens.core import analyze
from product_lens.pricing import estimate_used_price
from product_lens.schema import EnrichedInfo, EnrichmentResult, ExtractionResult, MergedResult, PriceRange

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "estimate_used_price",
    "EnrichedInfo",
    "EnrichmentResult",
    "ExtractionResult",
    "MergedResult",
    "PriceRange",
    "__version__",
]
