"""Product catalog v1."""

from product_lens.catalog.data.v1.items import ITEMS

__all__ = ["ITEMS"]
