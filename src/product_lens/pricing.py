"""Heuristic used-price band derived from an official price."""

from decimal import ROUND_HALF_UP, Decimal

from product_lens.schema import Number, PriceRange

USED_MIN_RATIO = Decimal("0.35")
USED_MAX_RATIO = Decimal("0.70")


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def estimate_used_price(msrp: Number | None) -> PriceRange | None:
    """Return the used-price band for ``msrp``, or None without a positive price.

    The band is 35%-70% of the official price, rounded half-up to whole yen.
    """
    if not msrp or msrp <= 0:
        return None
    price = Decimal(str(msrp))
    return PriceRange(
        min=_round_half_up(price * USED_MIN_RATIO),
        max=_round_half_up(price * USED_MAX_RATIO),
    )
