"""Pricing rule: a pizza's minimal price is its ingredient cost with a fixed
markup, rounded *up* to one decimal place.

    minimal_price = ceil(sum(ingredient prices) * markup * 10) / 10

Arithmetic is done in ``Decimal`` so that e.g. 3.0 * 1.4 gives exactly 4.2
instead of a binary-float neighbour that would round up to 4.3.
"""

from collections.abc import Iterable
from decimal import ROUND_CEILING, Decimal

from pizzeria.config import get_settings

_ONE_DECIMAL = Decimal("0.1")


def _to_decimal(value) -> Decimal:
    return Decimal(str(value))


def minimal_price(ingredient_prices: Iterable[float], markup: Decimal | None = None) -> float:
    markup = markup if markup is not None else get_settings().markup
    cost = sum((_to_decimal(p) for p in ingredient_prices), Decimal("0"))
    return float((cost * markup).quantize(_ONE_DECIMAL, rounding=ROUND_CEILING))


def profit(sale_price: float, floor: float) -> float:
    """Margin of one pizza sold at ``sale_price`` over its minimal price."""
    return float(_to_decimal(sale_price) - _to_decimal(floor))


def add_prices(prices: Iterable[float]) -> float:
    return float(sum((_to_decimal(p) for p in prices), Decimal("0")))
