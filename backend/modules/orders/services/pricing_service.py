"""
Sandwich pricing.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

PRICE_QUANTUM = Decimal("0.001")


def compute_item_price(bread_price, is_double_bread: bool, topping_prices: Iterable) -> Decimal:
    """
    Price of one sandwich: the bread (twice for a double bread) plus every
    topping. Duplicated toppings are charged once per occurrence.
    """
    bread = Decimal(str(bread_price)) * (2 if is_double_bread else 1)
    toppings = sum((Decimal(str(p)) for p in topping_prices), Decimal("0"))
    return (bread + toppings).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
