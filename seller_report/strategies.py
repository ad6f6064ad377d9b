"""
Pluggable calculation policies for the seller report.

The analyzer only knows the two call signatures below, so discount or bonus
rules can change without touching the aggregation itself.
"""

from typing import Callable

from . import settings
from .errors import InvalidInputError
from .schemas import LineItem, Product, SellerStats

# (item, product) -> revenue for that line item
RevenueFn = Callable[[LineItem, Product], float]
# (rank index, total sellers, seller) -> bonus amount
BonusFn = Callable[[int, int, SellerStats], float]


def calculate_simple_revenue(item: LineItem, product: Product) -> float:
    """
    Unit sale price * quantity, less the line item's percentage discount.
    Uses the price recorded on the receipt, falling back to the catalog price.
    """
    sale_price = item.sale_price if item.sale_price is not None else product.sale_price
    if sale_price is None:
        raise InvalidInputError(
            f"No sale price for SKU {item.sku!r} on the line item or in the catalog."
        )
    discount = 1 - item.discount / 100
    return sale_price * item.quantity * discount


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> float:
    """
    Tiered bonus by profit rank (0 = highest profit).

    Rank 0 is checked first, so a lone seller receives the top rate even
    though it is also the last place.
    """
    profit = seller.profit
    if index == 0:
        return profit * settings.BONUS_RATE_TOP
    elif index in (1, 2):
        return profit * settings.BONUS_RATE_RUNNER_UP
    elif index == total - 1:
        return 0
    else:
        return profit * settings.BONUS_RATE_STANDARD
