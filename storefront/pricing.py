import logging
from decimal import Decimal
from typing import Iterable, Optional, Union

from .models import SELL_MODE_BOX, CartTotals, LineItem

logger = logging.getLogger("storefront.pricing")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    # floats go through str() so 0.1 stays 0.1
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def effective_price(item: LineItem) -> Decimal:
    box_price: Optional[Number] = item.box_price
    if item.sell_mode == SELL_MODE_BOX and box_price is not None:
        return to_decimal(box_price)
    return to_decimal(item.unit_price)


def line_subtotal(item: LineItem) -> Decimal:
    return effective_price(item) * item.quantity


def line_tax(item: LineItem) -> Decimal:
    return line_subtotal(item) * to_decimal(item.tax_rate_percent) / 100


def compute_totals(items: Iterable[LineItem]) -> CartTotals:
    """Cart-level totals for a list of line items.

    Pure and unrounded: rounding is left to the display layer so repeated
    recomputation never compounds rounding error. Out-of-range input is not
    rejected here.
    """
    subtotal = Decimal(0)
    tax_amount = Decimal(0)
    item_count = 0
    for item in items:
        subtotal += line_subtotal(item)
        tax_amount += line_tax(item)
        item_count += item.quantity
    logger.info("subtotal=%s", subtotal)
    totals = CartTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
        item_count=item_count,
    )
    logger.debug("totals computed: %s", totals)
    return totals
