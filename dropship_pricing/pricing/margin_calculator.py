"""
Inverse margin calculations.

Both functions take amounts already expressed in the sale currency; no
currency conversion happens here.
"""

import logging
from decimal import Decimal
from typing import Any

from dropship_pricing.pricing.currency import to_decimal
from dropship_pricing.pricing.exceptions import NonPositiveCostError, NonPositiveSalePriceError

logger = logging.getLogger(__name__)


def calculate_margin_rate(
    cost: Any,
    sale_price: Any,
    shipping_cost: Any = 0,
    commission_rate: Any = 0,
) -> Decimal:
    """
    Recover the margin rate actually achieved at a known sale price.

    m = (P - P × c - S - C) / C

    Args:
        cost: Product cost in the sale currency.
        sale_price: Price the product sold for.
        shipping_cost: Shipping cost paid by the seller.
        commission_rate: Platform commission on the sale price.

    Returns:
        Decimal: Realized margin rate (negative for a loss).

    Raises:
        NonPositiveSalePriceError: If sale_price <= 0.
        NonPositiveCostError: If cost <= 0.
        TypeError: If any argument is None.
    """
    sale_price = to_decimal(sale_price)
    cost = to_decimal(cost)
    if sale_price <= 0:
        raise NonPositiveSalePriceError(sale_price)
    if cost <= 0:
        raise NonPositiveCostError(cost)

    commission = sale_price * to_decimal(commission_rate)
    profit = sale_price - commission - to_decimal(shipping_cost) - cost
    margin_rate = profit / cost

    logger.debug(f"Realized margin at {sale_price}: profit={profit} rate={margin_rate}")
    return margin_rate


def suggest_margin_rate(
    target_profit: Any,
    cost: Any,
    shipping_cost: Any = 0,
    commission_rate: Any = 0,
) -> Decimal:
    """
    Margin rate needed to earn target_profit after commission and shipping.

    revenue = (C + S + profit) / (1 - c)
    m = (revenue - C) / C

    Args:
        target_profit: Absolute profit wanted per unit.
        cost: Product cost in the sale currency.
        shipping_cost: Shipping cost paid by the seller.
        commission_rate: Platform commission on the sale price.

    Returns:
        Decimal: Suggested margin rate.

    Raises:
        NonPositiveCostError: If cost <= 0.
        TypeError: If any argument is None.
    """
    cost = to_decimal(cost)
    if cost <= 0:
        raise NonPositiveCostError(cost)

    effective_cost = cost + to_decimal(shipping_cost)
    required_revenue = (effective_cost + to_decimal(target_profit)) / (1 - to_decimal(commission_rate))
    margin_amount = required_revenue - cost
    return margin_amount / cost
