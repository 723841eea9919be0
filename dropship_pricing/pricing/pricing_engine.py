"""
Pricing engine module.

Turns a sourcing cost into a sale price in the target currency.

Formula: P_sale = ceil(((C × (1 + m)) + S) / (1 - c) / U) × U
Where:
- C = base cost converted to the target currency
- m = margin rate
- S = shipping cost
- c = commission rate, charged by the platform on the final price
- U = rounding unit

Dividing by (1 - c) rather than adding c × subtotal means the seller keeps
exactly the subtotal once the platform has taken its commission.
"""

import logging
from collections.abc import Mapping
from decimal import ROUND_CEILING, Decimal
from typing import Any

from dropship_pricing.pricing.currency import convert_currency
from dropship_pricing.pricing.exceptions import PriceExceedsMaximumError, ValidationError
from dropship_pricing.pricing.models import PriceCalculationInput, PriceCalculationResult
from dropship_pricing.pricing.validator import validate_price_input

logger = logging.getLogger(__name__)


def apply_commission(subtotal: Decimal, commission_rate: Decimal) -> tuple[Decimal, Decimal]:
    """
    Solve for the commission-inclusive price.

    P - P × c = subtotal  =>  P = subtotal / (1 - c)

    Args:
        subtotal: Amount the seller must keep.
        commission_rate: Platform commission on the final price.

    Returns:
        Tuple of (commission_amount, price_with_commission).
    """
    if commission_rate <= 0:
        return Decimal("0"), subtotal

    price_with_commission = subtotal / (1 - commission_rate)
    return price_with_commission - subtotal, price_with_commission


def round_up(price: Decimal, rounding_unit: Decimal) -> Decimal:
    """
    Round a price up to the next multiple of rounding_unit.

    Args:
        price: Price to round.
        rounding_unit: Increment, e.g. 10 or 100.

    Returns:
        Decimal: Smallest multiple of rounding_unit that is >= price.
    """
    steps = (price / rounding_unit).to_integral_value(rounding=ROUND_CEILING)
    return steps * rounding_unit


def _resolve_input(
    data: PriceCalculationInput | Mapping[str, Any],
    defaults: Mapping[str, Any] | None,
) -> PriceCalculationInput:
    if isinstance(data, PriceCalculationInput):
        return data

    validation = validate_price_input(data, defaults)
    if not validation.is_valid:
        raise ValidationError(validation.issues)
    return validation.value


def calculate_sale_price(
    data: PriceCalculationInput | Mapping[str, Any],
    defaults: Mapping[str, Any] | None = None,
) -> PriceCalculationResult:
    """
    Calculate the sale price and its breakdown.

    Bounds are checked after rounding. A price under minimum_price is raised
    to the floor and returned straight away, so the ceiling is never checked
    for a clamped price. On that path margin_amount is recomputed as the
    residual at the floor while commission_amount keeps its unclamped value,
    so the breakdown need not add up to the clamped sale price.

    Args:
        data: Validated input, or a raw record to validate first.
        defaults: Default overrides used when validating a raw record.

    Returns:
        PriceCalculationResult: Sale price and breakdown.

    Raises:
        ValidationError: If a raw record fails validation.
        MissingExchangeRateError: If currencies differ and no rate is given.
        PriceExceedsMaximumError: If the rounded price is above maximum_price.
    """
    price_input = _resolve_input(data, defaults)

    converted_cost = convert_currency(
        price_input.base_cost,
        price_input.base_currency,
        price_input.target_currency,
        price_input.exchange_rate,
    )

    margin_amount = converted_cost * price_input.margin_rate
    subtotal = converted_cost + margin_amount + price_input.shipping_cost
    commission_amount, price_with_commission = apply_commission(
        subtotal, price_input.commission_rate
    )
    sale_price = round_up(price_with_commission, price_input.rounding_unit)

    logger.debug(
        f"cost={converted_cost} margin={margin_amount} subtotal={subtotal} "
        f"with_commission={price_with_commission} rounded={sale_price}"
    )

    minimum_price = price_input.minimum_price
    if minimum_price is not None and sale_price < minimum_price:
        logger.info(f"Sale price {sale_price} raised to minimum price {minimum_price}")
        return PriceCalculationResult(
            sale_price=minimum_price,
            subtotal=subtotal,
            converted_cost=converted_cost,
            margin_amount=minimum_price - converted_cost - commission_amount - price_input.shipping_cost,
            commission_amount=commission_amount,
            shipping_cost=price_input.shipping_cost,
            rounding_unit=price_input.rounding_unit,
            price_before_rounding=price_with_commission,
            clamped_to_minimum=True,
        )

    maximum_price = price_input.maximum_price
    if maximum_price is not None and sale_price > maximum_price:
        logger.warning(f"Sale price {sale_price} exceeds maximum price {maximum_price}")
        raise PriceExceedsMaximumError(sale_price, maximum_price)

    return PriceCalculationResult(
        sale_price=sale_price,
        subtotal=subtotal,
        converted_cost=converted_cost,
        margin_amount=margin_amount,
        commission_amount=commission_amount,
        shipping_cost=price_input.shipping_cost,
        rounding_unit=price_input.rounding_unit,
        price_before_rounding=price_with_commission,
    )


def format_pricing_summary(result: PriceCalculationResult, currency: str | None = None) -> str:
    """
    Get a human-readable summary of a price calculation.

    Args:
        result: Result returned by calculate_sale_price().
        currency: Optional currency code appended to the sale price.

    Returns:
        str: Formatted pricing breakdown.
    """
    suffix = f" {currency}" if currency else ""
    summary = (
        f"cost {result.converted_cost:.2f} + margin {result.margin_amount:.2f} "
        f"+ shipping {result.shipping_cost:.2f} = {result.subtotal:.2f} "
        f"→ with commission {result.price_before_rounding:.2f} "
        f"→ {result.sale_price:f}{suffix}"
    )
    if result.clamped_to_minimum:
        summary += " (raised to minimum price)"
    return summary
