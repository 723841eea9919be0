"""
Currency conversion module.

Converts amounts with a caller-supplied rate. No rate lookup is done here: the
rate must already be oriented base -> target.
"""

import logging
from decimal import Decimal
from typing import Any

from dropship_pricing.pricing.exceptions import MissingExchangeRateError
from dropship_pricing.pricing.models import Currency

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a number to Decimal without float artifacts.

    Args:
        value: int, float, str or Decimal.

    Returns:
        Decimal: Exact decimal representation of str(value).

    Raises:
        TypeError: If value is None.
    """
    if value is None:
        raise TypeError("Expected a number, got None")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def convert_currency(
    amount: Any,
    base_currency: Currency | str,
    target_currency: Currency | str,
    exchange_rate: Any = None,
) -> Decimal:
    """
    Convert an amount from base currency to target currency.

    P_target = P_base × R

    Args:
        amount: Amount in base currency.
        base_currency: Currency of amount.
        target_currency: Currency to convert into.
        exchange_rate: Base -> target rate. Ignored for same-currency calls.

    Returns:
        Decimal: Amount in target currency.

    Raises:
        MissingExchangeRateError: If currencies differ and no positive rate is given.
    """
    base = Currency(base_currency)
    target = Currency(target_currency)
    amount = to_decimal(amount)

    if base == target:
        return amount

    if exchange_rate is None or to_decimal(exchange_rate) <= 0:
        logger.warning(f"No usable exchange rate for {base.value} -> {target.value}: {exchange_rate}")
        raise MissingExchangeRateError(base.value, target.value)

    converted = amount * to_decimal(exchange_rate)
    logger.debug(f"Converted {amount} {base.value} × {exchange_rate} = {converted} {target.value}")
    return converted
