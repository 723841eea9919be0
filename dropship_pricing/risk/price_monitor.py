"""
Source price change assessment.

Compares the previously recorded source price of a product with a freshly
crawled one and decides whether the change is large enough to alert the
operator.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from dropship_pricing.pricing.currency import to_decimal
from dropship_pricing.pricing.exceptions import NonPositivePriceError
from dropship_pricing.risk.status_codes import (
    ChangeDirection,
    PriceChangeStatus,
    get_status_description,
)

logger = logging.getLogger(__name__)

DEFAULT_CHANGE_THRESHOLD_PCT = 5.0


@dataclass(frozen=True)
class PriceChangeAssessment:
    """
    Result of comparing two source prices.

    Attributes:
        old_price: Previously recorded price.
        new_price: Newly observed price.
        change_amount: new_price - old_price.
        change_pct: Change relative to old_price, in percent.
        direction: Direction of the change.
        status: ALERT when abs(change_pct) >= threshold_pct.
        threshold_pct: Threshold the change was compared against.
    """

    old_price: Decimal
    new_price: Decimal
    change_amount: Decimal
    change_pct: Decimal
    direction: ChangeDirection
    status: PriceChangeStatus
    threshold_pct: Decimal

    @property
    def is_alert(self) -> bool:
        return self.status == PriceChangeStatus.ALERT

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_price": float(self.old_price),
            "new_price": float(self.new_price),
            "change_amount": float(self.change_amount),
            "change_pct": round(float(self.change_pct), 2),
            "direction": self.direction.value,
            "status": self.status.value,
            "description": get_status_description(self.status),
            "threshold_pct": float(self.threshold_pct),
        }


def get_change_direction(old_price: Decimal, new_price: Decimal) -> ChangeDirection:
    if new_price > old_price:
        return ChangeDirection.INCREASE
    elif new_price < old_price:
        return ChangeDirection.DECREASE
    return ChangeDirection.NO_CHANGE


def assess_price_change(
    old_price: Any,
    new_price: Any,
    threshold_pct: Any = DEFAULT_CHANGE_THRESHOLD_PCT,
) -> PriceChangeAssessment:
    """
    Assess a change in source price against an alert threshold.

    Args:
        old_price: Previously recorded source price.
        new_price: Newly observed source price.
        threshold_pct: Absolute percent change that triggers an alert.

    Returns:
        PriceChangeAssessment: Change metrics and status.

    Raises:
        NonPositivePriceError: If old_price <= 0.
        TypeError: If a price is None.
    """
    old_price = to_decimal(old_price)
    new_price = to_decimal(new_price)
    threshold = to_decimal(threshold_pct)
    if old_price <= 0:
        raise NonPositivePriceError(old_price)

    change_amount = new_price - old_price
    change_pct = change_amount / old_price * 100
    status = PriceChangeStatus.ALERT if abs(change_pct) >= threshold else PriceChangeStatus.OK

    if status == PriceChangeStatus.ALERT:
        logger.info(f"Source price changed {old_price} -> {new_price} ({change_pct:+.2f}%)")

    return PriceChangeAssessment(
        old_price=old_price,
        new_price=new_price,
        change_amount=change_amount,
        change_pct=change_pct,
        direction=get_change_direction(old_price, new_price),
        status=status,
        threshold_pct=threshold,
    )
