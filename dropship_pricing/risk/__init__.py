"""
Risk assessment module.

Flags source price changes that call for a sale price review.
"""

from dropship_pricing.risk.price_monitor import PriceChangeAssessment, assess_price_change
from dropship_pricing.risk.status_codes import ChangeDirection, PriceChangeStatus

__all__ = [
    "PriceChangeAssessment",
    "assess_price_change",
    "PriceChangeStatus",
    "ChangeDirection",
]
