"""
Pricing module.

Converts sourcing costs into sale prices with margin, commission, shipping,
round-up and price bounds, and inverts sale prices back into margin rates.
"""

from dropship_pricing.pricing.currency import convert_currency
from dropship_pricing.pricing.exceptions import (
    MissingExchangeRateError,
    NonPositiveCostError,
    NonPositivePriceError,
    NonPositiveSalePriceError,
    PriceExceedsMaximumError,
    PricingError,
    ValidationError,
)
from dropship_pricing.pricing.margin_calculator import calculate_margin_rate, suggest_margin_rate
from dropship_pricing.pricing.models import (
    Currency,
    PriceCalculationInput,
    PriceCalculationResult,
    ValidationIssue,
    ValidationResult,
)
from dropship_pricing.pricing.pricing_engine import calculate_sale_price, format_pricing_summary
from dropship_pricing.pricing.validator import apply_defaults, validate_price_input

__all__ = [
    "Currency",
    "PriceCalculationInput",
    "PriceCalculationResult",
    "ValidationIssue",
    "ValidationResult",
    "apply_defaults",
    "validate_price_input",
    "convert_currency",
    "calculate_sale_price",
    "format_pricing_summary",
    "calculate_margin_rate",
    "suggest_margin_rate",
    "PricingError",
    "ValidationError",
    "MissingExchangeRateError",
    "PriceExceedsMaximumError",
    "NonPositiveSalePriceError",
    "NonPositiveCostError",
    "NonPositivePriceError",
]
