"""
Custom exceptions for the pricing engine.

Provides a hierarchy of exceptions so callers can tell an invalid form apart
from a price that breaks its configured bounds.
"""

from typing import Any, Dict, List, Optional


class PricingError(Exception):
    """Base exception for pricing errors."""

    error_code: str = "PRICING_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(PricingError):
    """Raised when one or more input fields violate their constraints."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, issues: List[Any]):
        self.issues = list(issues)
        fields = ", ".join(issue.field for issue in self.issues)
        super().__init__(
            f"Invalid price calculation input: {fields}",
            details={"issues": [issue.to_dict() for issue in self.issues]},
        )


class MissingExchangeRateError(PricingError):
    """Raised when a cross-currency conversion has no positive rate."""

    error_code = "MISSING_EXCHANGE_RATE"

    def __init__(self, base_currency: str, target_currency: str):
        super().__init__(
            f"An exchange rate is required to convert {base_currency} to {target_currency}",
            details={"base_currency": base_currency, "target_currency": target_currency},
        )


class PriceExceedsMaximumError(PricingError):
    """Raised when the computed sale price is above the configured ceiling."""

    error_code = "PRICE_EXCEEDS_MAXIMUM"

    def __init__(self, sale_price: Any, maximum_price: Any):
        self.sale_price = sale_price
        self.maximum_price = maximum_price
        super().__init__(
            f"Calculated sale price {sale_price} exceeds the maximum allowed price {maximum_price}",
            details={"sale_price": str(sale_price), "maximum_price": str(maximum_price)},
        )


class NonPositiveSalePriceError(PricingError):
    """Raised when a realized margin is requested for a sale price <= 0."""

    error_code = "NON_POSITIVE_SALE_PRICE"

    def __init__(self, sale_price: Any):
        super().__init__(
            f"Sale price must be greater than 0, got {sale_price}",
            details={"sale_price": str(sale_price)},
        )


class NonPositiveCostError(PricingError):
    """Raised when a margin calculation is given a cost <= 0."""

    error_code = "NON_POSITIVE_COST"

    def __init__(self, cost: Any):
        super().__init__(
            f"Cost must be greater than 0, got {cost}",
            details={"cost": str(cost)},
        )


class NonPositivePriceError(PricingError):
    """Raised when a price change is measured against a price <= 0."""

    error_code = "NON_POSITIVE_PRICE"

    def __init__(self, price: Any):
        super().__init__(
            f"Reference price must be greater than 0, got {price}",
            details={"price": str(price)},
        )


class ConfigurationError(PricingError):
    """Raised when configuration is missing or invalid."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, key: Optional[str] = None):
        details = {"key": key} if key else {}
        super().__init__(message, details)
