"""
Input validation for price calculation.

Default filling and validation are separate steps:

1. apply_defaults() fills commission, shipping, rounding and target currency.
2. validate_price_input() builds a PriceCalculationInput and turns every
   pydantic error into a ValidationIssue, so the operator can fix the whole
   form at once.

A missing exchange rate on a cross-currency input is not a validation issue;
the currency converter reports it as MissingExchangeRateError.
"""

import logging
from collections.abc import Mapping
from typing import Any

import pydantic

from dropship_pricing.pricing.models import (
    Currency,
    PriceCalculationInput,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_VALUES: dict[str, Any] = {
    "target_currency": Currency.KRW.value,
    "commission_rate": 0,
    "shipping_cost": 0,
    "rounding_unit": 10,
}


def apply_defaults(raw: Mapping[str, Any], defaults: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Fill missing optional fields with their default values.

    A key that is absent or set to None counts as missing.

    Args:
        raw: Raw input record.
        defaults: Overrides for DEFAULT_VALUES (e.g. from PricingConfig).

    Returns:
        dict: New record with defaults applied. The input is not modified.

    Raises:
        TypeError: If raw is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"Price input must be a mapping, got {type(raw).__name__}")

    merged_defaults = dict(DEFAULT_VALUES)
    if defaults:
        merged_defaults.update(defaults)

    filled = dict(raw)
    for key, value in merged_defaults.items():
        if filled.get(key) is None:
            filled[key] = value
    return filled


def _issue_from_error(error: Mapping[str, Any]) -> ValidationIssue:
    name = ".".join(str(part) for part in error["loc"]) or "__root__"
    # An explicit None reads the same as an absent key
    if error["type"] == "missing" or error.get("input") is None:
        return ValidationIssue(name, f"{name} is required")
    return ValidationIssue(name, f"{name}: {error['msg']}", error.get("input"))


def validate_price_input(
    raw: Mapping[str, Any],
    defaults: Mapping[str, Any] | None = None,
) -> ValidationResult:
    """
    Apply defaults, then validate a raw price calculation input.

    Args:
        raw: Raw input record (snake_case keys; unknown keys are ignored).
        defaults: Optional default overrides passed to apply_defaults().

    Returns:
        ValidationResult: Normalized input, or the full list of issues.

    Raises:
        TypeError: If raw is not a mapping.
    """
    record = apply_defaults(raw, defaults)

    try:
        value = PriceCalculationInput.model_validate(record)
    except pydantic.ValidationError as e:
        issues = [_issue_from_error(error) for error in e.errors()]
        logger.warning(f"Price input rejected: {[issue.field for issue in issues]}")
        return ValidationResult(issues=issues)

    return ValidationResult(value=value)
