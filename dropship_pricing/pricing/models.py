"""
Data models for price calculation.

The input is a frozen pydantic model, so an out-of-range record cannot be
built even when the validator is bypassed. Results are frozen dataclasses
holding Decimal amounts, produced fresh for every call.
"""

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Currency(str, Enum):
    """
    Currencies accepted by the pricing engine.

    Values:
        CNY: Chinese yuan (typical sourcing currency).
        KRW: Korean won (default sale currency).
        USD: US dollar.
        JPY: Japanese yen.
        EUR: Euro.
    """

    CNY = "CNY"
    KRW = "KRW"
    USD = "USD"
    JPY = "JPY"
    EUR = "EUR"


MAX_MARGIN_RATE = Decimal("1")
MAX_COMMISSION_RATE = Decimal("0.3")
MIN_ROUNDING_UNIT = Decimal("1")


class PriceCalculationInput(BaseModel):
    """
    Normalized input for the forward price calculation.

    Field order is the order in which violations are reported.
    """

    base_cost: Decimal = Field(..., gt=0, description="Sourcing cost in base_currency")
    base_currency: Currency = Field(..., description="Currency the cost is quoted in")
    target_currency: Currency = Field(
        default=Currency.KRW, description="Currency the product is sold in"
    )
    exchange_rate: Decimal | None = Field(
        None, gt=0, description="Multiplicative base -> target rate"
    )
    margin_rate: Decimal = Field(
        ..., ge=0, le=MAX_MARGIN_RATE, description="Fraction of converted cost added as profit"
    )
    commission_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=MAX_COMMISSION_RATE,
        description="Fraction of the final price kept by the platform",
    )
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0, description="Shipping in target_currency")
    rounding_unit: Decimal = Field(
        default=Decimal("10"), ge=MIN_ROUNDING_UNIT, description="Sale price is a multiple of this"
    )
    minimum_price: Decimal | None = Field(None, ge=0, description="Floor for the sale price")
    maximum_price: Decimal | None = Field(None, ge=0, description="Ceiling for the sale price")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("base_currency", "target_currency", mode="before")
    @classmethod
    def normalize_currency_code(cls, v: Any) -> Any:
        """Accept ' cny ' as well as 'CNY'."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator(
        "base_cost",
        "exchange_rate",
        "margin_rate",
        "commission_rate",
        "shipping_cost",
        "rounding_unit",
        "minimum_price",
        "maximum_price",
        mode="before",
    )
    @classmethod
    def parse_amount(cls, v: Any) -> Any:
        """Coerce numbers and numeric strings to Decimal via their text form."""
        if v is None:
            return v
        # bool is an int subclass; True must not pass as 1
        if isinstance(v, bool) or not isinstance(v, (int, float, str, Decimal)):
            raise ValueError("must be a number")
        try:
            number = Decimal(str(v).strip())
        except InvalidOperation:
            raise ValueError("must be a number") from None
        if not number.is_finite():
            raise ValueError("must be a finite number")
        return number


@dataclass(frozen=True)
class PriceCalculationResult:
    """
    Sale price and the cost/margin breakdown behind it.

    Attributes:
        sale_price: Final price in target currency.
        subtotal: Converted cost + margin + shipping, before commission.
        converted_cost: Base cost expressed in target currency.
        margin_amount: Margin included in the sale price.
        commission_amount: Platform commission included in the sale price.
        shipping_cost: Shipping cost included in the sale price.
        rounding_unit: Rounding increment that was applied.
        price_before_rounding: Commission-inclusive price before rounding up.
        clamped_to_minimum: True if sale_price was raised to the minimum price.
    """

    sale_price: Decimal
    subtotal: Decimal
    converted_cost: Decimal
    margin_amount: Decimal
    commission_amount: Decimal
    shipping_cost: Decimal
    rounding_unit: Decimal
    price_before_rounding: Decimal
    clamped_to_minimum: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert result to a JSON-friendly dictionary."""
        return {
            "sale_price": float(self.sale_price),
            "subtotal": float(self.subtotal),
            "converted_cost": float(self.converted_cost),
            "margin_amount": float(self.margin_amount),
            "commission_amount": float(self.commission_amount),
            "shipping_cost": float(self.shipping_cost),
            "rounding_unit": float(self.rounding_unit),
            "price_before_rounding": float(self.price_before_rounding),
            "clamped_to_minimum": self.clamped_to_minimum,
        }


@dataclass(frozen=True)
class ValidationIssue:
    """A single violated input constraint."""

    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "message": self.message,
            # Trim long values so a bad form field cannot bloat the payload
            "value": None if self.value is None else str(self.value)[:100],
        }


@dataclass
class ValidationResult:
    """
    Outcome of validating a raw input record.

    Either `value` holds the normalized input (is_valid is True) or `issues`
    lists every violated field.
    """

    value: PriceCalculationInput | None = None
    issues: list[ValidationIssue] = dataclass_field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.value is not None and not self.issues

    @property
    def fields(self) -> list[str]:
        """Names of the invalid fields, in the order they were checked."""
        return [issue.field for issue in self.issues]
