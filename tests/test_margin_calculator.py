"""
Tests for realized and suggested margin calculations.
"""

from decimal import Decimal

import pytest

from dropship_pricing.pricing.exceptions import NonPositiveCostError, NonPositiveSalePriceError
from dropship_pricing.pricing.margin_calculator import calculate_margin_rate, suggest_margin_rate
from dropship_pricing.pricing.pricing_engine import calculate_sale_price


class TestCalculateMarginRate:
    """Tests for calculate_margin_rate()."""

    def test_realized_margin(self) -> None:
        # (160 - 16 - 10 - 100) / 100 = 0.34
        assert calculate_margin_rate(100, 160, 10, 0.1) == Decimal("0.34")

    def test_settled_order(self) -> None:
        # (32000 - 3200 - 5000 - 20000) / 20000 = 0.19
        assert calculate_margin_rate(20000, 32000, 5000, 0.1) == Decimal("0.19")

    def test_defaults_to_no_shipping_or_commission(self) -> None:
        assert calculate_margin_rate(100, 150) == Decimal("0.5")

    def test_loss_gives_negative_rate(self) -> None:
        assert calculate_margin_rate(100, 90) == Decimal("-0.1")

    @pytest.mark.parametrize("sale_price", [0, -1])
    def test_non_positive_sale_price_raises(self, sale_price) -> None:
        with pytest.raises(NonPositiveSalePriceError):
            calculate_margin_rate(100, sale_price)

    def test_non_positive_cost_raises(self) -> None:
        with pytest.raises(NonPositiveCostError):
            calculate_margin_rate(0, 100)

    def test_none_argument_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            calculate_margin_rate(None, 100)

    def test_recovers_margin_of_unrounded_price(self) -> None:
        """Test the inverse of the forward calculation before rounding."""
        result = calculate_sale_price(
            {
                "base_cost": 100,
                "base_currency": "USD",
                "target_currency": "USD",
                "margin_rate": 0.25,
                "commission_rate": 0.1,
                "shipping_cost": 10,
            }
        )
        margin = calculate_margin_rate(100, result.price_before_rounding, 10, 0.1)
        assert float(margin) == pytest.approx(0.25)


class TestSuggestMarginRate:
    """Tests for suggest_margin_rate()."""

    def test_suggested_margin(self) -> None:
        # (110 + 50) / 0.9 = 177.78 -> (177.78 - 100) / 100
        assert float(suggest_margin_rate(50, 100, 10, 0.1)) == pytest.approx(0.7778, abs=1e-4)

    def test_without_shipping_or_commission(self) -> None:
        assert suggest_margin_rate(30, 100) == Decimal("0.3")

    def test_target_profit_above_previous_example(self) -> None:
        assert suggest_margin_rate(7000, 18000, 4000, 0.1) > Decimal("0.3")

    @pytest.mark.parametrize("cost", [0, -100])
    def test_non_positive_cost_raises(self, cost) -> None:
        with pytest.raises(NonPositiveCostError) as exc_info:
            suggest_margin_rate(50, cost)

        assert exc_info.value.error_code == "NON_POSITIVE_COST"

    def test_suggested_rate_reaches_target_profit(self) -> None:
        """Test selling at the implied revenue leaves exactly the target profit."""
        rate = suggest_margin_rate(50, 100, 10, 0.1)
        revenue = 100 * (1 + rate)
        profit = revenue - revenue * Decimal("0.1") - 10 - 100
        assert float(profit) == pytest.approx(50)
