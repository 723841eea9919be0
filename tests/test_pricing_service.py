"""
Tests for the pricing service.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from pathlib import Path

import pytest

from dropship_pricing.pricing.exceptions import ConfigurationError, ValidationError
from dropship_pricing.pricing.models import Currency
from dropship_pricing.risk.status_codes import PriceChangeStatus
from dropship_pricing.services.pricing_service import PricingService, create_pricing_service
from dropship_pricing.utils.config_loader import AppConfig, MonitorConfig, PricingConfig
from dropship_pricing.utils.logging_config import JSONFormatter


@pytest.fixture
def service() -> PricingService:
    config = AppConfig(
        pricing=PricingConfig(
            default_target_currency="KRW",
            default_rounding_unit=100,
            commission_presets={"naver": 0.055, "coupang": 0.108},
        ),
        monitor=MonitorConfig(price_change_threshold_pct=10.0),
    )
    return PricingService(config)


@pytest.fixture
def sourced_product() -> dict:
    """A 1688 product registered for sale in KRW."""
    return {
        "base_cost": 45,
        "base_currency": "CNY",
        "exchange_rate": 190,
        "margin_rate": 0.3,
        "shipping_cost": 3500,
    }


class TestPricingService:
    """Tests for PricingService."""

    def test_default_config(self) -> None:
        service = PricingService()
        assert service.app_config == AppConfig()
        assert service.defaults_for()["rounding_unit"] == 10

    def test_uses_configured_defaults(self, service: PricingService, sourced_product: dict) -> None:
        result = service.calculate_sale_price(sourced_product)

        # 45 × 190 = 8550; + 2565 margin + 3500 shipping = 14615 -> 14700
        assert result.converted_cost == Decimal("8550")
        assert result.subtotal == Decimal("14615")
        assert result.commission_amount == 0
        assert result.sale_price == Decimal("14700")
        assert result.rounding_unit == Decimal("100")

    def test_market_preset_fills_commission(self, service: PricingService, sourced_product: dict) -> None:
        result = service.calculate_sale_price(sourced_product, market="Coupang")

        # 14615 / (1 - 0.108) = 16384.53 -> 16400
        assert result.sale_price == Decimal("16400")
        assert result.commission_amount > 0

    def test_explicit_commission_beats_market_preset(
        self, service: PricingService, sourced_product: dict
    ) -> None:
        result = service.calculate_sale_price({**sourced_product, "commission_rate": 0}, market="naver")
        assert result.commission_amount == 0

    def test_unknown_market_raises(self, service: PricingService, sourced_product: dict) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            service.calculate_sale_price(sourced_product, market="ebay")

        assert exc_info.value.details == {"key": "ebay"}

    def test_commission_rate_for(self, service: PricingService) -> None:
        assert service.commission_rate_for(" NAVER ") == 0.055

    def test_validate(self, service: PricingService) -> None:
        result = service.validate({"base_cost": -1})

        assert not result.is_valid
        assert result.fields == ["base_cost", "base_currency", "margin_rate"]

    def test_validation_error_propagates(self, service: PricingService) -> None:
        with pytest.raises(ValidationError):
            service.calculate_sale_price({"base_cost": 0})

    def test_inverse_calculations(self, service: PricingService) -> None:
        assert service.calculate_margin_rate(100, 160, 10, 0.1) == Decimal("0.34")
        assert float(service.suggest_margin_rate(50, 100, 10, 0.1)) == pytest.approx(0.7778, abs=1e-4)

    def test_assess_price_change_uses_configured_threshold(self, service: PricingService) -> None:
        assert service.assess_price_change(100, 108).status == PriceChangeStatus.OK
        assert service.assess_price_change(100, 110).status == PriceChangeStatus.ALERT

    def test_pricing_summary(self, service: PricingService, sourced_product: dict) -> None:
        summary = service.get_pricing_summary(sourced_product)

        assert "cost 8550.00" in summary
        assert summary.endswith("14700 KRW")

    def test_pricing_summary_for_validated_input(
        self, service: PricingService, sourced_product: dict
    ) -> None:
        price_input = service.validate({**sourced_product, "target_currency": Currency.KRW}).value
        assert service.get_pricing_summary(price_input, market="naver").endswith("14700 KRW")

    def test_pricing_summary_rejects_invalid_input(self, service: PricingService) -> None:
        with pytest.raises(ValidationError):
            service.get_pricing_summary({"base_cost": "free"})

    def test_concurrent_calls_leave_logging_untouched(
        self, service: PricingService, sourced_product: dict
    ) -> None:
        markets = ["naver", "coupang"] * 50

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(
                pool.map(lambda m: service.calculate_sale_price(sourced_product, market=m), markets)
            )
        prices = [result.sale_price for result in results]

        assert set(prices) == {Decimal("15500"), Decimal("16400")}
        record = logging.getLogRecordFactory()("x", logging.INFO, __file__, 1, "after", None, None)
        assert not hasattr(record, "extra_fields")


class TestCreatePricingService:
    """Tests for create_pricing_service()."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self, monkeypatch):
        for key in ("PRICING_CONFIG", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(key, raising=False)
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_loads_config_and_configures_logging(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "pricing:\n  default_rounding_unit: 100\nlogging:\n  level: WARNING\n  format: json\n",
            encoding="utf-8",
        )

        service = create_pricing_service(config_file, env_file=tmp_path / ".env")

        assert service.app_config.pricing.default_rounding_unit == 100
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
