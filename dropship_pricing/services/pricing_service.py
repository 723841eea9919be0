"""
Pricing Service for the dropshipping dashboard.

Binds the pure pricing functions to the application configuration so the
product registration, order settlement and price monitor flows all price
products with the same defaults.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any

from dropship_pricing.pricing.exceptions import ConfigurationError, ValidationError
from dropship_pricing.pricing.margin_calculator import calculate_margin_rate, suggest_margin_rate
from dropship_pricing.pricing.models import (
    PriceCalculationInput,
    PriceCalculationResult,
    ValidationResult,
)
from dropship_pricing.pricing.pricing_engine import calculate_sale_price, format_pricing_summary
from dropship_pricing.pricing.validator import validate_price_input
from dropship_pricing.risk.price_monitor import PriceChangeAssessment, assess_price_change
from dropship_pricing.utils.config_loader import AppConfig, load_config, load_env
from dropship_pricing.utils.logging_config import LogContext, setup_logging_from_config

logger = logging.getLogger(__name__)


class PricingService:
    """
    Service for pricing sourced products.

    Holds only the immutable application configuration; every call is a
    pure function of its arguments and that configuration.

    Attributes:
        app_config: Application configuration.
    """

    def __init__(self, app_config: AppConfig | None = None):
        """
        Initialize pricing service.

        Args:
            app_config: Application configuration. Defaults are used when None.
        """
        self.app_config = app_config or AppConfig()
        self.logger = logging.getLogger(f"{__name__}.PricingService")

    def defaults_for(self, market: str | None = None) -> dict[str, Any]:
        """Configured input defaults, with the marketplace commission if given."""
        defaults = self.app_config.pricing.as_defaults()
        if market is not None:
            defaults["commission_rate"] = self.commission_rate_for(market)
        return defaults

    def commission_rate_for(self, market: str) -> float:
        """
        Look up the commission preset for a marketplace.

        Args:
            market: Marketplace name, e.g. "naver" or "coupang".

        Returns:
            float: Commission rate for the marketplace.

        Raises:
            ConfigurationError: If no preset exists for market.
        """
        presets = self.app_config.pricing.commission_presets
        key = market.strip().lower()
        if key not in presets:
            raise ConfigurationError(f"No commission preset for marketplace: {market}", key=key)
        return presets[key]

    def validate(self, raw: Mapping[str, Any]) -> ValidationResult:
        """Validate a raw input record using the configured defaults."""
        return validate_price_input(raw, self.defaults_for())

    def calculate_sale_price(
        self,
        data: PriceCalculationInput | Mapping[str, Any],
        market: str | None = None,
    ) -> PriceCalculationResult:
        """
        Calculate a sale price with configured defaults.

        Args:
            data: Validated input or raw record.
            market: Optional marketplace whose commission preset fills a
                missing commission_rate. Ignored for validated inputs.

        Returns:
            PriceCalculationResult: Sale price and breakdown.
        """
        defaults = self.defaults_for(market)
        with LogContext(market=market or "default"):
            result = calculate_sale_price(data, defaults)
        self.logger.debug(format_pricing_summary(result))
        return result

    def calculate_margin_rate(
        self,
        cost: Any,
        sale_price: Any,
        shipping_cost: Any = 0,
        commission_rate: Any = 0,
    ) -> Decimal:
        """Realized margin rate of a settled order."""
        return calculate_margin_rate(cost, sale_price, shipping_cost, commission_rate)

    def suggest_margin_rate(
        self,
        target_profit: Any,
        cost: Any,
        shipping_cost: Any = 0,
        commission_rate: Any = 0,
    ) -> Decimal:
        """Margin rate needed to earn target_profit per unit."""
        return suggest_margin_rate(target_profit, cost, shipping_cost, commission_rate)

    def assess_price_change(self, old_price: Any, new_price: Any) -> PriceChangeAssessment:
        """Compare source prices against the configured alert threshold."""
        return assess_price_change(
            old_price,
            new_price,
            self.app_config.monitor.price_change_threshold_pct,
        )

    def get_pricing_summary(
        self,
        data: PriceCalculationInput | Mapping[str, Any],
        market: str | None = None,
    ) -> str:
        """
        Get a human-readable summary of a price calculation.

        Args:
            data: Validated input or raw record.
            market: Optional marketplace commission preset.

        Returns:
            str: Formatted pricing breakdown with the sale currency.

        Raises:
            ValidationError: If a raw record fails validation.
        """
        if not isinstance(data, PriceCalculationInput):
            validation = validate_price_input(data, self.defaults_for(market))
            if not validation.is_valid:
                raise ValidationError(validation.issues)
            data = validation.value

        result = self.calculate_sale_price(data)
        return format_pricing_summary(result, data.target_currency.value)


def create_pricing_service(
    config_file: Path | None = None,
    env_file: Path = Path(".env"),
) -> PricingService:
    """
    Build a PricingService for an application process.

    Loads .env, reads the YAML configuration, configures root logging from
    its `logging` section and returns a service bound to that configuration.

    Args:
        config_file: Configuration YAML; PRICING_CONFIG or config/config.yaml when None.
        env_file: Environment file loaded before the configuration.

    Returns:
        PricingService: Service bound to the loaded configuration.
    """
    load_env(env_file)
    config = load_config(config_file)
    setup_logging_from_config(config.logging)

    logger.info(
        f"Pricing service ready: target={config.pricing.default_target_currency}, "
        f"rounding={config.pricing.default_rounding_unit}, "
        f"markets={sorted(config.pricing.commission_presets)}"
    )
    return PricingService(config)
