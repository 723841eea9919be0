"""
Configuration loader module.

Loads pricing defaults from YAML files and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from dropship_pricing.pricing.exceptions import ConfigurationError
from dropship_pricing.pricing.models import Currency

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("config/config.yaml")


def _default_commission_presets() -> dict[str, float]:
    return {
        "naver": 0.055,
        "coupang": 0.108,
        "elevenst": 0.12,
    }


@dataclass(frozen=True)
class PricingConfig:
    """
    Defaults for the forward price calculation.

    Attributes:
        default_target_currency: Sale currency when the input omits one.
        default_commission_rate: Commission rate when the input omits one.
        default_shipping_cost: Shipping cost when the input omits one.
        default_rounding_unit: Rounding unit when the input omits one.
        commission_presets: Marketplace name -> commission rate.
    """

    default_target_currency: str = Currency.KRW.value
    default_commission_rate: float = 0.0
    default_shipping_cost: float = 0.0
    default_rounding_unit: float = 10
    commission_presets: dict[str, float] = field(default_factory=_default_commission_presets)

    def as_defaults(self) -> dict[str, Any]:
        """Return the defaults in the shape expected by apply_defaults()."""
        return {
            "target_currency": self.default_target_currency,
            "commission_rate": self.default_commission_rate,
            "shipping_cost": self.default_shipping_cost,
            "rounding_unit": self.default_rounding_unit,
        }


@dataclass(frozen=True)
class MonitorConfig:
    """Source price monitoring configuration."""

    price_change_threshold_pct: float = 5.0


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "text"
    file: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """
    Main application configuration.

    Aggregates all configuration sections into a single object.
    """

    pricing: PricingConfig = field(default_factory=PricingConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_env(env_file: Path = Path(".env")) -> None:
    """
    Load environment variables from .env file.

    Args:
        env_file: Path to .env file.
    """
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug(f"Loaded environment from: {env_file}")
    else:
        logger.debug(f"No .env file found at: {env_file}")


def load_config(config_file: Path | None = None) -> AppConfig:
    """
    Load application configuration from YAML file.

    The PRICING_CONFIG environment variable overrides the default path.
    LOG_LEVEL and LOG_FORMAT override the logging section.

    Args:
        config_file: Path to configuration YAML file.

    Returns:
        AppConfig: Loaded configuration object.

    Raises:
        ConfigurationError: If a configured value is out of range.
        yaml.YAMLError: If config file is invalid.
    """
    if config_file is None:
        config_file = Path(get_env_var("PRICING_CONFIG", str(DEFAULT_CONFIG_FILE)))
    config_file = Path(config_file)

    if not config_file.exists():
        logger.warning(f"Config file not found: {config_file}. Using defaults.")
        raw_config: dict[str, Any] = {}
    else:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
        logger.info(f"Loaded configuration from: {config_file}")

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Config root must be a mapping: {config_file}")

    return _parse_config(raw_config)


def _parse_config(raw: dict[str, Any]) -> AppConfig:
    """
    Parse raw YAML dict into AppConfig dataclass.

    Args:
        raw: Raw dictionary from YAML file.

    Returns:
        AppConfig: Parsed configuration object.
    """
    # Parse pricing config
    pricing_raw = raw.get("pricing") or {}
    presets = _default_commission_presets()
    presets.update(pricing_raw.get("commission_presets") or {})
    pricing = PricingConfig(
        default_target_currency=str(pricing_raw.get("default_target_currency", "KRW")).upper(),
        default_commission_rate=float(pricing_raw.get("default_commission_rate", 0.0)),
        default_shipping_cost=float(pricing_raw.get("default_shipping_cost", 0.0)),
        default_rounding_unit=float(pricing_raw.get("default_rounding_unit", 10)),
        commission_presets={str(k).lower(): float(v) for k, v in presets.items()},
    )
    _validate_pricing_config(pricing)

    # Parse monitor config
    monitor_raw = raw.get("monitor") or {}
    monitor = MonitorConfig(
        price_change_threshold_pct=float(monitor_raw.get("price_change_threshold_pct", 5.0)),
    )
    if monitor.price_change_threshold_pct < 0:
        raise ConfigurationError(
            "price_change_threshold_pct must be non-negative",
            key="monitor.price_change_threshold_pct",
        )

    # Parse logging config; environment wins over the file
    logging_raw = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=get_env_var("LOG_LEVEL", logging_raw.get("level", "INFO")),
        format=get_env_var("LOG_FORMAT", logging_raw.get("format", "text")),
        file=logging_raw.get("file"),
    )

    return AppConfig(pricing=pricing, monitor=monitor, logging=logging_config)


def _validate_pricing_config(pricing: PricingConfig) -> None:
    if pricing.default_target_currency not in [c.value for c in Currency]:
        raise ConfigurationError(
            f"Unsupported default_target_currency: {pricing.default_target_currency}",
            key="pricing.default_target_currency",
        )
    if not 0 <= pricing.default_commission_rate <= 0.3:
        raise ConfigurationError(
            "default_commission_rate must be between 0 and 0.3",
            key="pricing.default_commission_rate",
        )
    if pricing.default_shipping_cost < 0:
        raise ConfigurationError(
            "default_shipping_cost must be non-negative",
            key="pricing.default_shipping_cost",
        )
    if pricing.default_rounding_unit < 1:
        raise ConfigurationError(
            "default_rounding_unit must be at least 1",
            key="pricing.default_rounding_unit",
        )
    for market, rate in pricing.commission_presets.items():
        if not 0 <= rate <= 0.3:
            raise ConfigurationError(
                f"Commission preset for {market} must be between 0 and 0.3",
                key=f"pricing.commission_presets.{market}",
            )


def get_env_var(key: str, default: str | None = None) -> str | None:
    """
    Get an environment variable with optional default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(key, default)
