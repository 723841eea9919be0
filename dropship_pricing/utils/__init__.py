"""
Utility modules.

Configuration loading and logging setup.
"""

from dropship_pricing.utils.config_loader import AppConfig, load_config, load_env
from dropship_pricing.utils.logging_config import setup_logging

__all__ = [
    "load_config",
    "load_env",
    "AppConfig",
    "setup_logging",
]
