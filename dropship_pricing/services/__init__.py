"""
Services layer for the dropshipping dashboard.

Exposes the pricing engine to the registration, settlement and monitor flows.
"""

from dropship_pricing.services.pricing_service import PricingService, create_pricing_service

__all__ = ["PricingService", "create_pricing_service"]
