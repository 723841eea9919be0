"""
Pricing engine for a cross-border dropshipping dashboard.
"""
