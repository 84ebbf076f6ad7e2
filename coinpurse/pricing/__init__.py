"""
Pricing policy module.

Turns listed item costs, repair damage and service names into base-unit
amounts using a shop's PricingConfig. The settlement engine only ever sees
the resulting amount.
"""

from .policy import ItemCategory, Material, PricingPolicy

__all__ = ["ItemCategory", "Material", "PricingPolicy"]
