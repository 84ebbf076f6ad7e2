"""
Currency module.

Denomination table, base-unit conversion and multiplier adjustment.
"""

from .adjuster import adjust
from .converter import (
    denomination_label,
    format_breakdown,
    from_base_units,
    to_base_units,
    total_base_units,
)
from .denominations import BASE_UNIT, DENOMINATIONS, Denomination, get_denomination

__all__ = [
    "BASE_UNIT",
    "DENOMINATIONS",
    "Denomination",
    "adjust",
    "denomination_label",
    "format_breakdown",
    "from_base_units",
    "get_denomination",
    "to_base_units",
    "total_base_units",
]
