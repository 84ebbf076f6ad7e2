"""Multiplier-based cost adjustment."""

import math
from decimal import Decimal
from fractions import Fraction
from numbers import Rational, Real

from ..errors import InvalidArgument


def _as_fraction(value: object, argument: str) -> Fraction:
    # Floats are read by their shortest decimal literal so 0.3 means 3/10
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidArgument(
            f"{argument} must be a number, got {type(value).__name__}",
            argument=argument,
            value=value
        )
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgument(f"{argument} must be finite: {value}",
                                  argument=argument, value=value)
        return Fraction(repr(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidArgument(f"{argument} must be finite: {value}",
                                  argument=argument, value=value)
        return Fraction(value)
    if isinstance(value, Rational):
        return Fraction(value)
    return Fraction(repr(float(value)))


def adjust(base_value: int, multiplier: Real) -> int:
    """
    Apply a price multiplier to a base cost in base units.

    A multiplier of exactly 0 marks the item as not transactable and always
    yields 0. Otherwise the product is rounded half away from zero.

    Raises:
        InvalidArgument: base_value or multiplier is negative or not a number
    """
    base = _as_fraction(base_value, "base_value")
    factor = _as_fraction(multiplier, "multiplier")

    if base < 0:
        raise InvalidArgument(f"Base value cannot be negative: {base_value}",
                              argument="base_value", value=base_value)
    if factor < 0:
        raise InvalidArgument(f"Multiplier cannot be negative: {multiplier}",
                              argument="multiplier", value=multiplier)

    if factor == 0:
        return 0

    # Non-negative product, so half-up is half-away-from-zero
    return math.floor(base * factor + Fraction(1, 2))
