"""
Recoverable rejections: bad input and business-rule failures.

These are expected conditions. They are surfaced directly to the caller so
it can tell the user why a purchase, sale or repair did not go through.
"""

from typing import Optional, Any

from .base import SettlementError


class ValidationError(SettlementError):
    """Base class for rejected input values."""


class InvalidDenomination(ValidationError):
    """Currency symbol is not in the denomination table."""

    def __init__(self, message: str, denomination: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.denomination = denomination


class NegativeAmount(ValidationError):
    """A converter was handed a negative quantity."""

    def __init__(self, message: str, amount: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.amount = amount


class InvalidArgument(ValidationError):
    """Negative base value or multiplier, or an argument of the wrong type."""

    def __init__(self, message: str, argument: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.argument = argument
        self.value = value


class InsufficientFunds(SettlementError):
    """Ledger total is below a positive requested amount."""

    def __init__(self, message: str, required: Optional[int] = None,
                 available: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required = required
        self.available = available


class ConfigurationError(ValidationError):
    """Pricing configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
