"""
Error classification for currency conversion and settlement.

Recoverable errors (bad input, insufficient funds) are ordinary rejections;
system failures indicate a logic defect or a storage problem.
"""

from .base import SettlementError
from .validation import (
    ValidationError,
    InvalidDenomination,
    NegativeAmount,
    InvalidArgument,
    InsufficientFunds,
    ConfigurationError,
)
from .system_failures import (
    SystemFailureError,
    InternalInconsistency,
    PersistenceError,
)

__all__ = [
    "SettlementError",
    # Recoverable rejections
    "ValidationError",
    "InvalidDenomination",
    "NegativeAmount",
    "InvalidArgument",
    "InsufficientFunds",
    "ConfigurationError",
    # System failures
    "SystemFailureError",
    "InternalInconsistency",
    "PersistenceError",
]
