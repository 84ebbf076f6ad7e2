"""
System failure error classifications for unrecoverable errors.

These exceptions signal a defect or an infrastructure problem rather than a
business-rule rejection. The ledger is guaranteed unchanged when one of them
is raised during settlement, but they must be reported distinctly.
"""

from typing import Optional

from .base import SettlementError


class SystemFailureError(SettlementError):
    """Base class for unrecoverable failures."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.recoverable = False


class InternalInconsistency(SystemFailureError):
    """Reconciliation mismatch or coin exhaustion while breaking coins."""

    def __init__(self, message: str, expected_total: Optional[int] = None,
                 actual_total: Optional[int] = None, phase: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.expected_total = expected_total
        self.actual_total = actual_total
        self.phase = phase


class PersistenceError(SystemFailureError):
    """Database or repository write failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
