"""
Base error type shared by every settlement failure.

Each error carries a free-form context dict and a recoverable flag so callers
can decide between user-facing messaging and bug reporting.
"""

from typing import Optional, Dict, Any


class SettlementError(Exception):
    """Base class for every failure surfaced by the currency engine."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True
