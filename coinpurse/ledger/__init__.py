"""
Ledger module.

Immutable coin holdings and the settlement engine that replaces them.
"""

from .models import Ledger
from .settlement import SettlementResult, SettlementStatus, settle

__all__ = ["Ledger", "SettlementResult", "SettlementStatus", "settle"]
