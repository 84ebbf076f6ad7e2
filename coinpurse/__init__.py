"""
Coinpurse - Multi-denomination Shop Currency Settlement

Converts amounts between coin denominations, adjusts listed prices with
shop multipliers, and settles purchases, sales, refunds and repair fees
against an actor's coin ledger without ever leaving it half-updated.
"""

__version__ = "0.1.0"
__author__ = "Coinpurse Team"
