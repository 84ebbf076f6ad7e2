"""
Persistence module.

Ledger repositories: an in-memory store and a SQLite store with a
settlement journal.
"""

from .ledger_store import (
    InMemoryLedgerRepository,
    JournalEntry,
    LedgerRepository,
    SQLiteLedgerStore,
)

__all__ = [
    "InMemoryLedgerRepository",
    "JournalEntry",
    "LedgerRepository",
    "SQLiteLedgerStore",
]
