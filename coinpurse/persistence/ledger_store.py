"""Ledger persistence layer: repositories and settlement journal."""

import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol

import orjson
import structlog

from ..currency.denominations import SYMBOLS
from ..ledger.models import Ledger


class LedgerRepository(Protocol):
    """Storage collaborator for ledgers."""

    def load(self, owner_id: str) -> Ledger:
        """Load an owner's ledger, empty if none is stored yet."""
        ...

    def save(self, owner_id: str, ledger: Ledger) -> bool:
        """Replace an owner's ledger; True on success."""
        ...

    def save_settlement(self, owner_id: str, ledger: Ledger,
                        before: Optional[Ledger] = None,
                        amount: Optional[int] = None) -> bool:
        """Replace an owner's ledger and record the settlement that produced it."""
        ...


class InMemoryLedgerRepository:
    """Dict-backed repository, mainly for tests and single-process use."""

    def __init__(self, ledgers: Optional[dict[str, Ledger]] = None):
        self._ledgers: dict[str, Ledger] = {}
        self.journal: list[JournalEntry] = []
        self._lock = threading.Lock()
        for owner_id, ledger in (ledgers or {}).items():
            self._ledgers[owner_id] = Ledger(coins=ledger.coins, owner_id=owner_id)

    def load(self, owner_id: str) -> Ledger:
        with self._lock:
            return self._ledgers.get(owner_id) or Ledger.empty(owner_id)

    def save(self, owner_id: str, ledger: Ledger) -> bool:
        with self._lock:
            self._ledgers[owner_id] = Ledger(coins=ledger.coins, owner_id=owner_id)
            return True

    def save_settlement(
        self,
        owner_id: str,
        ledger: Ledger,
        before: Optional[Ledger] = None,
        amount: Optional[int] = None
    ) -> bool:
        with self._lock:
            self._ledgers[owner_id] = Ledger(coins=ledger.coins, owner_id=owner_id)
            if before is not None:
                self.journal.append(JournalEntry(
                    id=len(self.journal) + 1,
                    owner_id=owner_id,
                    amount=amount if amount is not None else before.total_value() - ledger.total_value(),
                    before=before.as_dict(),
                    after=ledger.as_dict(),
                    created_at=datetime.now(timezone.utc).isoformat()
                ))
            return True


@dataclass
class JournalEntry:
    """Stored settlement with before/after snapshots."""
    id: int
    owner_id: str
    amount: int
    before: dict[str, int]
    after: dict[str, int]
    created_at: str


class SQLiteLedgerStore:
    """SQLite-based ledger persistence layer."""

    def __init__(self, db_path: str = "ledgers.db", timeout: float = 30.0):
        self.db_path = Path(db_path)
        self.timeout = timeout
        self.logger = structlog.get_logger("ledger.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        coin_columns = ",\n".join(
            f"                    {symbol} INTEGER NOT NULL DEFAULT 0 CHECK ({symbol} >= 0)"
            for symbol in SYMBOLS
        )

        with self._get_connection() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS ledgers (
                    owner_id TEXT PRIMARY KEY,
{coin_columns},
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS settlement_journal (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    amount INTEGER NOT NULL,
                    before_data TEXT NOT NULL,
                    after_data TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_journal_owner_id ON settlement_journal(owner_id)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", error=str(e))
            raise
        finally:
            if conn:
                conn.close()

    def load(self, owner_id: str) -> Ledger:
        """Load an owner's ledger, empty if none is stored yet."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT * FROM ledgers WHERE owner_id = ?
            """, (owner_id,)).fetchone()

        if row is None:
            return Ledger.empty(owner_id)

        return Ledger(coins={symbol: row[symbol] for symbol in SYMBOLS}, owner_id=owner_id)

    def save(self, owner_id: str, ledger: Ledger) -> bool:
        """
        Replace all coin counts for an owner in one statement.

        Returns:
            True if stored successfully, False otherwise
        """
        return self.save_settlement(owner_id, ledger)

    def save_settlement(
        self,
        owner_id: str,
        ledger: Ledger,
        before: Optional[Ledger] = None,
        amount: Optional[int] = None
    ) -> bool:
        """
        Store a ledger and, when ``before`` is given, journal the settlement.

        Both writes share one transaction.
        """
        columns = ", ".join(SYMBOLS)
        placeholders = ", ".join("?" for _ in SYMBOLS)
        updates = ", ".join(f"{symbol} = excluded.{symbol}" for symbol in SYMBOLS)
        counts = ledger.as_dict()

        with self._lock:
            try:
                with self._get_connection() as conn:
                    now = datetime.now(timezone.utc).isoformat()

                    conn.execute(f"""
                        INSERT INTO ledgers (owner_id, {columns}, updated_at)
                        VALUES (?, {placeholders}, ?)
                        ON CONFLICT(owner_id) DO UPDATE SET
                            {updates}, updated_at = excluded.updated_at
                    """, (owner_id, *(counts[symbol] for symbol in SYMBOLS), now))

                    if before is not None:
                        conn.execute("""
                            INSERT INTO settlement_journal (
                                owner_id, amount, before_data, after_data, created_at
                            ) VALUES (?, ?, ?, ?, ?)
                        """, (
                            owner_id,
                            amount if amount is not None else before.total_value() - ledger.total_value(),
                            orjson.dumps(before.as_dict()).decode(),
                            orjson.dumps(counts).decode(),
                            now
                        ))

                    conn.commit()

                    self.logger.info(
                        "Ledger stored",
                        owner_id=owner_id,
                        total_value=ledger.total_value()
                    )
                    return True

            except sqlite3.Error as e:
                self.logger.error(
                    "Failed to store ledger",
                    owner_id=owner_id,
                    error=str(e)
                )
                return False

    def get_journal(self, owner_id: str, limit: int = 100) -> list[JournalEntry]:
        """Settlements recorded for an owner, oldest first."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM settlement_journal WHERE owner_id = ?
                ORDER BY id LIMIT ?
            """, (owner_id, limit)).fetchall()

        return [self._row_to_journal_entry(row) for row in rows]

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics."""
        with self._get_connection() as conn:
            ledger_count = conn.execute("SELECT COUNT(*) FROM ledgers").fetchone()[0]
            journal_count = conn.execute("SELECT COUNT(*) FROM settlement_journal").fetchone()[0]

        return {
            "ledgers": ledger_count,
            "settlements": journal_count,
        }

    def _row_to_journal_entry(self, row: sqlite3.Row) -> JournalEntry:
        """Convert database row to JournalEntry object."""
        return JournalEntry(
            id=row["id"],
            owner_id=row["owner_id"],
            amount=row["amount"],
            before=orjson.loads(row["before_data"]),
            after=orjson.loads(row["after_data"]),
            created_at=row["created_at"]
        )
