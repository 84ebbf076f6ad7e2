"""Tests for ledger persistence."""

import sqlite3
from pathlib import Path
from unittest.mock import patch

import pytest

from coinpurse.ledger.models import Ledger
from coinpurse.persistence.ledger_store import (
    InMemoryLedgerRepository,
    JournalEntry,
    SQLiteLedgerStore,
)


class TestInMemoryLedgerRepository:
    """Test InMemoryLedgerRepository."""

    def test_unknown_owner_loads_empty(self):
        """Test a new owner starts with an empty ledger."""
        ledger = InMemoryLedgerRepository().load("dave")
        assert ledger == Ledger.empty("dave")

    def test_seeded_ledgers_take_owner(self, mixed_ledger):
        """Test seeded ledgers are bound to their key."""
        repo = InMemoryLedgerRepository({"erin": mixed_ledger})
        assert repo.load("erin").owner_id == "erin"
        assert repo.load("erin").holdings() == {"gold": 2, "silver": 3}

    def test_save_replaces_ledger(self):
        """Test save replaces the stored ledger."""
        repo = InMemoryLedgerRepository()
        assert repo.save("dave", Ledger({"copper": 3}))
        assert repo.load("dave") == Ledger({"copper": 3}, owner_id="dave")

    def test_save_settlement_journals(self, mixed_ledger):
        """Test settlements are journaled with before/after counts."""
        repo = InMemoryLedgerRepository()
        after = mixed_ledger.with_coins({"silver": 8})

        assert repo.save_settlement("alice", after, before=mixed_ledger, amount=150)

        assert len(repo.journal) == 1
        entry = repo.journal[0]
        assert entry.amount == 150
        assert entry.before["gold"] == 2
        assert entry.after["silver"] == 8


class TestSQLiteLedgerStore:
    """Test SQLiteLedgerStore."""

    @pytest.fixture
    def store(self, tmp_path: Path) -> SQLiteLedgerStore:
        return SQLiteLedgerStore(str(tmp_path / "ledgers.db"))

    def test_init_database(self, store):
        """Test tables are created."""
        with sqlite3.connect(store.db_path) as conn:
            tables = {row[0] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )}
        assert {"ledgers", "settlement_journal"} <= tables

    def test_unknown_owner_loads_empty(self, store):
        """Test a new owner starts with an empty ledger."""
        assert store.load("dave") == Ledger.empty("dave")

    def test_save_and_load(self, store, full_ledger):
        """Test every count is persisted."""
        assert store.save("bob", full_ledger) is True

        loaded = store.load("bob")
        assert loaded == full_ledger
        assert loaded.total_value() == 661

    def test_save_replaces_all_counts(self, store, full_ledger):
        """Test a second save overwrites every column."""
        store.save("bob", full_ledger)
        store.save("bob", Ledger({"copper": 9}))

        assert store.load("bob").holdings() == {"copper": 9}
        assert store.get_stats()["ledgers"] == 1

    def test_save_settlement_journals(self, store, mixed_ledger):
        """Test the journal keeps before/after snapshots."""
        after = mixed_ledger.with_coins({"electrum": 1, "silver": 3})
        assert store.save_settlement("alice", after, before=mixed_ledger, amount=150)

        journal = store.get_journal("alice")
        assert len(journal) == 1
        assert isinstance(journal[0], JournalEntry)
        assert journal[0].amount == 150
        assert journal[0].before == mixed_ledger.as_dict()
        assert journal[0].after == after.as_dict()
        assert store.get_stats() == {"ledgers": 1, "settlements": 1}

    def test_plain_save_is_not_journaled(self, store, mixed_ledger):
        """Test save without a before snapshot skips the journal."""
        store.save("alice", mixed_ledger)
        assert store.get_journal("alice") == []

    def test_save_failure_returns_false(self, store, full_ledger):
        """Test database errors are reported as a failed save."""
        with patch.object(store, "_get_connection",
                          side_effect=sqlite3.OperationalError("disk I/O error")):
            assert store.save("bob", full_ledger) is False

        assert store.load("bob") == Ledger.empty("bob")

    def test_persists_across_instances(self, tmp_path, mixed_ledger):
        """Test a new store instance sees previously saved ledgers."""
        db_path = str(tmp_path / "ledgers.db")
        SQLiteLedgerStore(db_path).save("alice", mixed_ledger)

        assert SQLiteLedgerStore(db_path).load("alice") == mixed_ledger
