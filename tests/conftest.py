"""Pytest configuration and shared fixtures."""

import pytest

from coinpurse.config.defaults import PricingConfig, ServiceOffer
from coinpurse.engine import LedgerManager
from coinpurse.ledger.models import Ledger
from coinpurse.persistence.ledger_store import InMemoryLedgerRepository
from coinpurse.pricing.policy import PricingPolicy


@pytest.fixture
def mixed_ledger() -> Ledger:
    """Two gold and three silver: 230 copper in total."""
    return Ledger({"gold": 2, "silver": 3}, owner_id="alice")


@pytest.fixture
def full_ledger() -> Ledger:
    """One of every coin: 661 copper in total."""
    return Ledger(
        {"platinum": 1, "gold": 1, "electrum": 1, "silver": 1, "copper": 1},
        owner_id="bob"
    )


@pytest.fixture
def pricing_config() -> PricingConfig:
    """Default multipliers with two services on offer."""
    return PricingConfig(
        services=(
            ServiceOffer(name="Sharpen blade", cost=25),
            ServiceOffer(name="Identify item", cost=10000),
        )
    )


@pytest.fixture
def repository(mixed_ledger: Ledger) -> InMemoryLedgerRepository:
    """In-memory repository seeded with alice's ledger."""
    return InMemoryLedgerRepository({"alice": mixed_ledger})


@pytest.fixture
def manager(repository: InMemoryLedgerRepository, pricing_config: PricingConfig) -> LedgerManager:
    """Ledger manager over the seeded repository."""
    return LedgerManager(repository, PricingPolicy(pricing_config))
