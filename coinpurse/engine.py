"""
Ledger manager coordinator.

Runs every settlement for an owner under that owner's lock: load the
ledger, settle the amount, save the result. Shop flows (purchase, sale,
repair, service use) price the transaction first and then go through the
same path.
"""

import threading
from typing import Optional

import structlog

from .errors import InvalidArgument, PersistenceError, SettlementError
from .ledger.models import Ledger
from .ledger.settlement import SettlementResult, settle
from .logging.config import get_settlement_logger
from .persistence.ledger_store import InMemoryLedgerRepository, LedgerRepository
from .pricing.policy import ItemCategory, PricingPolicy

logger = structlog.get_logger(__name__)
settlement_logger = get_settlement_logger(__name__)


class LedgerManager:
    """
    Main coordinator for ledger settlements.

    Manages the settlement pipeline:
    Price → Lock owner → Load → Settle → Save
    """

    def __init__(
        self,
        repository: Optional[LedgerRepository] = None,
        pricing: Optional[PricingPolicy] = None
    ) -> None:
        """Initialize the ledger manager."""
        self.logger = logger
        self.repository = repository if repository is not None else InMemoryLedgerRepository()
        self.pricing = pricing or PricingPolicy()

        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

        self.logger.info("Ledger manager initialized")

    def _owner_lock(self, owner_id: str) -> threading.Lock:
        """Get or create the lock serialising one owner's settlements."""
        with self._locks_guard:
            lock = self._locks.get(owner_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[owner_id] = lock
            return lock

    def balance(self, owner_id: str) -> Ledger:
        """Current ledger for an owner."""
        with self._owner_lock(owner_id):
            return self.repository.load(owner_id)

    def transact(self, owner_id: str, amount: int) -> SettlementResult:
        """
        Settle a signed amount against an owner's stored ledger.

        The stored ledger is replaced only when the settlement commits.

        Raises:
            PersistenceError: The repository failed to store a committed ledger
        """
        if not owner_id:
            raise InvalidArgument("owner_id is required", argument="owner_id", value=owner_id)

        with self._owner_lock(owner_id):
            before = self.repository.load(owner_id)
            result = settle(before, amount)

            if not result.committed or result.ledger == before:
                return result

            saved = self.repository.save_settlement(owner_id, result.ledger, before=before, amount=amount)
            if not saved:
                settlement_logger.error(
                    "settlement_not_persisted",
                    owner_id=owner_id,
                    amount=amount
                )
                raise PersistenceError(
                    f"Failed to store ledger for {owner_id}",
                    operation="save",
                    target=owner_id,
                    context={"amount": amount}
                )

            return result

    def purchase(
        self,
        owner_id: str,
        cost_value: int,
        currency: str,
        category: ItemCategory = ItemCategory.ORDINARY,
        quantity: int = 1
    ) -> SettlementResult:
        """Charge a customer for buying ``quantity`` items from the shop."""
        try:
            self._require_quantity(quantity)
            unit_price = self.pricing.sale_price(cost_value, currency, category)
        except SettlementError as e:
            return self._rejected(owner_id, e)

        total = unit_price * quantity
        self.logger.info(
            "Processing purchase",
            owner_id=owner_id,
            unit_price=unit_price,
            quantity=quantity,
            total=total,
            category=ItemCategory(category).value
        )
        return self.transact(owner_id, total)

    def sell(
        self,
        owner_id: str,
        cost_value: int,
        currency: str,
        category: ItemCategory = ItemCategory.ORDINARY,
        quantity: int = 1
    ) -> SettlementResult:
        """Pay a customer for selling ``quantity`` items to the shop."""
        try:
            self._require_quantity(quantity)
            if not self.pricing.is_sellable(cost_value, currency, category):
                raise InvalidArgument(
                    "Item is not sellable to this shop",
                    argument="category",
                    value=category
                )
            unit_price = self.pricing.buyback_price(cost_value, currency, category)
        except SettlementError as e:
            return self._rejected(owner_id, e)

        total = unit_price * quantity
        self.logger.info(
            "Processing sale",
            owner_id=owner_id,
            unit_price=unit_price,
            quantity=quantity,
            total=total,
            category=ItemCategory(category).value
        )
        return self.transact(owner_id, -total)

    def repair(self, owner_id: str, points_to_repair: int, material: Optional[str]) -> SettlementResult:
        """Charge a customer for repairing damaged durability points."""
        try:
            cost = self.pricing.repair_cost(points_to_repair, material)
        except SettlementError as e:
            return self._rejected(owner_id, e)

        self.logger.info(
            "Processing repair",
            owner_id=owner_id,
            points=points_to_repair,
            material=material,
            cost=cost
        )
        return self.transact(owner_id, cost)

    def use_service(self, owner_id: str, service_name: str) -> SettlementResult:
        """Charge a customer for one of the shop's configured services."""
        try:
            cost = self.pricing.service_cost(service_name)
        except SettlementError as e:
            return self._rejected(owner_id, e)

        self.logger.info(
            "Processing service",
            owner_id=owner_id,
            service=service_name,
            cost=cost
        )
        return self.transact(owner_id, cost)

    def _require_quantity(self, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidArgument(
                f"Quantity must be a positive integer: {quantity}",
                argument="quantity",
                value=quantity
            )

    def _rejected(self, owner_id: str, error: SettlementError) -> SettlementResult:
        """Reject a flow before settlement, returning the stored ledger."""
        self.logger.warning(
            "Transaction rejected before settlement",
            owner_id=owner_id,
            error=str(error),
            error_type=type(error).__name__
        )
        return SettlementResult.reject(self.balance(owner_id), 0, error)

    def get_runtime_stats(self) -> dict[str, int]:
        """Get runtime statistics."""
        with self._locks_guard:
            return {"tracked_owners": len(self._locks)}
