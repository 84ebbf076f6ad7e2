"""
Settlement engine.

Resolves a signed base-unit amount against a ledger. A positive amount is a
cost charged to the owner, a negative amount is money granted to the owner.

Payment runs in three phases over a working copy of the coin counts:

1. Smallest-first direct payment, which may overpay by part of one coin.
2. Breaking one larger coin at a time into lower denominations while the
   cost is still not covered.
3. Paying out any over-collection as change, highest denomination first.

The working copy is reconciled against the expected total before anything
is committed. Every failure returns the original ledger untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from ..currency.converter import from_base_units
from ..currency.denominations import ASCENDING, lower_than
from ..errors import (
    InsufficientFunds,
    InternalInconsistency,
    InvalidArgument,
    SettlementError,
)
from ..logging.config import get_settlement_logger, log_settlement
from .models import Ledger

logger = structlog.get_logger(__name__)
settlement_logger = get_settlement_logger(__name__)


class SettlementStatus(str, Enum):
    """Outcome of a single settlement call."""
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SettlementResult:
    """Result of one atomic ledger transition."""

    status: SettlementStatus
    ledger: Ledger                       # New ledger if committed, original otherwise
    amount: int
    error: Optional[SettlementError] = None

    @property
    def committed(self) -> bool:
        return self.status == SettlementStatus.COMMITTED

    def unwrap(self) -> Ledger:
        """Return the committed ledger or raise the rejection error."""
        if self.error is not None:
            raise self.error
        return self.ledger

    @classmethod
    def commit(cls, ledger: Ledger, amount: int) -> "SettlementResult":
        return cls(status=SettlementStatus.COMMITTED, ledger=ledger, amount=amount)

    @classmethod
    def reject(cls, ledger: Ledger, amount: int, error: SettlementError) -> "SettlementResult":
        return cls(status=SettlementStatus.REJECTED, ledger=ledger, amount=amount, error=error)


def _total(coins: dict[str, int]) -> int:
    return sum(coins[d.symbol] * d.value for d in ASCENDING)


def pay_smallest_first(coins: dict[str, int], remaining: int) -> int:
    """
    Phase 1: deduct coins from the lowest denomination upwards.

    Mutates ``coins`` and returns the new remaining amount, which is
    negative when the last coin used overpaid.
    """
    for denom in ASCENDING:
        if remaining <= 0:
            break
        available = coins[denom.symbol]
        if available > 0:
            # ceil(remaining / value) without floats
            coins_used = min(-(-remaining // denom.value), available)
            coins[denom.symbol] = available - coins_used
            remaining -= coins_used * denom.value

            logger.debug(
                "Deducted coins",
                denomination=denom.symbol,
                coins_used=coins_used,
                remaining=remaining
            )
    return remaining


def break_larger_coins(coins: dict[str, int], remaining: int) -> int:
    """
    Phase 2: break one coin at a time until the cost is covered.

    Each broken coin's value goes into a floating credit that is applied
    against ``remaining``; whatever is left of the credit is redistributed
    greedily over the denominations strictly below the broken coin.

    Raises:
        InternalInconsistency: No coins left while ``remaining`` is positive
    """
    while remaining > 0:
        denom = next((d for d in ASCENDING if coins[d.symbol] > 0), None)
        if denom is None:
            raise InternalInconsistency(
                "Ran out of coins to break while cost is still outstanding",
                expected_total=remaining,
                actual_total=0,
                phase="break"
            )

        coins[denom.symbol] -= 1
        floating_credit = denom.value

        applied = min(floating_credit, remaining)
        remaining -= applied
        floating_credit -= applied

        if floating_credit > 0:
            for symbol, count in from_base_units(floating_credit, lower_than(denom)).items():
                coins[symbol] += count

        logger.debug(
            "Broke coin",
            denomination=denom.symbol,
            applied=applied,
            redistributed=floating_credit,
            remaining=remaining
        )
    return remaining


def make_change(coins: dict[str, int], change: int) -> None:
    """Phase 3: add ``change`` to the holding as its canonical breakdown."""
    if change <= 0:
        return
    for symbol, count in from_base_units(change).items():
        coins[symbol] += count


def settle(ledger: Ledger, amount: int) -> SettlementResult:
    """
    Settle a signed base-unit amount against a ledger.

    Args:
        ledger: Current holding
        amount: Positive to charge the owner, negative to pay the owner

    Returns:
        Committed result with the new ledger, or a rejected result carrying
        the error and the original ledger
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        error = InvalidArgument(
            f"Settlement amount must be an integer, got {type(amount).__name__}",
            argument="amount",
            value=amount
        )
        log_settlement(settlement_logger, amount=amount, committed=False,
                       total_before=ledger.total_value(), owner_id=ledger.owner_id,
                       reason=str(error))
        return SettlementResult.reject(ledger, amount, error)

    total_before = ledger.total_value()

    if amount == 0:
        return SettlementResult.commit(ledger, amount)

    if amount > 0 and total_before < amount:
        error = InsufficientFunds(
            f"Ledger holds {total_before} but {amount} is required",
            required=amount,
            available=total_before,
            context={"owner_id": ledger.owner_id}
        )
        log_settlement(settlement_logger, amount=amount, committed=False,
                       total_before=total_before, owner_id=ledger.owner_id,
                       reason="insufficient_funds")
        return SettlementResult.reject(ledger, amount, error)

    working = ledger.as_dict()
    expected_total = total_before - amount

    try:
        remaining = amount
        if remaining > 0:
            remaining = pay_smallest_first(working, remaining)
        if remaining > 0:
            remaining = break_larger_coins(working, remaining)
        make_change(working, -remaining)

        actual_total = _total(working)
        if actual_total != expected_total or any(count < 0 for count in working.values()):
            raise InternalInconsistency(
                "Ledger total does not reconcile after settlement",
                expected_total=expected_total,
                actual_total=actual_total,
                phase="reconcile"
            )
    except InternalInconsistency as e:
        settlement_logger.error(
            "settlement_inconsistency",
            owner_id=ledger.owner_id,
            amount=amount,
            total_before=total_before,
            expected_total=e.expected_total,
            actual_total=e.actual_total,
            phase=e.phase
        )
        return SettlementResult.reject(ledger, amount, e)

    settled = ledger.with_coins(working)

    log_settlement(settlement_logger, amount=amount, committed=True,
                   total_before=total_before, total_after=expected_total,
                   owner_id=ledger.owner_id)

    return SettlementResult.commit(settled, amount)
