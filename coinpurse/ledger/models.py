"""
Ledger data model.

A ledger is an immutable snapshot of one actor's coin holding: a count per
denomination, every count a non-negative integer. Settlement never edits a
ledger in place; it produces a replacement that the repository stores.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from ..currency.denominations import DESCENDING, SYMBOLS, get_denomination
from ..errors import InvalidArgument, NegativeAmount


def _normalize_counts(coins: Mapping[str, int]) -> dict[str, int]:
    counts = {symbol: 0 for symbol in SYMBOLS}
    for key, quantity in coins.items():
        symbol = get_denomination(key).symbol
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidArgument(
                f"Coin quantity for {symbol} must be an integer, got {type(quantity).__name__}",
                argument=symbol,
                value=quantity
            )
        if quantity < 0:
            raise NegativeAmount(
                f"Coin quantity for {symbol} cannot be negative: {quantity}",
                amount=quantity
            )
        counts[symbol] += quantity
    return counts


@dataclass(frozen=True)
class Ledger:
    """Coin counts for every denomination, owned by a single actor."""

    coins: Mapping[str, int] = field(default_factory=dict)
    owner_id: Optional[str] = None

    def __post_init__(self) -> None:
        counts = _normalize_counts(self.coins)
        object.__setattr__(self, "coins", MappingProxyType(counts))

    @classmethod
    def empty(cls, owner_id: Optional[str] = None) -> "Ledger":
        """Ledger holding no coins."""
        return cls(owner_id=owner_id)

    def quantity(self, denomination: str) -> int:
        """Number of coins held of a denomination."""
        return self.coins[get_denomination(denomination).symbol]

    def total_value(self) -> int:
        """Total value of the holding in base units."""
        return sum(self.coins[d.symbol] * d.value for d in DESCENDING)

    def with_coins(self, coins: Mapping[str, int]) -> "Ledger":
        """New ledger for the same owner with every count replaced."""
        return Ledger(coins=coins, owner_id=self.owner_id)

    def as_dict(self) -> dict[str, int]:
        """All counts, zeros included, highest denomination first."""
        return {d.symbol: self.coins[d.symbol] for d in DESCENDING}

    def holdings(self) -> dict[str, int]:
        """Only the denominations actually held."""
        return {symbol: count for symbol, count in self.as_dict().items() if count > 0}

    def is_empty(self) -> bool:
        return self.total_value() == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ledger):
            return NotImplemented
        return self.owner_id == other.owner_id and dict(self.coins) == dict(other.coins)

    def __hash__(self) -> int:
        return hash((self.owner_id, tuple(self.as_dict().items())))
