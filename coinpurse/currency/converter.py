"""
Pure conversions between denominations and base units.

All amounts are integers in the base unit (copper). Breakdowns are the
canonical greedy decomposition: highest denomination first.
"""

from collections.abc import Iterable, Mapping
from typing import Optional

from ..errors import InvalidArgument, NegativeAmount
from .denominations import DESCENDING, Denomination, get_denomination

_LABELS = {
    "platinum": "Platinum Coins",
    "gold": "Gold Coins",
    "electrum": "Electrum Coins",
    "silver": "Silver Coins",
    "copper": "Copper Coins",
}


def _require_int(value: object, argument: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(
            f"{argument} must be an integer, got {type(value).__name__}",
            argument=argument,
            value=value
        )
    return value


def to_base_units(amount: int, denomination: str) -> int:
    """
    Convert an amount of a denomination to base units.

    Args:
        amount: Number of coins (non-negative)
        denomination: Symbol or abbreviation

    Returns:
        Equivalent value in base units

    Raises:
        InvalidDenomination: Unknown currency symbol
        NegativeAmount: amount < 0
    """
    denom = get_denomination(denomination)
    amount = _require_int(amount, "amount")
    if amount < 0:
        raise NegativeAmount(
            f"Currency value cannot be negative: {amount}",
            amount=amount
        )
    return amount * denom.value


def from_base_units(amount: int,
                    denominations: Optional[Iterable[Denomination]] = None) -> dict[str, int]:
    """
    Decompose a base-unit amount into its canonical greedy breakdown.

    Only denominations with a non-zero count are included. When
    ``denominations`` is given, the breakdown is restricted to those tiers;
    they must be ordered highest first and end with the base unit for the
    decomposition to be exact.

    Raises:
        NegativeAmount: amount < 0
    """
    amount = _require_int(amount, "amount")
    if amount < 0:
        raise NegativeAmount(
            f"Value in base units cannot be negative: {amount}",
            amount=amount
        )

    breakdown: dict[str, int] = {}
    remaining = amount
    for denom in (DESCENDING if denominations is None else denominations):
        count = remaining // denom.value
        if count > 0:
            breakdown[denom.symbol] = count
            remaining -= count * denom.value
    return breakdown


def total_base_units(coins: Mapping[str, int]) -> int:
    """Sum a denomination -> count mapping in base units."""
    return sum(to_base_units(count, symbol) for symbol, count in coins.items())


def denomination_label(symbol: str) -> str:
    """Display label for a denomination, e.g. ``"Gold Coins"``."""
    return _LABELS[get_denomination(symbol).symbol]


def format_breakdown(breakdown: Mapping[str, int]) -> str:
    """
    Render a breakdown for display, e.g. ``"2gp, 3sp, 7cp"``.

    Zero counts are skipped; an empty breakdown renders as ``"0cp"``.
    """
    counts = {get_denomination(symbol).symbol: count for symbol, count in breakdown.items()}
    parts = [
        f"{counts[d.symbol]}{d.abbreviation}"
        for d in DESCENDING
        if counts.get(d.symbol, 0) > 0
    ]
    return ", ".join(parts) if parts else "0cp"
