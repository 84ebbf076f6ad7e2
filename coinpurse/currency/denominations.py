"""
Fixed denomination table.

Denominations are identified by a stable symbol. Abbreviations are accepted
as aliases because listed item costs use them; display labels live in the
converter's presentation helpers and are never parsed back.
"""

from dataclasses import dataclass

from ..errors import InvalidDenomination


@dataclass(frozen=True)
class Denomination:
    """A currency tier with a fixed integer value in base units."""
    symbol: str          # Stable identifier, e.g. "gold"
    abbreviation: str    # Short form used in listed costs, e.g. "gp"
    value: int           # Value in base units (copper)
    rank: int            # 1 = most valuable


# Highest value first
DENOMINATIONS: tuple[Denomination, ...] = (
    Denomination(symbol="platinum", abbreviation="pp", value=500, rank=1),
    Denomination(symbol="gold", abbreviation="gp", value=100, rank=2),
    Denomination(symbol="electrum", abbreviation="ep", value=50, rank=3),
    Denomination(symbol="silver", abbreviation="sp", value=10, rank=4),
    Denomination(symbol="copper", abbreviation="cp", value=1, rank=5),
)

DESCENDING: tuple[Denomination, ...] = DENOMINATIONS
ASCENDING: tuple[Denomination, ...] = tuple(reversed(DENOMINATIONS))

BASE_UNIT: Denomination = ASCENDING[0]

SYMBOLS: tuple[str, ...] = tuple(d.symbol for d in DENOMINATIONS)

_BY_KEY = {d.symbol: d for d in DENOMINATIONS}
_BY_KEY.update({d.abbreviation: d for d in DENOMINATIONS})


def get_denomination(key: str) -> Denomination:
    """
    Look up a denomination by symbol or abbreviation.

    Raises:
        InvalidDenomination: If the key is not in the table
    """
    if isinstance(key, Denomination):
        return key
    denomination = _BY_KEY.get(key.strip().lower()) if isinstance(key, str) else None
    if denomination is None:
        raise InvalidDenomination(
            f"Invalid currency type: {key}",
            denomination=str(key)
        )
    return denomination


def lower_than(denomination: Denomination) -> tuple[Denomination, ...]:
    """Denominations strictly below the given one, highest first."""
    return tuple(d for d in DESCENDING if d.value < denomination.value)
