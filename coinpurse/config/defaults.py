"""Default pricing parameters for shops."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SellMultipliers:
    """Multipliers applied when the shop sells to a customer."""
    ordinary: float = 1.0
    magic: float = 1.0


@dataclass(frozen=True)
class BuyMultipliers:
    """Multipliers applied when the shop buys from a customer."""
    ordinary: float = 0.5
    # Single source for the magic buyback rate; older call sites used 0.3
    magic: float = 0.5
    treasure: float = 1.0


@dataclass(frozen=True)
class RepairCosts:
    """Repair cost per durability point, in base units, by material."""
    metal: int = 75
    leather: int = 5
    other: int = 500


@dataclass(frozen=True)
class ServiceOffer:
    """A service the shop sells for a flat cost in base units."""
    name: str
    cost: int


@dataclass(frozen=True)
class PricingConfig:
    """Complete pricing configuration for one shop."""
    sell: SellMultipliers = field(default_factory=SellMultipliers)
    buy: BuyMultipliers = field(default_factory=BuyMultipliers)
    repair: RepairCosts = field(default_factory=RepairCosts)
    services: tuple[ServiceOffer, ...] = ()


def get_default_config() -> PricingConfig:
    """Get the default pricing configuration instance."""
    return PricingConfig(
        sell=SellMultipliers(),
        buy=BuyMultipliers(),
        repair=RepairCosts(),
        services=(),
    )
