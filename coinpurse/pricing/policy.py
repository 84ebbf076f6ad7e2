"""Category and material based pricing over a PricingConfig."""

from enum import Enum
from typing import Optional

import structlog

from ..config.defaults import PricingConfig, ServiceOffer, get_default_config
from ..currency.adjuster import adjust
from ..currency.converter import to_base_units
from ..errors import InvalidArgument

logger = structlog.get_logger(__name__)


class ItemCategory(str, Enum):
    """Pricing category of an item."""
    ORDINARY = "ordinary"
    MAGIC = "magic"
    TREASURE = "treasure"

    @classmethod
    def from_flags(cls, magic: bool = False, treasure: bool = False) -> "ItemCategory":
        """Category for an item flagged magic and/or treasure; magic wins."""
        if magic:
            return cls.MAGIC
        if treasure:
            return cls.TREASURE
        return cls.ORDINARY


class Material(str, Enum):
    """Repair material classes."""
    METAL = "metal"
    LEATHER = "leather"
    OTHER = "other"

    @classmethod
    def classify(cls, material: Optional[str]) -> "Material":
        """Map a free-form material description onto a repair class."""
        if not material:
            return cls.OTHER
        normalised = material.strip().lower()
        if "leather" in normalised:
            return cls.LEATHER
        if normalised == cls.METAL.value:
            return cls.METAL
        return cls.OTHER


def _category(category: object) -> ItemCategory:
    try:
        return ItemCategory(category)
    except ValueError as e:
        raise InvalidArgument(
            f"Unknown item category: {category}",
            argument="category",
            value=category
        ) from e


class PricingPolicy:
    """Computes base-unit prices for shop transactions."""

    def __init__(self, config: Optional[PricingConfig] = None) -> None:
        self.config = config or get_default_config()

    def sell_multiplier(self, category: ItemCategory) -> float:
        """Multiplier for the shop selling to a customer."""
        category = _category(category)
        if category == ItemCategory.MAGIC:
            return self.config.sell.magic
        return self.config.sell.ordinary

    def buy_multiplier(self, category: ItemCategory) -> float:
        """Multiplier for the shop buying from a customer."""
        category = _category(category)
        if category == ItemCategory.MAGIC:
            return self.config.buy.magic
        if category == ItemCategory.TREASURE:
            return self.config.buy.treasure
        return self.config.buy.ordinary

    def sale_price(self, cost_value: int, currency: str, category: ItemCategory) -> int:
        """Price in base units the shop charges for one item."""
        base = to_base_units(cost_value, currency)
        return adjust(base, self.sell_multiplier(category))

    def buyback_price(self, cost_value: int, currency: str, category: ItemCategory) -> int:
        """Price in base units the shop pays for one item."""
        base = to_base_units(cost_value, currency)
        return adjust(base, self.buy_multiplier(category))

    def is_sellable(self, cost_value: int, currency: str, category: ItemCategory) -> bool:
        """Whether the shop will buy the item at all."""
        multiplier = self.buy_multiplier(category)
        return multiplier > 0 and self.buyback_price(cost_value, currency, category) > 0

    def repair_cost(self, points_to_repair: int, material: Optional[str]) -> int:
        """
        Cost in base units to restore ``points_to_repair`` durability points.

        Raises:
            InvalidArgument: Negative or non-integer point count
        """
        if isinstance(points_to_repair, bool) or not isinstance(points_to_repair, int) \
                or points_to_repair < 0:
            raise InvalidArgument(
                f"Points to repair must be a non-negative integer: {points_to_repair}",
                argument="points_to_repair",
                value=points_to_repair
            )

        material_class = Material.classify(material)
        cost_per_point = getattr(self.config.repair, material_class.value)
        total = points_to_repair * cost_per_point

        logger.debug(
            "Calculated repair cost",
            material=material,
            material_class=material_class.value,
            points=points_to_repair,
            cost=total
        )
        return total

    def find_service(self, name: str) -> ServiceOffer:
        """
        Look up a configured service by name.

        Raises:
            InvalidArgument: Unknown service
        """
        for service in self.config.services:
            if service.name == name:
                return service
        raise InvalidArgument(
            f"Service not offered: {name}",
            argument="service_name",
            value=name
        )

    def service_cost(self, name: str) -> int:
        """Cost in base units of a configured service."""
        return to_base_units(self.find_service(name).cost, "cp")
