"""Pricing configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import (
    BuyMultipliers,
    PricingConfig,
    RepairCosts,
    SellMultipliers,
    ServiceOffer,
    get_default_config,
)
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages pricing configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: PricingConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_shop_config(self, shop_id: str) -> dict[str, Any]:
        """Load shop-specific configuration overrides."""
        shops_file = self.config_dir / "shops.yaml"

        if not shops_file.exists():
            return {}

        with open(shops_file) as f:
            shops_config = yaml.safe_load(f) or {}

        return shops_config.get("shops", {}).get(shop_id, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        shop_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Shop-specific overrides from shops.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        shop_config = self.load_shop_config(shop_id)
        config = self._deep_merge(config, shop_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_pricing_config(
        self,
        shop_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> PricingConfig:
        """
        Build a validated PricingConfig for a shop.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        config = self.merge_config(shop_id, overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            logger.error(
                "Pricing configuration validation failed",
                shop_id=shop_id,
                errors=error_msgs
            )
            raise ConfigurationError(
                f"Invalid pricing configuration for shop {shop_id}",
                errors=errors,
                context={"shop_id": shop_id}
            )

        pricing = PricingConfig(
            sell=SellMultipliers(**config["sell"]),
            buy=BuyMultipliers(**config["buy"]),
            repair=RepairCosts(**config["repair"]),
            services=tuple(
                ServiceOffer(name=service["name"], cost=service["cost"])
                for service in config["services"]
            ),
        )

        logger.debug("Loaded pricing configuration", shop_id=shop_id)
        return pricing

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses to plain dicts and lists."""
        if hasattr(obj, '__dataclass_fields__'):
            return {
                field_name: self._dataclass_to_dict(getattr(obj, field_name))
                for field_name in obj.__dataclass_fields__
            }
        if isinstance(obj, tuple):
            return [self._dataclass_to_dict(item) for item in obj]
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
