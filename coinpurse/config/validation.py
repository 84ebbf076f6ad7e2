"""Pricing configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import BuyMultipliers, RepairCosts, SellMultipliers

_KNOWN_FIELDS = {
    "sell": {f.name for f in fields(SellMultipliers)},
    "buy": {f.name for f in fields(BuyMultipliers)},
    "repair": {f.name for f in fields(RepairCosts)},
}


@dataclass(frozen=True)
class ConfigFieldError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates pricing configuration parameters."""

    @staticmethod
    def validate_multipliers(section: str, params: dict[str, Any]) -> list[ConfigFieldError]:
        """Validate a sell or buy multiplier section."""
        errors = []

        if not isinstance(params, dict):
            return [ConfigFieldError(
                field=section,
                message="Must be a mapping of category to multiplier",
                value=params
            )]

        for name, value in params.items():
            if name not in _KNOWN_FIELDS[section]:
                errors.append(ConfigFieldError(
                    field=f"{section}.{name}",
                    message="Unknown parameter",
                    value=value
                ))
                continue
            if not _is_number(value) or value < 0:
                errors.append(ConfigFieldError(
                    field=f"{section}.{name}",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_repair_costs(params: dict[str, Any]) -> list[ConfigFieldError]:
        """Validate repair costs per durability point."""
        errors = []

        if not isinstance(params, dict):
            return [ConfigFieldError(
                field="repair",
                message="Must be a mapping of material to cost",
                value=params
            )]

        for name, value in params.items():
            if name not in _KNOWN_FIELDS["repair"]:
                errors.append(ConfigFieldError(
                    field=f"repair.{name}",
                    message="Unknown material",
                    value=value
                ))
                continue
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ConfigFieldError(
                    field=f"repair.{name}",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_services(services: Any) -> list[ConfigFieldError]:
        """Validate the service offer list."""
        errors = []

        if not isinstance(services, (list, tuple)):
            return [ConfigFieldError(
                field="services",
                message="Must be a list of services",
                value=services
            )]

        seen = set()
        for index, service in enumerate(services):
            if not isinstance(service, dict):
                errors.append(ConfigFieldError(
                    field=f"services[{index}]",
                    message="Must be a mapping with name and cost",
                    value=service
                ))
                continue

            name = service.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append(ConfigFieldError(
                    field=f"services[{index}].name",
                    message="Must be a non-empty string",
                    value=name
                ))
            elif name in seen:
                errors.append(ConfigFieldError(
                    field=f"services[{index}].name",
                    message="Duplicate service name",
                    value=name
                ))
            else:
                seen.add(name)

            cost = service.get("cost")
            if not isinstance(cost, int) or isinstance(cost, bool) or cost < 0:
                errors.append(ConfigFieldError(
                    field=f"services[{index}].cost",
                    message="Must be a non-negative integer",
                    value=cost
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ConfigFieldError]:
        """Validate complete configuration."""
        errors = []

        for section in config:
            if section not in ("sell", "buy", "repair", "services"):
                errors.append(ConfigFieldError(
                    field=section,
                    message="Unknown configuration section",
                    value=config[section]
                ))

        if "sell" in config:
            errors.extend(ConfigValidator.validate_multipliers("sell", config["sell"]))

        if "buy" in config:
            errors.extend(ConfigValidator.validate_multipliers("buy", config["buy"]))

        if "repair" in config:
            errors.extend(ConfigValidator.validate_repair_costs(config["repair"]))

        if "services" in config:
            errors.extend(ConfigValidator.validate_services(config["services"]))

        return errors
