"""Unit tests for pricing configuration management."""

from pathlib import Path

import pytest

from coinpurse.config.defaults import ServiceOffer, get_default_config
from coinpurse.config.loader import ConfigLoader
from coinpurse.config.validation import ConfigValidator
from coinpurse.errors import ConfigurationError

SHOPS_YAML = """
shops:
  blacksmith:
    sell:
      ordinary: 1.2
    repair:
      metal: 60
    services:
      - name: Sharpen blade
        cost: 25
  broken:
    buy:
      magic: -0.3
"""


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Config directory holding a shops.yaml."""
    (tmp_path / "shops.yaml").write_text(SHOPS_YAML)
    return tmp_path


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test documented default multipliers."""
        config = get_default_config()
        assert config.sell.ordinary == 1.0
        assert config.sell.magic == 1.0
        assert config.buy.ordinary == 0.5
        assert config.buy.magic == 0.5
        assert config.buy.treasure == 1.0
        assert config.repair.metal == 75
        assert config.repair.leather == 5
        assert config.repair.other == 500
        assert config.services == ()


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_missing_shops_file(self, tmp_path: Path) -> None:
        """Test a config directory without shops.yaml yields defaults."""
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_shop_config("anything") == {}
        assert loader.load_pricing_config("anything") == get_default_config()

    def test_merge_config_defaults_only(self, config_dir: Path) -> None:
        """Test unknown shops fall back to defaults."""
        config = ConfigLoader.create(config_dir).merge_config("UNKNOWN-SHOP")

        assert config["sell"] == {"ordinary": 1.0, "magic": 1.0}
        assert config["repair"]["metal"] == 75
        assert config["services"] == []

    def test_shop_overrides(self, config_dir: Path) -> None:
        """Test shop overrides replace only the keys they name."""
        pricing = ConfigLoader.create(config_dir).load_pricing_config("blacksmith")

        assert pricing.sell.ordinary == 1.2
        assert pricing.sell.magic == 1.0
        assert pricing.repair.metal == 60
        assert pricing.repair.leather == 5
        assert pricing.services == (ServiceOffer(name="Sharpen blade", cost=25),)

    def test_call_overrides_take_precedence(self, config_dir: Path) -> None:
        """Test per-call overrides beat shop overrides."""
        pricing = ConfigLoader.create(config_dir).load_pricing_config(
            "blacksmith", {"sell": {"ordinary": 0.9}, "buy": {"magic": 0.3}}
        )

        assert pricing.sell.ordinary == 0.9
        assert pricing.buy.magic == 0.3
        assert pricing.repair.metal == 60

    def test_invalid_shop_config(self, config_dir: Path) -> None:
        """Test invalid overrides raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(config_dir).load_pricing_config("broken")

        assert [err.field for err in exc_info.value.errors] == ["buy.magic"]


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_config(self) -> None:
        """Test a fully valid configuration."""
        config = {
            "sell": {"ordinary": 1.0, "magic": 2},
            "buy": {"ordinary": 0, "magic": 0.5, "treasure": 1.0},
            "repair": {"metal": 75, "leather": 5, "other": 500},
            "services": [{"name": "Sharpen blade", "cost": 25}],
        }
        assert ConfigValidator.validate_config(config) == []

    def test_negative_multiplier(self) -> None:
        """Test negative multipliers are rejected."""
        errors = ConfigValidator.validate_multipliers("sell", {"ordinary": -1.0})
        assert len(errors) == 1
        assert errors[0].field == "sell.ordinary"
        assert "non-negative" in errors[0].message

    def test_non_numeric_multiplier(self) -> None:
        """Test booleans and strings are not multipliers."""
        errors = ConfigValidator.validate_multipliers("buy", {"magic": True, "ordinary": "0.5"})
        assert [err.field for err in errors] == ["buy.magic", "buy.ordinary"]

    def test_unknown_multiplier(self) -> None:
        """Test unknown categories are reported."""
        errors = ConfigValidator.validate_multipliers("buy", {"cursed": 0.1})
        assert errors[0].message == "Unknown parameter"

    def test_section_must_be_mapping(self) -> None:
        """Test sections given as scalars are reported."""
        errors = ConfigValidator.validate_config({"sell": 1.0, "repair": [75]})
        assert [err.field for err in errors] == ["sell", "repair"]

    def test_repair_costs_must_be_integers(self) -> None:
        """Test repair costs are whole base units."""
        errors = ConfigValidator.validate_repair_costs({"metal": 7.5, "wood": 3})
        assert [(err.field, err.message) for err in errors] == [
            ("repair.metal", "Must be a non-negative integer"),
            ("repair.wood", "Unknown material"),
        ]

    def test_services(self) -> None:
        """Test service list validation."""
        errors = ConfigValidator.validate_services([
            {"name": "Sharpen blade", "cost": 25},
            {"name": "Sharpen blade", "cost": 30},
            {"name": "", "cost": -1},
            "not a service",
        ])
        assert [err.field for err in errors] == [
            "services[1].name",
            "services[2].name",
            "services[2].cost",
            "services[3]",
        ]

    def test_services_must_be_list(self) -> None:
        """Test a scalar service list is rejected."""
        errors = ConfigValidator.validate_services(None)
        assert errors[0].field == "services"

    def test_unknown_section(self) -> None:
        """Test unknown top-level sections are reported."""
        errors = ConfigValidator.validate_config({"activeTab": "shop"})
        assert errors[0].field == "activeTab"
