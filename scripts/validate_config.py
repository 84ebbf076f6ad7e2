#!/usr/bin/env python3
"""Pricing configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import yaml

from coinpurse.config.loader import ConfigLoader
from coinpurse.errors import ConfigurationError
from coinpurse.logging import configure_logging


def main():
    """Main validation function."""
    configure_logging(level="WARNING", include_timestamp=False)
    print("Validating coinpurse pricing configuration...")

    loader = ConfigLoader.create()
    shops_file = loader.config_dir / "shops.yaml"

    shop_ids = ["UNKNOWN-SHOP"]  # Should use defaults
    if shops_file.exists():
        with open(shops_file) as f:
            shop_ids = list((yaml.safe_load(f) or {}).get("shops", {})) + shop_ids

    all_valid = True

    for shop_id in shop_ids:
        try:
            pricing = loader.load_pricing_config(shop_id)
            print(f"  {shop_id}: ok ({len(pricing.services)} services)")
        except ConfigurationError as e:
            print(f"  {shop_id}: {len(e.errors)} validation errors")
            for error in e.errors:
                print(f"    - {error.field}: {error.message} (value: {error.value})")
            all_valid = False

    if all_valid:
        print("All configuration validation passed")
        sys.exit(0)
    else:
        print("Configuration validation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
