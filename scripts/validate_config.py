#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

from plan_tracker.config.loader import ConfigLoader
from plan_tracker.config.validation import ConfigValidator


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating plan tracker configuration in {loader.config_dir}...")

    config = loader.merge_config()
    issues = ConfigValidator.validate_config(config)

    if issues:
        print(f"❌ Found {len(issues)} validation issues:")
        for issue in issues:
            print(f"  • {issue.field}: {issue.message} (value: {issue.value})")
        sys.exit(1)

    for section, params in config.items():
        print(f"📋 {section}: {params}")

    print("\n🎉 Configuration validation passed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
