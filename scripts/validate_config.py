#!/usr/bin/env python3
"""Rule profile validation script."""

import sys
from pathlib import Path

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from aporte_app.config.loader import ConfigLoader
from aporte_app.config.validation import ConfigValidator
from aporte_app.errors import ConfigurationError


def main():
    """Validate every profile declared in config/rules.yaml."""
    print("Validating rule profiles...")

    loader = ConfigLoader.create()
    rules_file = loader.config_dir / "rules.yaml"

    if not rules_file.exists():
        print(f"No rules file at {rules_file}, defaults only")
        sys.exit(0)

    with open(rules_file) as f:
        profiles = (yaml.safe_load(f) or {}).get("profiles", {})

    all_valid = True

    for profile in profiles:
        try:
            rules = loader.build_rules(profile)
            print(f"OK   {profile}: {rules.name} ({rules.strategy.value})")
        except ConfigurationError as e:
            print(f"FAIL {profile}: {e}")
            all_valid = False

    # Raw profile contents must not carry unknown keys either
    for profile, params in profiles.items():
        errors = ConfigValidator.validate_rule_params(params or {})
        for error in errors:
            print(f"  {profile}.{error.field}: {error.message} (value: {error.value})")
            all_valid = False

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
