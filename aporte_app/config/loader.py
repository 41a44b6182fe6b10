"""Rule configuration loader with 3-tier parameter precedence."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import InvalidRulesError, MissingWeightsError
from .defaults import RuleParams, get_default_rules
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages rule loading with 3-tier precedence."""

    config_dir: Path
    defaults: RuleParams

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_rules(),
        )

    def load_profile(self, profile: str) -> dict[str, Any]:
        """Load a named rule profile from rules.yaml."""
        rules_file = self.config_dir / "rules.yaml"

        if not rules_file.exists():
            return {}

        with open(rules_file) as f:
            rules_config = yaml.safe_load(f) or {}

        profile_config = rules_config.get("profiles", {}).get(profile)
        if profile_config is None:
            logger.warning("Rule profile not found, using defaults", profile=profile)
            return {}

        return profile_config  # type: ignore[no-any-return]

    def merge_config(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge rule parameters with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Named profile from rules.yaml
        3. Built-in defaults (lowest priority)
        """
        config = asdict(self.defaults)

        if profile:
            config.update(self.load_profile(profile))

        if overrides:
            config.update(overrides)

        return config

    def build_rules(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> RuleParams:
        """
        Merge, validate and freeze a rule set.

        Raises:
            MissingWeightsError: Both score weights are absent or zero
            InvalidRulesError: Any parameter is out of range or unknown
        """
        config = self.merge_config(profile, overrides)

        if not ConfigValidator.weights_configured(config):
            raise MissingWeightsError(
                "no score weights configured",
                context={"profile": profile}
            )

        errors = ConfigValidator.validate_rule_params(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise InvalidRulesError(
                "Rule parameter validation failed: " + "; ".join(error_msgs),
                errors=errors,
                context={"profile": profile}
            )

        return RuleParams(**config)
