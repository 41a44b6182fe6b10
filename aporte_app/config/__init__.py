"""Rule configuration: defaults, YAML profiles and validation."""

from .defaults import (
    ALGORITHM_VERSION,
    TIE_THRESHOLD_PP,
    AllocationStrategy,
    RuleParams,
    get_default_rules,
)
from .loader import ConfigLoader
from .validation import ConfigValidator, ValidationError

__all__ = [
    "ALGORITHM_VERSION",
    "TIE_THRESHOLD_PP",
    "AllocationStrategy",
    "RuleParams",
    "get_default_rules",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationError",
]
