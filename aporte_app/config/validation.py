"""Rule parameter validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import RuleParams


@dataclass(frozen=True)
class ValidationError:
    """Represents a rule validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates rule parameters."""

    KNOWN_FIELDS = frozenset(f.name for f in fields(RuleParams))

    @staticmethod
    def validate_rule_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rule parameters."""
        errors = []

        for key in params:
            if key not in ConfigValidator.KNOWN_FIELDS:
                errors.append(ValidationError(
                    field=key,
                    message="Unknown rule parameter",
                    value=params[key]
                ))

        # Validate weights
        for weight_field in ("weight_imbalance", "weight_discount"):
            if weight_field in params:
                value = params[weight_field]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=weight_field,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        # Validate max_funds_limit
        if "max_funds_limit" in params:
            value = params["max_funds_limit"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="max_funds_limit",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate sequential_allocation
        if "sequential_allocation" in params:
            value = params["sequential_allocation"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="sequential_allocation",
                    message="Must be a boolean",
                    value=value
                ))

        # Validate imbalance_tolerance_pct
        if "imbalance_tolerance_pct" in params:
            value = params["imbalance_tolerance_pct"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="imbalance_tolerance_pct",
                    message="Must be a non-negative number",
                    value=value
                ))

        # Validate min_acceptable_discount_pct
        if "min_acceptable_discount_pct" in params:
            value = params["min_acceptable_discount_pct"]
            if not _is_number(value) or value < 0 or value >= 100:
                errors.append(ValidationError(
                    field="min_acceptable_discount_pct",
                    message="Must be a number between 0 and 100",
                    value=value
                ))

        for label_field in ("name", "description"):
            if label_field in params and not isinstance(params[label_field], str):
                errors.append(ValidationError(
                    field=label_field,
                    message="Must be a string",
                    value=params[label_field]
                ))

        return errors

    @staticmethod
    def weights_configured(params: dict[str, Any]) -> bool:
        """True when at least one score weight is present and non-zero."""
        weights = [params.get("weight_imbalance"), params.get("weight_discount")]
        return any(_is_number(w) and w > 0 for w in weights)
