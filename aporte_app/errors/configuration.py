"""
Fatal error classifications.

These exceptions abort a recommendation run. The caller receives exactly one of
them instead of an empty or misleading recommendation.
"""

from typing import Any, Optional


class ConfigurationError(Exception):
    """Base class for missing or invalid configuration."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class MissingTargetModelError(ConfigurationError):
    """No target-allocation model is available for the portfolio."""

    def __init__(self, message: str = "no target model available",
                 portfolio_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.portfolio_id = portfolio_id


class MissingWeightsError(ConfigurationError):
    """Neither the imbalance nor the discount weight is configured."""


class MissingCollaboratorError(ConfigurationError):
    """A collaborator required by the call was not supplied."""

    def __init__(self, message: str, collaborator: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.collaborator = collaborator


class InvalidRulesError(ConfigurationError):
    """Rule parameters failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class InvalidContributionError(Exception):
    """Contribution budget is zero, negative or not a number."""

    def __init__(self, message: str, amount: Any = None):
        super().__init__(message)
        self.amount = amount
        self.recoverable = False


class PortfolioNotFoundError(Exception):
    """Portfolio identifier could not be resolved by the portfolio source."""

    def __init__(self, message: str, portfolio_id: Optional[str] = None):
        super().__init__(message)
        self.portfolio_id = portfolio_id
        self.recoverable = False
