"""
Error classification for the contribution director.

Configuration errors are fatal and surfaced to the caller as a single typed
exception. Data quality errors are recovered locally, one fund at a time.
"""

from .configuration import (
    ConfigurationError,
    MissingTargetModelError,
    MissingWeightsError,
    MissingCollaboratorError,
    InvalidRulesError,
    InvalidContributionError,
    PortfolioNotFoundError,
)
from .data_quality import (
    DataQualityError,
    PriceUnavailableError,
    MalformedPositionError,
)

__all__ = [
    # Fatal errors
    "ConfigurationError",
    "MissingTargetModelError",
    "MissingWeightsError",
    "MissingCollaboratorError",
    "InvalidRulesError",
    "InvalidContributionError",
    "PortfolioNotFoundError",
    # Data Quality Errors
    "DataQualityError",
    "PriceUnavailableError",
    "MalformedPositionError",
]
