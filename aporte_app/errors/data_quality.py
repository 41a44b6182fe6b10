"""
Data quality error classifications for per-fund inputs.

These exceptions describe problems with a single fund's data. They are caught
where the fund is evaluated and never abort the whole batch.
"""

from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class PriceUnavailableError(DataQualityError):
    """Price reference could not resolve a fund."""

    def __init__(self, message: str, fund_code: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.fund_code = fund_code


class MalformedPositionError(DataQualityError):
    """Raw position record is missing its code or value."""

    def __init__(self, message: str, raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
