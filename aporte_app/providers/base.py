"""Base classes for the external collaborators feeding the engine."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import PortfolioSnapshot, PriceInfo, TargetAllocation


class PriceReference(ABC):
    """Resolves the current and ceiling price of a fund."""

    @abstractmethod
    def resolve_price(self, fund_code: str) -> Optional[PriceInfo]:
        """
        Resolve price info for a fund.

        Args:
            fund_code: Fund to look up

        Returns:
            PriceInfo, or None when the reference has no entry for the fund.
            Implementations may raise PriceUnavailableError on lookup failure.
        """
        pass


class TargetModelProvider(ABC):
    """Supplies the target-allocation model for a portfolio."""

    @abstractmethod
    def get_target_model(self, portfolio_id: str) -> Optional[list[TargetAllocation]]:
        """
        Get target allocations with already-normalized sector tags.

        Returns:
            Target entries, or None/empty when no model is available
        """
        pass


class PortfolioSource(ABC):
    """Resolves a portfolio identifier into its current positions."""

    @abstractmethod
    def get_portfolio(self, portfolio_id: str) -> Optional[PortfolioSnapshot]:
        """Get the portfolio snapshot, or None if the portfolio is unknown."""
        pass
