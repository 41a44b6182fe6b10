"""
Read-only input models supplied by external collaborators.

Positions come from the portfolio store, target allocations from the target
model, and price info from the price reference. None of them are persisted
or mutated here.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """Current holding of a single fund."""
    fund_code: str
    current_value: float
    name: Optional[str] = None
    sector: Optional[str] = None


@dataclass(frozen=True)
class TargetAllocation:
    """Ideal weight of a fund in the target model."""
    fund_code: str
    sector: str
    ideal_percentage: float
    name: Optional[str] = None


@dataclass(frozen=True)
class PriceInfo:
    """Market price and configured ceiling for a fund."""
    fund_code: str
    current_price: float
    ceiling_price: Optional[float] = None  # absent or <= 0 means no ceiling

    @property
    def has_ceiling(self) -> bool:
        """True when a usable ceiling price is configured."""
        return self.ceiling_price is not None and self.ceiling_price > 0


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Positions of one portfolio as resolved by the portfolio store."""
    portfolio_id: str
    positions: tuple[Position, ...]
    total_value: Optional[float] = None

    def resolved_total(self) -> float:
        """Stored total value, or the sum of position values when absent."""
        if self.total_value is not None and self.total_value > 0:
            return self.total_value
        return sum(p.current_value for p in self.positions)
