"""
Derived per-fund analysis records.

These are built fresh on every recommendation run. A fund's status is never
carried over from a previous run.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class DiscountStatus(str, Enum):
    """Price position relative to the ceiling price."""
    NO_CEILING = "no_ceiling"
    DISCOUNTED = "discounted"
    NOT_DISCOUNTED = "not_discounted"


class FundStatus(str, Enum):
    """Decision state of a fund for the current contribution."""
    BUY_NOW = "buy_now"
    WAIT_FOR_DISCOUNT = "wait_for_discount"
    DO_NOT_INVEST = "do_not_invest"


@dataclass(frozen=True)
class FundImbalance:
    """Gap between a fund's ideal and current weight, in percentage points."""
    fund_code: str
    name: str
    sector: str
    current_pct: float
    ideal_pct: float
    imbalance: float             # ideal - current; positive = underweight
    priority_imbalance: float    # abs(imbalance)

    @property
    def is_underweight(self) -> bool:
        return self.imbalance > 0


@dataclass(frozen=True)
class FundDiscount:
    """Discount of the current price against the ceiling price."""
    fund_code: str
    current_price: float
    ceiling_price: Optional[float]
    discount_pct: Optional[float]
    status: DiscountStatus
    priority_discount: float = 0.0   # max(0, discount_pct)

    @classmethod
    def no_ceiling(cls, fund_code: str, current_price: float = 0.0) -> "FundDiscount":
        """Record for a fund without a usable ceiling price."""
        return cls(
            fund_code=fund_code,
            current_price=current_price,
            ceiling_price=None,
            discount_pct=None,
            status=DiscountStatus.NO_CEILING,
            priority_discount=0.0,
        )


@dataclass(frozen=True)
class PrioritizedFund:
    """Imbalance and discount merged into a scored, classified fund."""
    fund_code: str
    name: str
    sector: str
    current_pct: float
    ideal_pct: float
    imbalance: float
    priority_imbalance: float
    current_price: float
    ceiling_price: Optional[float]
    discount_pct: Optional[float]
    discount_status: DiscountStatus
    priority_discount: float
    score: float
    status: FundStatus
    justification: str
    rank: Optional[int] = None

    def with_rank(self, rank: int) -> "PrioritizedFund":
        """Copy of this fund with its BUY_NOW rank set."""
        return replace(self, rank=rank)
