"""Allocation results and the recommendation returned to callers."""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..config.defaults import RuleParams
from ..utils.time import format_timestamp
from .analysis import PrioritizedFund


@dataclass(frozen=True)
class AllocationResult:
    """Money assigned to one BUY_NOW fund, in whole units."""
    fund: PrioritizedFund
    amount_to_invest: float      # units_to_buy * current_price
    units_to_buy: int
    post_contribution_pct: float

    @property
    def fund_code(self) -> str:
        return self.fund.fund_code


@dataclass(frozen=True)
class RecommendationSummary:
    """Totals for a recommendation run."""
    total_invested: float
    recommended_funds_count: int
    equilibrium_reached: bool
    leftover_amount: Optional[float] = None


@dataclass(frozen=True)
class Recommendation:
    """Complete output of a recommendation run."""
    allocations: tuple[AllocationResult, ...]
    waiting_funds: tuple[PrioritizedFund, ...]
    above_target_funds: tuple[PrioritizedFund, ...]
    summary: RecommendationSummary
    rules: RuleParams
    tie_threshold_pp: float
    timestamp: datetime
    algorithm_version: str

    def fund_codes(self) -> dict[str, list[str]]:
        """Fund codes per output bucket."""
        return {
            "allocations": [a.fund_code for a in self.allocations],
            "waiting_funds": [f.fund_code for f in self.waiting_funds],
            "above_target_funds": [f.fund_code for f in self.above_target_funds],
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation for presentation layers."""
        summary = asdict(self.summary)
        if summary["leftover_amount"] is None:
            del summary["leftover_amount"]

        allocations = []
        for allocation in self.allocations:
            entry = _fund_to_dict(allocation.fund)
            entry.update(
                amount_to_invest=allocation.amount_to_invest,
                units_to_buy=allocation.units_to_buy,
                post_contribution_pct=allocation.post_contribution_pct,
            )
            allocations.append(entry)

        return {
            "allocations": allocations,
            "waiting_funds": [_fund_to_dict(f) for f in self.waiting_funds],
            "above_target_funds": [_fund_to_dict(f) for f in self.above_target_funds],
            "summary": summary,
            "metadata": {
                "rules": asdict(self.rules),
                "strategy": self.rules.strategy.value,
                "tie_threshold_pp": self.tie_threshold_pp,
                "timestamp": format_timestamp(self.timestamp),
                "algorithm_version": self.algorithm_version,
            },
        }


def _fund_to_dict(fund: PrioritizedFund) -> dict[str, Any]:
    data = asdict(fund)
    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
    return data
