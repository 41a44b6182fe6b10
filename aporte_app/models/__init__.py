"""Data models for portfolio inputs, per-fund analysis and recommendations."""

from .analysis import (
    DiscountStatus,
    FundDiscount,
    FundImbalance,
    FundStatus,
    PrioritizedFund,
)
from .portfolio import PortfolioSnapshot, Position, PriceInfo, TargetAllocation
from .recommendation import AllocationResult, Recommendation, RecommendationSummary

__all__ = [
    "Position",
    "TargetAllocation",
    "PriceInfo",
    "PortfolioSnapshot",
    "FundImbalance",
    "FundDiscount",
    "DiscountStatus",
    "FundStatus",
    "PrioritizedFund",
    "AllocationResult",
    "RecommendationSummary",
    "Recommendation",
]
