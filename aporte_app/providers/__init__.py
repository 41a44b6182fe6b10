"""Collaborator interfaces supplying positions, target models and prices."""

from .base import PortfolioSource, PriceReference, TargetModelProvider
from .memory import InMemoryPortfolioSource, InMemoryPriceReference, StaticTargetModel
from .normalizer import normalize_positions, normalize_targets

__all__ = [
    "PortfolioSource",
    "PriceReference",
    "TargetModelProvider",
    "InMemoryPortfolioSource",
    "InMemoryPriceReference",
    "StaticTargetModel",
    "normalize_positions",
    "normalize_targets",
]
