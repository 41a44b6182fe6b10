"""Scoring, classification and ranking of candidate funds"""

from .justification import build_justification
from .ranking import classify_fund, compare_buy_now, prioritize_funds, score_fund

__all__ = [
    "build_justification",
    "classify_fund",
    "compare_buy_now",
    "prioritize_funds",
    "score_fund",
]
