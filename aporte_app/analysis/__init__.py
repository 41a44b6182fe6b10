"""Per-fund imbalance and discount calculations"""

from .discount import calculate_discount, calculate_discounts
from .imbalance import (
    calculate_imbalances,
    current_values_by_fund,
    identify_missing_funds,
    imbalance_report,
)

__all__ = [
    "calculate_imbalances",
    "current_values_by_fund",
    "identify_missing_funds",
    "imbalance_report",
    "calculate_discount",
    "calculate_discounts",
]
