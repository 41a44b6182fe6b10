"""Distribution of the contribution budget across ranked funds"""

from .allocator import (
    allocate_contribution,
    compute_gaps,
    validate_contribution,
)

__all__ = [
    "allocate_contribution",
    "compute_gaps",
    "validate_contribution",
]
