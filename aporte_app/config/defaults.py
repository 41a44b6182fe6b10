"""Default rule parameters for the contribution director."""

from dataclasses import dataclass
from enum import Enum

# Version tag stamped on every recommendation
ALGORITHM_VERSION = "1.0.0"

# Two BUY_NOW funds whose priority imbalance differs by at most this many
# percentage points are ranked by discount instead. Tunable, not derived.
TIE_THRESHOLD_PP = 0.5


class AllocationStrategy(str, Enum):
    """How the contribution budget is spread across BUY_NOW funds."""
    SEQUENTIAL = "sequential"
    PROPORTIONAL = "proportional"


@dataclass(frozen=True)
class RuleParams:
    """Rule set applied to a single recommendation run."""
    name: str = "Default rules"
    description: str = "Initial system configuration"

    # Score weights, each 0-100
    weight_imbalance: float = 60.0                   # Weight of |ideal - current|
    weight_discount: float = 40.0                    # Weight of positive discount

    # Recommendation limits
    max_funds_limit: int = 5                         # Display cap for callers, in metadata
    sequential_allocation: bool = False              # Fill #1 before moving to #2

    # Balancing
    imbalance_tolerance_pct: float = 2.0             # Equilibrium band, in pp

    # Discount gate for BUY_NOW
    min_acceptable_discount_pct: float = 0.0         # 0 = any positive discount

    @property
    def strategy(self) -> AllocationStrategy:
        """Allocation strategy selected by the sequential flag."""
        if self.sequential_allocation:
            return AllocationStrategy.SEQUENTIAL
        return AllocationStrategy.PROPORTIONAL


def get_default_rules() -> RuleParams:
    """Get the default rule set instance."""
    return RuleParams()
