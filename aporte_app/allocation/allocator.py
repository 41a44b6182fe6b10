"""
Allocation of a contribution budget across BUY_NOW funds.

Only BUY_NOW funds receive money. Each fund's gap is the value it is missing
to reach its ideal weight in the projected portfolio (current total plus the
contribution). Amounts are rounded down to whole units; a fund whose amount
does not buy a single unit is skipped and the budget stays untouched for the
next fund.

Strategies:
    SEQUENTIAL    fill each fund's gap in rank order until the budget runs out
    PROPORTIONAL  split the budget in proportion to each fund's gap
"""

import math
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, Optional

from ..analysis.imbalance import current_values_by_fund
from ..config.defaults import ALGORITHM_VERSION, TIE_THRESHOLD_PP, AllocationStrategy, RuleParams
from ..errors import InvalidContributionError
from ..logging.config import get_decision_logger, log_allocation_decision
from ..models import (
    AllocationResult,
    FundStatus,
    Position,
    PrioritizedFund,
    Recommendation,
    RecommendationSummary,
)
from ..utils.numeric import safe_percentage, safe_ratio, whole_units
from ..utils.time import get_run_time

decision_logger = get_decision_logger(__name__, subsystem="allocation")


def validate_contribution(amount: Any) -> float:
    """
    Reject contribution budgets that cannot be allocated.

    Raises:
        InvalidContributionError: amount is not a finite number greater than 0
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidContributionError(
            f"Contribution must be a number, got {type(amount).__name__}", amount=amount
        )
    if math.isnan(amount) or math.isinf(amount):
        raise InvalidContributionError("Contribution must be finite", amount=amount)
    if amount <= 0:
        raise InvalidContributionError(
            f"Contribution must be greater than zero, got {amount}", amount=amount
        )
    return float(amount)


def compute_gaps(
    funds: Iterable[PrioritizedFund],
    current_values: dict[str, float],
    projected_total: float,
) -> dict[str, float]:
    """
    Value each fund is missing to reach its ideal weight.

    gap = max(0, ideal_pct / 100 * projected_total - current_value)
    """
    return {
        fund.fund_code: max(
            0.0,
            fund.ideal_pct / 100.0 * projected_total - current_values.get(fund.fund_code, 0.0),
        )
        for fund in funds
    }


def _requested_amount(
    strategy: AllocationStrategy,
    gap: float,
    budget: float,
    remaining: float,
    sum_of_gaps: float,
) -> float:
    if strategy == AllocationStrategy.SEQUENTIAL:
        return min(gap, remaining)

    share = safe_ratio(gap, sum_of_gaps)
    return min(budget * share, gap, remaining)


def allocate_contribution(
    prioritized: Sequence[PrioritizedFund],
    budget: float,
    positions: Sequence[Position],
    rules: RuleParams,
    total_value: Optional[float] = None,
    tie_threshold_pp: float = TIE_THRESHOLD_PP,
    run_ts: Optional[datetime] = None,
) -> Recommendation:
    """
    Distribute the budget and assemble the recommendation.

    Args:
        prioritized: Output of prioritize_funds, BUY_NOW funds in rank order
        budget: Contribution amount, must be > 0
        positions: Current holdings, source of each fund's current value
        rules: Strategy and equilibrium tolerance
        total_value: Current portfolio total; sum of positions when not supplied
        tie_threshold_pp: Recorded in the recommendation metadata
        run_ts: Timestamp to stamp on the recommendation

    Returns:
        Recommendation with allocations, waiting funds and above-target funds

    Raises:
        InvalidContributionError: budget is zero, negative or not a number
    """
    budget = validate_contribution(budget)

    buy_now = [f for f in prioritized if f.status == FundStatus.BUY_NOW]
    waiting = tuple(f for f in prioritized if f.status == FundStatus.WAIT_FOR_DISCOUNT)
    above_target = tuple(f for f in prioritized if f.status == FundStatus.DO_NOT_INVEST)

    current_values = current_values_by_fund(positions)
    if total_value is None or total_value <= 0:
        total_value = sum(current_values.values())
    projected_total = total_value + budget

    strategy = rules.strategy
    gaps = compute_gaps(buy_now, current_values, projected_total)
    sum_of_gaps = sum(gaps.values())

    remaining = budget
    invested = 0.0
    amounts: list[float] = []
    allocations: list[AllocationResult] = []

    for fund in buy_now:
        if remaining <= 0:
            break

        requested = _requested_amount(strategy, gaps[fund.fund_code], budget, remaining, sum_of_gaps)
        if requested <= 0:
            log_allocation_decision(
                decision_logger, fund.fund_code, False, requested, 0, "no_gap"
            )
            continue

        units = whole_units(requested, fund.current_price)
        # Float subtraction on remaining may sit an ulp above the true remainder
        while units > 0 and math.fsum(amounts + [units * fund.current_price]) > budget:
            units -= 1
        if units == 0:
            log_allocation_decision(
                decision_logger, fund.fund_code, False, requested, 0, "below_unit_price",
                context={"unit_price": fund.current_price},
            )
            continue

        amount = units * fund.current_price
        current_value = current_values.get(fund.fund_code, 0.0)
        allocations.append(AllocationResult(
            fund=fund,
            amount_to_invest=amount,
            units_to_buy=units,
            post_contribution_pct=safe_percentage(current_value + amount, projected_total),
        ))
        amounts.append(amount)
        invested = math.fsum(amounts)
        remaining = budget - invested

        log_allocation_decision(
            decision_logger, fund.fund_code, True, requested, units, strategy.value,
            context={"amount": amount, "remaining": remaining},
        )

    equilibrium_reached = all(
        abs(a.post_contribution_pct - a.fund.ideal_pct) <= rules.imbalance_tolerance_pct
        for a in allocations
    )

    summary = RecommendationSummary(
        total_invested=invested,
        recommended_funds_count=len(allocations),
        equilibrium_reached=equilibrium_reached,
        leftover_amount=remaining if remaining > 0 else None,
    )

    decision_logger.info(
        "Contribution allocated",
        strategy=strategy.value,
        budget=budget,
        total_invested=summary.total_invested,
        funds=summary.recommended_funds_count,
        leftover=summary.leftover_amount,
        equilibrium_reached=equilibrium_reached,
    )

    return Recommendation(
        allocations=tuple(allocations),
        waiting_funds=waiting,
        above_target_funds=above_target,
        summary=summary,
        rules=rules,
        tie_threshold_pp=tie_threshold_pp,
        timestamp=get_run_time(run_ts),
        algorithm_version=ALGORITHM_VERSION,
    )
