"""
Prioritization of funds for a contribution.

Merges imbalance and discount per fund into a weighted score, classifies each
fund into a decision state and ranks the funds worth buying now.

Classification precedence, first match wins:
    1. no ceiling price            -> DO_NOT_INVEST
    2. imbalance <= 0              -> DO_NOT_INVEST
    3. discount above the minimum  -> BUY_NOW
    4. otherwise                   -> WAIT_FOR_DISCOUNT
"""

from collections.abc import Mapping, Sequence
from functools import cmp_to_key

from ..config.defaults import TIE_THRESHOLD_PP, RuleParams
from ..logging.config import get_decision_logger, log_fund_classification
from ..models import (
    DiscountStatus,
    FundDiscount,
    FundImbalance,
    FundStatus,
    PrioritizedFund,
)
from .justification import build_justification

decision_logger = get_decision_logger(__name__, subsystem="prioritization")


def score_fund(imbalance: FundImbalance, discount: FundDiscount, rules: RuleParams) -> float:
    """Weighted score: priority imbalance and priority discount, weights in 0-100."""
    return (
        imbalance.priority_imbalance * (rules.weight_imbalance / 100.0)
        + discount.priority_discount * (rules.weight_discount / 100.0)
    )


def classify_fund(
    imbalance: FundImbalance,
    discount: FundDiscount,
    min_discount_pct: float = 0.0,
) -> tuple[FundStatus, str]:
    """
    Classify a fund into its decision state.

    Returns:
        Tuple of (status, reason) where reason names the rule that matched
    """
    if discount.status == DiscountStatus.NO_CEILING:
        return FundStatus.DO_NOT_INVEST, "no_ceiling_price"

    if imbalance.imbalance <= 0:
        return FundStatus.DO_NOT_INVEST, "not_underweight"

    if discount.discount_pct is not None and discount.discount_pct > min_discount_pct:
        return FundStatus.BUY_NOW, "underweight_and_discounted"

    return FundStatus.WAIT_FOR_DISCOUNT, "underweight_without_discount"


def compare_buy_now(
    a: PrioritizedFund,
    b: PrioritizedFund,
    tie_threshold_pp: float = TIE_THRESHOLD_PP,
) -> float:
    """
    Ordering for BUY_NOW funds.

    Larger priority imbalance first. When two imbalances are within
    tie_threshold_pp of each other, the larger discount goes first.
    """
    diff_imbalance = b.priority_imbalance - a.priority_imbalance
    if abs(diff_imbalance) > tie_threshold_pp:
        return diff_imbalance
    return (b.discount_pct or 0.0) - (a.discount_pct or 0.0)


def _merge(
    imbalance: FundImbalance,
    discount: FundDiscount,
    rules: RuleParams,
) -> PrioritizedFund:
    status, reason = classify_fund(imbalance, discount, rules.min_acceptable_discount_pct)

    log_fund_classification(
        decision_logger,
        fund_code=imbalance.fund_code,
        status=status.value,
        reason=reason,
        context={
            "current_pct": round(imbalance.current_pct, 4),
            "ideal_pct": imbalance.ideal_pct,
            "discount_pct": discount.discount_pct,
        },
    )

    return PrioritizedFund(
        fund_code=imbalance.fund_code,
        name=imbalance.name,
        sector=imbalance.sector,
        current_pct=imbalance.current_pct,
        ideal_pct=imbalance.ideal_pct,
        imbalance=imbalance.imbalance,
        priority_imbalance=imbalance.priority_imbalance,
        current_price=discount.current_price,
        ceiling_price=discount.ceiling_price,
        discount_pct=discount.discount_pct,
        discount_status=discount.status,
        priority_discount=discount.priority_discount,
        score=score_fund(imbalance, discount, rules),
        status=status,
        justification=build_justification(imbalance, discount, status),
    )


def prioritize_funds(
    imbalances: Sequence[FundImbalance],
    discounts: Mapping[str, FundDiscount],
    rules: RuleParams,
    tie_threshold_pp: float = TIE_THRESHOLD_PP,
) -> list[PrioritizedFund]:
    """
    Score, classify and order funds.

    Args:
        imbalances: Imbalance records, held and missing funds
        discounts: Discount records keyed by fund code; a fund without one is
            treated as having no ceiling price
        rules: Weights and discount gate
        tie_threshold_pp: Imbalance difference treated as a tie

    Returns:
        BUY_NOW funds ranked 1..N, then WAIT_FOR_DISCOUNT funds by imbalance,
        then DO_NOT_INVEST funds in input order
    """
    merged = [
        _merge(fund, discounts.get(fund.fund_code) or FundDiscount.no_ceiling(fund.fund_code), rules)
        for fund in imbalances
    ]

    buy_now = [f for f in merged if f.status == FundStatus.BUY_NOW]
    waiting = [f for f in merged if f.status == FundStatus.WAIT_FOR_DISCOUNT]
    do_not_invest = [f for f in merged if f.status == FundStatus.DO_NOT_INVEST]

    buy_now.sort(key=cmp_to_key(lambda a, b: compare_buy_now(a, b, tie_threshold_pp)))
    waiting.sort(key=lambda f: f.priority_imbalance, reverse=True)

    ranked = [fund.with_rank(rank) for rank, fund in enumerate(buy_now, start=1)]

    decision_logger.info(
        "Funds prioritized",
        buy_now=[f.fund_code for f in ranked],
        wait_for_discount=[f.fund_code for f in waiting],
        do_not_invest=[f.fund_code for f in do_not_invest],
    )

    return ranked + waiting + do_not_invest
