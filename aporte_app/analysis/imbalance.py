"""Imbalance between ideal and current portfolio weights"""

from collections.abc import Iterable, Sequence
from typing import Optional

import structlog

from ..models import FundImbalance, Position, TargetAllocation
from ..utils.numeric import safe_percentage

logger = structlog.get_logger(__name__)

DEFAULT_SECTOR = "OTHER"


def current_values_by_fund(positions: Iterable[Position]) -> dict[str, float]:
    """Current value per fund code, summing repeated codes, in first-seen order."""
    values: dict[str, float] = {}
    for position in positions:
        values[position.fund_code] = values.get(position.fund_code, 0.0) + position.current_value
    return values


def _resolve_total(positions: Sequence[Position], total_value: Optional[float]) -> float:
    if total_value is not None and total_value > 0:
        return total_value
    return sum(p.current_value for p in positions)


def calculate_imbalances(
    positions: Sequence[Position],
    targets: Iterable[TargetAllocation],
    total_value: Optional[float] = None,
) -> list[FundImbalance]:
    """
    Calculate imbalance for every held fund.

    imbalance = ideal_pct - current_pct (percentage points)

    Positions sharing a fund code are summed into a single holding. A held
    fund missing from the target model gets ideal_pct = 0, so it shows up as
    overweight by its whole current weight.

    Args:
        positions: Current holdings
        targets: Target model entries
        total_value: Portfolio total; sum of position values when not supplied

    Returns:
        One record per held fund code, in first-seen order
    """
    if not positions:
        return []

    total = _resolve_total(positions, total_value)
    targets_by_code = {t.fund_code: t for t in targets}
    values = current_values_by_fund(positions)

    names: dict[str, str] = {}
    sectors: dict[str, str] = {}
    for position in positions:
        if position.name:
            names.setdefault(position.fund_code, position.name)
        if position.sector:
            sectors.setdefault(position.fund_code, position.sector)

    records = []
    for code, value in values.items():
        current_pct = safe_percentage(value, total)
        target = targets_by_code.get(code)
        ideal_pct = target.ideal_percentage if target else 0.0
        imbalance = ideal_pct - current_pct

        records.append(FundImbalance(
            fund_code=code,
            name=names.get(code) or (target.name if target else None) or code,
            sector=(target.sector if target else None) or sectors.get(code) or DEFAULT_SECTOR,
            current_pct=current_pct,
            ideal_pct=ideal_pct,
            imbalance=imbalance,
            priority_imbalance=abs(imbalance),
        ))

    return records


def identify_missing_funds(
    positions: Iterable[Position],
    targets: Iterable[TargetAllocation],
) -> list[FundImbalance]:
    """
    Build records for target model funds the portfolio does not hold yet.

    Each one is underweight by its entire ideal percentage.
    """
    held = {p.fund_code for p in positions}

    return [
        FundImbalance(
            fund_code=target.fund_code,
            name=target.name or target.fund_code,
            sector=target.sector or DEFAULT_SECTOR,
            current_pct=0.0,
            ideal_pct=target.ideal_percentage,
            imbalance=target.ideal_percentage,
            priority_imbalance=target.ideal_percentage,
        )
        for target in targets
        if target.fund_code not in held
    ]


def imbalance_report(
    positions: Sequence[Position],
    targets: Sequence[TargetAllocation],
    total_value: Optional[float] = None,
) -> list[FundImbalance]:
    """Held-fund records followed by missing-fund records."""
    held = calculate_imbalances(positions, targets, total_value)
    missing = identify_missing_funds(positions, targets)

    logger.debug(
        "Imbalance calculated",
        held_funds=[r.fund_code for r in held],
        missing_funds=[r.fund_code for r in missing],
    )

    return held + missing
