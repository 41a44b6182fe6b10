"""
Main recommendation engine coordinator.

Orchestrates the contribution pipeline:
Positions + Target Model → Imbalance ┐
Fund Codes + Price Reference → Discount ┴→ Prioritization → Allocation → Recommendation
"""

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import structlog

from .allocation import allocate_contribution, validate_contribution
from .analysis import calculate_discounts, imbalance_report
from .config.defaults import TIE_THRESHOLD_PP, RuleParams
from .config.loader import ConfigLoader
from .errors import (
    MissingCollaboratorError,
    MissingTargetModelError,
    MissingWeightsError,
    PortfolioNotFoundError,
)
from .models import Position, Recommendation, TargetAllocation
from .prioritization import prioritize_funds
from .providers.base import PortfolioSource, PriceReference, TargetModelProvider

logger = structlog.get_logger(__name__)


class ContributionAdvisor:
    """
    Entry point for contribution recommendations.

    Holds no state between calls besides its collaborators and rule loader.
    Each call to recommend() is a pure computation over its inputs.
    """

    def __init__(
        self,
        price_reference: Optional[PriceReference] = None,
        target_model: Optional[TargetModelProvider] = None,
        portfolio_source: Optional[PortfolioSource] = None,
        config_dir: Optional[Path] = None,
        tie_threshold_pp: float = TIE_THRESHOLD_PP,
    ) -> None:
        """Initialize the advisor with its collaborators."""
        self.logger = logger
        self.price_reference = price_reference
        self.target_model = target_model
        self.portfolio_source = portfolio_source
        self.config_loader = ConfigLoader.create(config_dir)
        self.tie_threshold_pp = tie_threshold_pp

    def load_rules(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> RuleParams:
        """Build a validated rule set from defaults, profile and overrides."""
        return self.config_loader.build_rules(profile, overrides)

    def recommend(
        self,
        contribution: float,
        positions: Sequence[Position],
        targets: Optional[Sequence[TargetAllocation]],
        price_reference: Optional[PriceReference] = None,
        rules: Optional[RuleParams] = None,
        total_value: Optional[float] = None,
        run_ts: Optional[datetime] = None,
    ) -> Recommendation:
        """
        Produce a recommendation from already-resolved inputs.

        Args:
            contribution: Cash available for this run, must be > 0
            positions: Current holdings
            targets: Target-allocation model
            price_reference: Overrides the advisor's price reference
            rules: Rule set; defaults when not supplied
            total_value: Portfolio total; sum of positions when not supplied
            run_ts: Timestamp for the recommendation metadata

        Raises:
            InvalidContributionError: contribution is not a positive number
            MissingTargetModelError: no target model is available
            MissingWeightsError: both score weights are zero
            MissingCollaboratorError: no price reference is available
        """
        contribution = validate_contribution(contribution)

        if rules is None:
            rules = self.load_rules()
        if rules.weight_imbalance <= 0 and rules.weight_discount <= 0:
            raise MissingWeightsError("no score weights configured", context={"rules": rules.name})

        if not targets:
            raise MissingTargetModelError()

        price_reference = price_reference or self.price_reference
        if price_reference is None:
            raise MissingCollaboratorError(
                "A price reference is required", collaborator="price_reference"
            )

        imbalances = imbalance_report(positions, targets, total_value)
        discounts = calculate_discounts([f.fund_code for f in imbalances], price_reference)
        prioritized = prioritize_funds(imbalances, discounts, rules, self.tie_threshold_pp)

        recommendation = allocate_contribution(
            prioritized,
            contribution,
            positions,
            rules,
            total_value=total_value,
            tie_threshold_pp=self.tie_threshold_pp,
            run_ts=run_ts,
        )

        self.logger.info(
            "Recommendation generated",
            contribution=contribution,
            rules=rules.name,
            funds_evaluated=len(prioritized),
            allocations=recommendation.summary.recommended_funds_count,
            total_invested=recommendation.summary.total_invested,
        )

        return recommendation

    def recommend_for_portfolio(
        self,
        portfolio_id: str,
        contribution: float,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None,
        run_ts: Optional[datetime] = None,
    ) -> Recommendation:
        """
        Resolve a portfolio through the collaborators and recommend for it.

        Raises:
            PortfolioNotFoundError: the portfolio source does not know the id
            MissingTargetModelError: no target model for the portfolio
            MissingCollaboratorError: portfolio source or target model not supplied
        """
        contribution = validate_contribution(contribution)
        rules = self.load_rules(profile, overrides)

        if self.portfolio_source is None:
            raise MissingCollaboratorError(
                "A portfolio source is required", collaborator="portfolio_source"
            )
        if self.target_model is None:
            raise MissingCollaboratorError(
                "A target model provider is required", collaborator="target_model"
            )

        snapshot = self.portfolio_source.get_portfolio(portfolio_id)
        if snapshot is None:
            raise PortfolioNotFoundError(
                f"Portfolio {portfolio_id} not found", portfolio_id=portfolio_id
            )

        targets = self.target_model.get_target_model(portfolio_id)
        if not targets:
            self.logger.error("No target model available", portfolio_id=portfolio_id)
            raise MissingTargetModelError(portfolio_id=portfolio_id)

        return self.recommend(
            contribution,
            snapshot.positions,
            targets,
            rules=rules,
            total_value=snapshot.total_value,
            run_ts=run_ts,
        )
