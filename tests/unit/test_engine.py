"""Unit tests for the contribution advisor."""

import pytest
from unittest.mock import Mock, patch

from aporte_app.config.defaults import RuleParams
from aporte_app.engine import ContributionAdvisor
from aporte_app.errors import (
    InvalidContributionError,
    MissingCollaboratorError,
    MissingTargetModelError,
    MissingWeightsError,
    PortfolioNotFoundError,
)
from aporte_app.models import FundStatus, PortfolioSnapshot, Position, PriceInfo, TargetAllocation
from aporte_app.providers import InMemoryPortfolioSource, InMemoryPriceReference, StaticTargetModel


class TestContributionAdvisor:
    """Test suite for the ContributionAdvisor class."""

    def test_advisor_initialization_with_config_dir(self) -> None:
        """Test advisor passes its config directory to the loader."""
        with patch('aporte_app.engine.ConfigLoader') as mock_config_loader:
            mock_config_loader.create.return_value = Mock()
            advisor = ContributionAdvisor(config_dir="/custom/path")
            assert advisor is not None
            mock_config_loader.create.assert_called_once_with("/custom/path")

    def test_recommend_sample_portfolio_sequential(
        self, sample_positions, sample_targets, price_reference, sequential_rules, run_ts
    ) -> None:
        """Test the full pipeline on the sample portfolio."""
        advisor = ContributionAdvisor(price_reference=price_reference)

        rec = advisor.recommend(1000.0, sample_positions, sample_targets, rules=sequential_rules, run_ts=run_ts)

        assert rec.fund_codes() == {
            "allocations": ["XPML11", "KNRI11"],
            "waiting_funds": ["MXRF11"],
            "above_target_funds": ["HGLG11", "OLDF11", "VISC11"],
        }
        assert [a.units_to_buy for a in rec.allocations] == [6, 2]
        assert [a.amount_to_invest for a in rec.allocations] == [630.0, 280.0]
        assert [a.fund.rank for a in rec.allocations] == [1, 2]
        assert rec.summary.total_invested == 910.0
        assert rec.summary.leftover_amount == pytest.approx(90.0)
        assert rec.summary.equilibrium_reached is False

    def test_recommend_sample_portfolio_proportional(
        self, sample_positions, sample_targets, price_reference, proportional_rules
    ) -> None:
        """Test proportional split of the sample portfolio."""
        advisor = ContributionAdvisor(price_reference=price_reference)

        rec = advisor.recommend(1000.0, sample_positions, sample_targets, rules=proportional_rules)

        assert [(a.fund_code, a.units_to_buy) for a in rec.allocations] == [("XPML11", 4), ("KNRI11", 3)]
        assert rec.summary.total_invested == 840.0
        assert rec.summary.leftover_amount == pytest.approx(160.0)

    def test_missing_target_model(self, sample_positions, price_reference) -> None:
        """Test absent target model is a distinct fatal error."""
        advisor = ContributionAdvisor(price_reference=price_reference)

        with pytest.raises(MissingTargetModelError):
            advisor.recommend(1000.0, sample_positions, None)

        with pytest.raises(MissingTargetModelError):
            advisor.recommend(1000.0, sample_positions, [])

    def test_repeated_lots_classified_as_one_fund(self, run_ts) -> None:
        """Test two lots of an overweight fund never reach BUY_NOW."""
        positions = [
            Position("AAAA11", 2000.0),
            Position("AAAA11", 2000.0),
            Position("BBBB11", 6000.0),
        ]
        targets = [
            TargetAllocation("AAAA11", "LOGISTICA", 30.0),
            TargetAllocation("BBBB11", "PAPEL", 70.0),
        ]
        reference = InMemoryPriceReference([
            PriceInfo("AAAA11", 100.0, 110.0),
            PriceInfo("BBBB11", 10.0, 12.0),
        ])
        advisor = ContributionAdvisor(price_reference=reference)

        rec = advisor.recommend(1000.0, positions, targets, run_ts=run_ts)

        assert rec.fund_codes()["allocations"] == ["BBBB11"]
        assert [f.fund_code for f in rec.above_target_funds] == ["AAAA11"]
        assert rec.allocations[0].fund.rank == 1

    def test_invalid_contribution(self, sample_positions, sample_targets, price_reference) -> None:
        """Test zero or negative contribution is rejected."""
        advisor = ContributionAdvisor(price_reference=price_reference)

        with pytest.raises(InvalidContributionError):
            advisor.recommend(0, sample_positions, sample_targets)

        with pytest.raises(InvalidContributionError):
            advisor.recommend(-50.0, sample_positions, sample_targets)

    def test_zero_weights(self, sample_positions, sample_targets, price_reference) -> None:
        """Test rules without weights are rejected."""
        advisor = ContributionAdvisor(price_reference=price_reference)
        rules = RuleParams(weight_imbalance=0, weight_discount=0)

        with pytest.raises(MissingWeightsError):
            advisor.recommend(1000.0, sample_positions, sample_targets, rules=rules)

    def test_empty_portfolio_buys_missing_funds(self, sample_targets, price_reference) -> None:
        """Test a new investor receives target funds with a discount."""
        advisor = ContributionAdvisor(price_reference=price_reference)

        rec = advisor.recommend(2000.0, [], sample_targets, rules=RuleParams(sequential_allocation=True))

        codes = [a.fund_code for a in rec.allocations]
        assert codes == ["KNRI11", "HGLG11", "XPML11"]
        assert all(a.fund.status == FundStatus.BUY_NOW for a in rec.allocations)
        assert "VISC11" in [f.fund_code for f in rec.above_target_funds]
        assert "MXRF11" in [f.fund_code for f in rec.waiting_funds]


class TestRecommendForPortfolio:
    """Test collaborator-driven recommendations."""

    def setup_method(self):
        self.snapshot = PortfolioSnapshot(
            portfolio_id="p-1",
            positions=(Position("AAAA11", 1300.0), Position("BBBB11", 8700.0)),
            total_value=10000.0,
        )
        self.targets = [
            TargetAllocation("AAAA11", "LOGISTICA", 30.0),
            TargetAllocation("BBBB11", "PAPEL", 70.0),
        ]
        self.prices = InMemoryPriceReference([
            PriceInfo("AAAA11", 100.0, 110.0),
            PriceInfo("BBBB11", 10.0, 9.0),
        ])

    def test_recommend_for_portfolio(self, run_ts) -> None:
        """Test portfolio resolution and profile loading."""
        advisor = ContributionAdvisor(
            price_reference=self.prices,
            target_model=StaticTargetModel(self.targets),
            portfolio_source=InMemoryPortfolioSource({"p-1": self.snapshot}),
        )

        rec = advisor.recommend_for_portfolio("p-1", 1000.0, profile="conservative", run_ts=run_ts)

        assert rec.rules.name == "Conservative"
        assert rec.allocations[0].fund_code == "AAAA11"
        assert rec.allocations[0].units_to_buy == 10
        assert rec.summary.leftover_amount is None

    def test_unknown_portfolio(self) -> None:
        """Test unresolved portfolio id."""
        advisor = ContributionAdvisor(
            price_reference=self.prices,
            target_model=StaticTargetModel(self.targets),
            portfolio_source=InMemoryPortfolioSource({}),
        )

        with pytest.raises(PortfolioNotFoundError):
            advisor.recommend_for_portfolio("missing", 1000.0)

    def test_no_target_model_for_portfolio(self) -> None:
        """Test target provider returning nothing."""
        advisor = ContributionAdvisor(
            price_reference=self.prices,
            target_model=StaticTargetModel(None),
            portfolio_source=InMemoryPortfolioSource({"p-1": self.snapshot}),
        )

        with pytest.raises(MissingTargetModelError) as exc_info:
            advisor.recommend_for_portfolio("p-1", 1000.0)

        assert exc_info.value.portfolio_id == "p-1"

    @pytest.mark.parametrize("missing", ["portfolio_source", "target_model"])
    def test_missing_collaborator_for_portfolio(self, missing) -> None:
        """Test portfolio resolution without one of its collaborators."""
        collaborators = {
            "price_reference": self.prices,
            "target_model": StaticTargetModel(self.targets),
            "portfolio_source": InMemoryPortfolioSource({"p-1": self.snapshot}),
        }
        collaborators[missing] = None
        advisor = ContributionAdvisor(**collaborators)

        with pytest.raises(MissingCollaboratorError) as exc_info:
            advisor.recommend_for_portfolio("p-1", 1000.0)

        assert exc_info.value.collaborator == missing
