"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone

from aporte_app.config.defaults import RuleParams
from aporte_app.models import Position, PriceInfo, TargetAllocation
from aporte_app.providers import InMemoryPriceReference


@pytest.fixture
def run_ts() -> datetime:
    """Fixed timestamp so recommendations compare equal."""
    return datetime(2025, 10, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_positions() -> list[Position]:
    """Held positions totalling 10000."""
    return [
        Position(fund_code="HGLG11", current_value=3000.0, name="CSHG Logistica"),
        Position(fund_code="KNRI11", current_value=2500.0, name="Kinea Renda"),
        Position(fund_code="MXRF11", current_value=1000.0, name="Maxi Renda"),
        Position(fund_code="XPML11", current_value=1500.0, name="XP Malls"),
        Position(fund_code="OLDF11", current_value=2000.0, name="Legacy Fund"),
    ]


@pytest.fixture
def sample_targets() -> list[TargetAllocation]:
    """Target model; VISC11 is not held yet, OLDF11 is not in the model."""
    return [
        TargetAllocation(fund_code="HGLG11", sector="LOGISTICA", ideal_percentage=25.0),
        TargetAllocation(fund_code="KNRI11", sector="HIBRIDOS", ideal_percentage=30.0),
        TargetAllocation(fund_code="MXRF11", sector="PAPEL", ideal_percentage=15.0),
        TargetAllocation(fund_code="XPML11", sector="SHOPPING", ideal_percentage=20.0),
        TargetAllocation(fund_code="VISC11", sector="SHOPPING", ideal_percentage=10.0, name="Vinci Shopping"),
    ]


@pytest.fixture
def sample_prices() -> list[PriceInfo]:
    """Prices with a mix of discounted, above-ceiling and missing ceilings."""
    return [
        PriceInfo(fund_code="HGLG11", current_price=160.0, ceiling_price=170.0),
        PriceInfo(fund_code="KNRI11", current_price=140.0, ceiling_price=150.0),
        PriceInfo(fund_code="MXRF11", current_price=10.0, ceiling_price=9.5),
        PriceInfo(fund_code="XPML11", current_price=105.0, ceiling_price=115.0),
        PriceInfo(fund_code="VISC11", current_price=110.0, ceiling_price=None),
        PriceInfo(fund_code="OLDF11", current_price=50.0, ceiling_price=60.0),
    ]


@pytest.fixture
def price_reference(sample_prices) -> InMemoryPriceReference:
    """Price reference over sample_prices."""
    return InMemoryPriceReference(sample_prices)


@pytest.fixture
def sequential_rules() -> RuleParams:
    """Default weights with sequential allocation."""
    return RuleParams(sequential_allocation=True)


@pytest.fixture
def proportional_rules() -> RuleParams:
    """Default weights with proportional allocation."""
    return RuleParams(sequential_allocation=False)
