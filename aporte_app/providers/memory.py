"""In-memory collaborator implementations for callers holding data already."""

from collections.abc import Iterable, Mapping
from typing import Optional

from ..models import PortfolioSnapshot, PriceInfo, TargetAllocation
from .base import PortfolioSource, PriceReference, TargetModelProvider


class InMemoryPriceReference(PriceReference):
    """Price reference backed by a list of PriceInfo records."""

    def __init__(self, prices: Iterable[PriceInfo]):
        self._prices = {p.fund_code: p for p in prices}

    def resolve_price(self, fund_code: str) -> Optional[PriceInfo]:
        return self._prices.get(fund_code)


class StaticTargetModel(TargetModelProvider):
    """Same target model for every portfolio."""

    def __init__(self, targets: Optional[Iterable[TargetAllocation]]):
        self._targets = list(targets) if targets is not None else None

    def get_target_model(self, portfolio_id: str) -> Optional[list[TargetAllocation]]:
        if self._targets is None:
            return None
        return list(self._targets)


class InMemoryPortfolioSource(PortfolioSource):
    """Portfolio snapshots keyed by portfolio id."""

    def __init__(self, portfolios: Mapping[str, PortfolioSnapshot]):
        self._portfolios = dict(portfolios)

    def get_portfolio(self, portfolio_id: str) -> Optional[PortfolioSnapshot]:
        return self._portfolios.get(portfolio_id)
