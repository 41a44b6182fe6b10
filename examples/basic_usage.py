#!/usr/bin/env python3
"""
Basic Usage Example - Aporte Contribution Director

This script demonstrates the basic usage of the contribution director with a
sample portfolio. It shows how to:
- Normalize raw portfolio records
- Build a price reference and load a rule profile
- Generate a recommendation with both allocation strategies
- Print the recommendation as JSON

Run: python examples/basic_usage.py
"""

import json

from aporte_app.engine import ContributionAdvisor
from aporte_app.logging import configure_logging
from aporte_app.models import PriceInfo
from aporte_app.providers import InMemoryPriceReference, normalize_positions, normalize_targets


RAW_POSITIONS = [
    {"fiiCode": "HGLG11", "fiiName": "CSHG Logistica", "currentValue": 3200.0},
    {"fiiCode": "KNRI11", "fiiName": "Kinea Renda Imobiliaria", "currentValue": 2100.0},
    {"fiiCode": "MXRF11", "fiiName": "Maxi Renda", "currentValue": 1500.0},
    {"fiiCode": "XPML11", "fiiName": "XP Malls", "currentValue": 1200.0},
]

RAW_TARGETS = [
    {"ticker": "HGLG11", "segment": "LOGISTICA", "allocation": 25},
    {"ticker": "KNRI11", "segment": "HIBRIDOS", "allocation": 30},
    {"ticker": "MXRF11", "segment": "PAPEL", "allocation": 15},
    {"ticker": "XPML11", "segment": "SHOPPING", "allocation": 20},
    {"ticker": "VISC11", "segment": "SHOPPING", "allocation": 10, "name": "Vinci Shopping Centers"},
]

PRICES = [
    PriceInfo("HGLG11", 158.40, 170.00),
    PriceInfo("KNRI11", 139.90, 150.00),
    PriceInfo("MXRF11", 9.62, 10.10),
    PriceInfo("XPML11", 108.30, 115.00),
    PriceInfo("VISC11", 112.50, 110.00),
]


def print_recommendation(title: str, recommendation) -> None:
    """Print a short summary followed by the full JSON payload."""
    print(f"\n=== {title} ===")
    for allocation in recommendation.allocations:
        print(
            f"#{allocation.fund.rank} {allocation.fund_code}: "
            f"{allocation.units_to_buy} units, R$ {allocation.amount_to_invest:.2f} "
            f"-> {allocation.post_contribution_pct:.1f}%"
        )
    for fund in recommendation.waiting_funds:
        print(f"WAIT {fund.fund_code}: {fund.justification}")
    print(json.dumps(recommendation.to_dict()["summary"], indent=2))


def main() -> None:
    configure_logging(level="WARNING")

    positions = normalize_positions(RAW_POSITIONS)
    targets = normalize_targets(RAW_TARGETS)
    advisor = ContributionAdvisor(price_reference=InMemoryPriceReference(PRICES))

    for profile in ("default", "conservative"):
        rules = advisor.load_rules(profile)
        recommendation = advisor.recommend(1500.0, positions, targets, rules=rules)
        print_recommendation(f"{rules.name} ({rules.strategy.value})", recommendation)


if __name__ == "__main__":
    main()
