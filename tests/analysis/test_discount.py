"""Tests for discount calculations"""

import pytest
from unittest.mock import Mock

from aporte_app.analysis.discount import calculate_discount, calculate_discounts
from aporte_app.errors import PriceUnavailableError
from aporte_app.models import DiscountStatus, PriceInfo
from aporte_app.providers import InMemoryPriceReference


class TestCalculateDiscount:
    """Test single-fund discount"""

    def test_discounted_fund(self):
        """Test price below ceiling"""
        discount = calculate_discount("AAAA11", PriceInfo("AAAA11", 90.0, 100.0))

        assert discount.discount_pct == pytest.approx(10.0)
        assert discount.status == DiscountStatus.DISCOUNTED
        assert discount.priority_discount == pytest.approx(10.0)
        assert discount.ceiling_price == 100.0

    def test_fund_above_ceiling(self):
        """Test price above ceiling gives negative discount and zero priority"""
        discount = calculate_discount("AAAA11", PriceInfo("AAAA11", 110.0, 100.0))

        assert discount.discount_pct == pytest.approx(-10.0)
        assert discount.status == DiscountStatus.NOT_DISCOUNTED
        assert discount.priority_discount == 0.0

    def test_price_at_ceiling(self):
        """Test zero discount is not discounted"""
        discount = calculate_discount("AAAA11", PriceInfo("AAAA11", 100.0, 100.0))

        assert discount.discount_pct == 0.0
        assert discount.status == DiscountStatus.NOT_DISCOUNTED

    @pytest.mark.parametrize("ceiling", [None, 0.0, -5.0])
    def test_missing_ceiling(self, ceiling):
        """Test absent or non-positive ceiling is NO_CEILING"""
        discount = calculate_discount("AAAA11", PriceInfo("AAAA11", 90.0, ceiling))

        assert discount.status == DiscountStatus.NO_CEILING
        assert discount.discount_pct is None
        assert discount.ceiling_price is None
        assert discount.priority_discount == 0.0
        assert discount.current_price == 90.0

    def test_no_price_info(self):
        """Test unresolved fund is NO_CEILING"""
        discount = calculate_discount("AAAA11", None)

        assert discount.status == DiscountStatus.NO_CEILING
        assert discount.current_price == 0.0

    def test_zero_current_price(self):
        """Test zero quote cannot produce a 100% discount"""
        discount = calculate_discount("AAAA11", PriceInfo("AAAA11", 0.0, 100.0))

        assert discount.status == DiscountStatus.NO_CEILING
        assert discount.discount_pct is None


class TestCalculateDiscounts:
    """Test batch discount calculation"""

    def test_batch_keyed_by_code(self, price_reference):
        """Test results are keyed by fund code in input order"""
        discounts = calculate_discounts(["KNRI11", "VISC11", "UNKNOWN11"], price_reference)

        assert list(discounts) == ["KNRI11", "VISC11", "UNKNOWN11"]
        assert discounts["KNRI11"].status == DiscountStatus.DISCOUNTED
        assert discounts["VISC11"].status == DiscountStatus.NO_CEILING
        assert discounts["UNKNOWN11"].status == DiscountStatus.NO_CEILING

    def test_lookup_failure_does_not_abort_batch(self):
        """Test one failing fund degrades while the others are evaluated"""
        reference = Mock()

        def resolve(code):
            if code == "BAD11":
                raise PriceUnavailableError("quote feed down", fund_code=code)
            return PriceInfo(code, 90.0, 100.0)

        reference.resolve_price.side_effect = resolve

        discounts = calculate_discounts(["AAAA11", "BAD11", "CCCC11"], reference)

        assert discounts["BAD11"].status == DiscountStatus.NO_CEILING
        assert discounts["AAAA11"].status == DiscountStatus.DISCOUNTED
        assert discounts["CCCC11"].status == DiscountStatus.DISCOUNTED

    def test_unexpected_lookup_error_degrades(self):
        """Test arbitrary collaborator exception also degrades to NO_CEILING"""
        reference = Mock()
        reference.resolve_price.side_effect = ConnectionError("timeout")

        discounts = calculate_discounts(["AAAA11"], reference)

        assert discounts["AAAA11"].status == DiscountStatus.NO_CEILING

    def test_empty_batch(self):
        """Test no fund codes"""
        assert calculate_discounts([], InMemoryPriceReference([])) == {}
