"""Discount of current price against the configured ceiling price"""

from collections.abc import Iterable
from typing import Optional

import structlog

from ..errors import DataQualityError
from ..models import DiscountStatus, FundDiscount, PriceInfo
from ..providers.base import PriceReference
from ..utils.numeric import safe_percentage

logger = structlog.get_logger(__name__)


def calculate_discount(fund_code: str, price: Optional[PriceInfo]) -> FundDiscount:
    """
    Calculate the discount for a single fund

    discount_pct = (ceiling - current) / ceiling * 100

    Positive means the fund trades below its ceiling, negative above it.

    Args:
        fund_code: Fund being evaluated
        price: Resolved price info, None when the reference has no entry

    Returns:
        FundDiscount; NO_CEILING when the ceiling is absent or <= 0 or there
        is no usable current price
    """
    if price is None:
        return FundDiscount.no_ceiling(fund_code)

    if not price.has_ceiling:
        return FundDiscount.no_ceiling(fund_code, price.current_price)

    if price.current_price <= 0:
        logger.warning(
            "Non-positive current price, treating fund as without ceiling",
            fund_code=fund_code,
            current_price=price.current_price,
        )
        return FundDiscount.no_ceiling(fund_code, 0.0)

    discount_pct = safe_percentage(price.ceiling_price - price.current_price, price.ceiling_price)

    return FundDiscount(
        fund_code=fund_code,
        current_price=price.current_price,
        ceiling_price=price.ceiling_price,
        discount_pct=discount_pct,
        status=DiscountStatus.DISCOUNTED if discount_pct > 0 else DiscountStatus.NOT_DISCOUNTED,
        priority_discount=max(0.0, discount_pct),
    )


def calculate_discounts(
    fund_codes: Iterable[str],
    price_reference: PriceReference,
) -> dict[str, FundDiscount]:
    """
    Calculate discounts for a batch of funds.

    A lookup failure for one fund degrades that fund to NO_CEILING and the
    batch carries on.

    Args:
        fund_codes: Funds to evaluate
        price_reference: Collaborator resolving PriceInfo per fund

    Returns:
        FundDiscount keyed by fund code, in input order
    """
    discounts: dict[str, FundDiscount] = {}

    for code in fund_codes:
        try:
            price = price_reference.resolve_price(code)
        except DataQualityError as e:
            logger.warning(
                "Price unavailable, degrading to no ceiling",
                fund_code=code,
                error=str(e),
                context=e.context,
            )
            price = None
        except Exception as e:
            logger.error(
                "Price lookup failed, degrading to no ceiling",
                fund_code=code,
                error=str(e),
                error_type=type(e).__name__,
            )
            price = None

        discounts[code] = calculate_discount(code, price)

    return discounts
