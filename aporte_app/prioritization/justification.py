"""Human-readable justification for each fund's decision state"""

from ..models import DiscountStatus, FundDiscount, FundImbalance, FundStatus


def _imbalance_text(fund: FundImbalance) -> str:
    if fund.imbalance > 0:
        return f"below target ({fund.current_pct:.1f}% vs. {fund.ideal_pct:.1f}%)"
    if fund.imbalance < 0:
        return f"above target ({fund.current_pct:.1f}% vs. {fund.ideal_pct:.1f}%)"
    return f"at target ({fund.current_pct:.1f}% vs. {fund.ideal_pct:.1f}%)"


def _discount_text(discount: FundDiscount) -> str:
    if discount.status == DiscountStatus.NO_CEILING or discount.discount_pct is None:
        return "no ceiling price configured"
    if discount.discount_pct > 0:
        return f"trading at a {discount.discount_pct:.2f}% discount to its ceiling price"
    if discount.discount_pct < 0:
        return f"trading {abs(discount.discount_pct):.2f}% above its ceiling price"
    return "trading exactly at its ceiling price (0.00% discount)"


def build_justification(
    fund: FundImbalance,
    discount: FundDiscount,
    status: FundStatus,
) -> str:
    """
    Explain why a fund landed in its decision state.

    DO_NOT_INVEST has three distinct texts: fund absent from the target model,
    fund at or above target, and underweight fund without a ceiling price.
    """
    imbalance_text = _imbalance_text(fund)
    discount_text = _discount_text(discount)

    if status == FundStatus.BUY_NOW:
        return (
            f"{fund.name} is {imbalance_text} and {discount_text}. "
            f"Priority for rebalancing."
        )

    if status == FundStatus.WAIT_FOR_DISCOUNT:
        return (
            f"{fund.name} is {imbalance_text}, but {discount_text}. "
            f"Wait for a discount."
        )

    if fund.ideal_pct == 0:
        return (
            f"{fund.name} is not in the recommended target model "
            f"(holds {fund.current_pct:.1f}% vs. 0.0% ideal; {discount_text}). "
            f"Consider reducing exposure."
        )

    if fund.imbalance <= 0:
        return (
            f"{fund.name} is {imbalance_text}; {discount_text}. "
            f"Do not invest (already has sufficient allocation)."
        )

    return (
        f"{fund.name} is {imbalance_text} but has no ceiling price configured. "
        f"Configure one to receive recommendations."
    )
