"""Divide-by-zero guards for percentage math."""

import math


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    result = numerator / denominator
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def safe_percentage(part: float, whole: float) -> float:
    """part as a percentage of whole, 0.0 when whole is zero."""
    return safe_ratio(part, whole) * 100.0


def whole_units(amount: float, unit_price: float) -> int:
    """
    Whole units affordable with amount at unit_price, always rounded down.

    Returns 0 for a non-positive price or amount. The result never costs more
    than amount, even when the float division lands a hair above an integer.
    """
    if unit_price <= 0 or amount <= 0:
        return 0

    units = math.floor(amount / unit_price)
    while units > 0 and units * unit_price > amount:
        units -= 1
    return units
