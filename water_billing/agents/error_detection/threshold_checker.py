"""
threshold_checker.py
---------------------
📏 Determines if a billing difference or consumption change is significant.

Purpose:
--------
Acts as the arithmetic layer for `error_detector`.
It turns raw amounts into percentages and ensures that only meaningful
discrepancies (beyond a fixed tolerance band) are flagged.

Workflow:
---------
1️⃣ Receives two amounts (actual vs expected, current vs previous).
2️⃣ Computes the percentage difference; None when the base is zero.
3️⃣ Compares against the tolerance band.

Inputs:
-------
- Amounts (Decimal)
- Tolerance in percent (Decimal)

Outputs:
--------
- Optional[Decimal] percentages
- Boolean (True if significant)
"""

from decimal import Decimal
from typing import Optional

# Fixed tolerance bands (percent)
BILL_TOLERANCE_PERCENT = Decimal("5")
CONSUMPTION_CHANGE_PERCENT = Decimal("30")


def percent_difference(actual: Decimal, expected: Decimal) -> Optional[Decimal]:
    """
    Absolute difference between `actual` and `expected` as a percentage of
    `expected`. Returns None when `expected` is zero.
    """
    if expected == 0:
        return None
    return abs(actual - expected) / expected * 100


def percent_change(current: Decimal, previous: Decimal) -> Optional[Decimal]:
    """
    Signed change from `previous` to `current` in percent. Returns None
    when `previous` is zero.
    """
    if previous == 0:
        return None
    return (current - previous) / previous * 100


def is_significant_difference(pct: Optional[Decimal], tolerance: Decimal = BILL_TOLERANCE_PERCENT) -> bool:
    """
    Returns True if the percentage exceeds the tolerance. An undefined
    percentage (zero base) counts as significant.
    """
    if pct is None:
        return True
    return pct > tolerance
