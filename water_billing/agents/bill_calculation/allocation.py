"""
allocation.py
-------------
Household allocation of water billed at the reduced rate.

Every resident is entitled to 3.5 m3 per month. A household receiving a
disability benefit (70%+ disability) gets one extra 3.5 m3 per month.
The result is kept at full precision for the tier split.
"""

from decimal import Decimal

PER_PERSON_RATE = Decimal("3.5")        # m3 per person per month
DISABILITY_BONUS_RATE = Decimal("3.5")  # m3 per month


def calculate_allocation(persons: int, has_disability_benefit: bool, period_months: int) -> Decimal:
    """
    Reduced-tier allocation (m3) for one billing period.

    `persons` is assumed to be at least 1; the input validator rejects
    empty households before they get here.
    """
    allocation = persons * PER_PERSON_RATE * period_months

    if has_disability_benefit:
        allocation += DISABILITY_BONUS_RATE * period_months

    return allocation
