"""
year_comparison.py
------------------
📊 Compares the same household bill under two tariff years.

Everything except the year is held fixed, so the delta isolates the
tariff change. A zero historical total leaves the percentage undefined;
it is reported as None.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from water_billing.agents.bill_calculation.calculation_engine import (
    BillingInput,
    BillingResult,
    compute_bill,
)

INCREASE = "increase"
DECREASE = "decrease"
NO_CHANGE = "no-change"


@dataclass(frozen=True)
class YearComparison:
    current: BillingResult
    historical: BillingResult
    delta: Decimal
    delta_percent: Optional[Decimal]

    @property
    def direction(self) -> str:
        if self.delta > 0:
            return INCREASE
        if self.delta < 0:
            return DECREASE
        return NO_CHANGE


def compare_years(billing_input: BillingInput, other_year: int) -> YearComparison:
    """
    Bill `billing_input` at its own year and at `other_year`.
    """
    current = compute_bill(billing_input)
    historical = compute_bill(replace(billing_input, year=other_year))

    delta = current.total_price - historical.total_price
    delta_percent = None
    if historical.total_price != 0:
        delta_percent = delta / historical.total_price * 100

    return YearComparison(
        current=current,
        historical=historical,
        delta=delta,
        delta_percent=delta_percent,
    )
