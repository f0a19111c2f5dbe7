"""
calculation_engine.py
---------------------
🧮 Performs the tiered water billing calculation.

Purpose:
--------
Given a household's consumption and attributes, this module computes the
bill the household should have been charged under the tariff of the
requested year.

Workflow:
---------
1️⃣ Resolve the tariff for the billing year.
2️⃣ Compute the household allocation (reduced tier quota).
3️⃣ Split consumption into reduced and full tiers.
4️⃣ Enforce the bi-monthly minimum charge of 3 m3.
5️⃣ Price both tiers and return a `BillingResult`.

Inputs:
-------
- BillingInput (consumption, persons, period_months,
  has_disability_benefit, year)

Outputs:
--------
- BillingResult

Depends On:
-----------
- water_billing.agents.bill_calculation.tariff_table
- water_billing.agents.bill_calculation.allocation
- water_billing.utils.logger
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from water_billing.agents.bill_calculation.allocation import calculate_allocation
from water_billing.agents.bill_calculation.tariff_table import (
    DEFAULT_TARIFF_YEAR,
    Tariff,
    get_tariff,
)
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)

MINIMUM_CHARGE_CONSUMPTION = Decimal("3")  # m3, bi-monthly periods only
BI_MONTHLY = 2


def to_decimal(value) -> Decimal:
    """Convert a number to Decimal without inheriting binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class BillingInput:
    consumption: Decimal
    persons: int
    period_months: int = BI_MONTHLY
    has_disability_benefit: bool = False
    year: int = DEFAULT_TARIFF_YEAR

    def __post_init__(self):
        object.__setattr__(self, "consumption", to_decimal(self.consumption))


@dataclass(frozen=True)
class BillingResult:
    allocation: Decimal
    reduced_consumption: Decimal
    full_consumption: Decimal
    reduced_price: Decimal
    full_price: Decimal
    total_price: Decimal
    tariff: Tariff
    minimum_charge_applied: bool
    effective_consumption: Decimal

    def as_dict(self) -> Dict[str, Any]:
        """Flat representation for tables and CSV export."""
        return {
            "tariff_year": self.tariff.year,
            "reduced_rate": self.tariff.reduced_rate,
            "full_rate": self.tariff.full_rate,
            "allocation": self.allocation,
            "reduced_consumption": self.reduced_consumption,
            "full_consumption": self.full_consumption,
            "reduced_price": self.reduced_price,
            "full_price": self.full_price,
            "total_price": self.total_price,
            "minimum_charge_applied": self.minimum_charge_applied,
            "effective_consumption": self.effective_consumption,
        }


def _split_tiers(consumption: Decimal, allocation: Decimal):
    reduced = min(consumption, allocation)
    full = max(Decimal("0"), consumption - allocation)
    return reduced, full


def compute_bill(billing_input: BillingInput) -> BillingResult:
    """
    Compute the expected bill for one household and billing period.
    """
    tariff = get_tariff(billing_input.year)
    allocation = calculate_allocation(
        billing_input.persons,
        billing_input.has_disability_benefit,
        billing_input.period_months,
    )

    consumption = billing_input.consumption
    reduced, full = _split_tiers(consumption, allocation)

    minimum_charge_applied = False
    if billing_input.period_months == BI_MONTHLY and consumption < MINIMUM_CHARGE_CONSUMPTION:
        consumption = MINIMUM_CHARGE_CONSUMPTION
        reduced, full = _split_tiers(consumption, allocation)
        minimum_charge_applied = True

    reduced_price = reduced * tariff.reduced_rate
    full_price = full * tariff.full_rate
    total_price = reduced_price + full_price

    logger.debug(
        f"Bill {tariff.year}: allocation={allocation} reduced={reduced} full={full} "
        f"total={total_price} min_charge={minimum_charge_applied}"
    )

    return BillingResult(
        allocation=allocation,
        reduced_consumption=reduced,
        full_consumption=full,
        reduced_price=reduced_price,
        full_price=full_price,
        total_price=total_price,
        tariff=tariff,
        minimum_charge_applied=minimum_charge_applied,
        effective_consumption=consumption,
    )
