"""
Top-level package for the Water Bill Checker.

Library surface:

    compute_bill(BillingInput) -> BillingResult
    compare_years(BillingInput, other_year) -> YearComparison
    detect(BillingResult, BillingInput, ...) -> list[Finding]

The batch audit, database and orchestrator modules are imported from
their own sub-packages.
"""

from water_billing.agents.bill_calculation.calculation_engine import (
    BillingInput,
    BillingResult,
    compute_bill,
)
from water_billing.agents.bill_calculation.tariff_table import Tariff, get_tariff
from water_billing.agents.bill_calculation.year_comparison import YearComparison, compare_years
from water_billing.agents.error_detection.error_detector import detect, summarize_bill_difference
from water_billing.agents.error_detection.findings import (
    BillingBasis,
    Category,
    Finding,
    FindingKind,
    Severity,
)

__all__ = [
    "BillingBasis",
    "BillingInput",
    "BillingResult",
    "Category",
    "Finding",
    "FindingKind",
    "Severity",
    "Tariff",
    "YearComparison",
    "compare_years",
    "compute_bill",
    "detect",
    "get_tariff",
    "summarize_bill_difference",
]
