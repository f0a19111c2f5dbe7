"""
error_detector.py
-----------------
🚨 Detects likely errors in a household water bill.

Purpose:
--------
Compares the bill the utility actually issued with the bill computed by
`calculation_engine`, looks at the consumption history and the household
attributes, and reports findings (errors, warnings, recommendations).

Workflow:
---------
1️⃣ Bundle the computed bill, the billing input and the optional
   comparative data into a `DetectionContext`.
2️⃣ Evaluate every rule in a fixed order; each rule returns a Finding or None.
3️⃣ Group the findings: errors, then warnings, then recommendations.

Rules:
------
1. Estimated billing                      → error (high)
2. Actual bill off by more than 5%        → overcharge error (high) /
                                            undercharge warning (medium)
3. Consumption changed by more than 30%   → spike warning (high) /
                                            drop warning (medium)
4. Under 70% of allocation used, 2 people → recommendation (low)
5. Full-rate water without disability
   benefit                                → recommendation (medium)
6. Manual meter reading supplied          → recommendation (low)

Missing comparative data simply skips the corresponding rule. An empty
result means no issues were found.

Depends On:
-----------
- water_billing.agents.bill_calculation.calculation_engine
- water_billing.agents.error_detection.threshold_checker
- water_billing.utils.logger
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Sequence

from water_billing.agents.bill_calculation.allocation import DISABILITY_BONUS_RATE
from water_billing.agents.bill_calculation.calculation_engine import (
    BillingInput,
    BillingResult,
    to_decimal,
)
from water_billing.agents.error_detection.findings import (
    KIND_ORDER,
    BillingBasis,
    Category,
    Finding,
    FindingKind,
    Severity,
)
from water_billing.agents.error_detection.threshold_checker import (
    BILL_TOLERANCE_PERCENT,
    CONSUMPTION_CHANGE_PERCENT,
    is_significant_difference,
    percent_change,
    percent_difference,
)
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)

ALLOCATION_USAGE_FLOOR = Decimal("0.70")
DEFAULT_BILLED_PERSONS = 2


@dataclass(frozen=True)
class DetectionContext:
    billing: BillingResult
    billing_input: BillingInput
    actual_bill_amount: Optional[Decimal] = None
    previous_consumption: Optional[Decimal] = None
    current_meter_reading: Optional[Decimal] = None
    billing_basis: Optional[str] = None


@dataclass(frozen=True)
class BillDifferenceSummary:
    actual: Decimal
    expected: Decimal
    difference: Decimal
    overcharged: bool


def _optional_decimal(value) -> Optional[Decimal]:
    """Finite Decimal, or None when the value is missing, NaN or not a number."""
    if value is None:
        return None
    try:
        number = to_decimal(value)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _is_positive(value: Optional[Decimal]) -> bool:
    return value is not None and value > 0


# ----------------------------------------------------------------------
# Rules
# ----------------------------------------------------------------------
def check_estimated_billing(ctx: DetectionContext) -> Optional[Finding]:
    if ctx.billing_basis != BillingBasis.ESTIMATED:
        return None
    return Finding(
        kind=FindingKind.ERROR,
        category=Category.ESTIMATION,
        severity=Severity.HIGH,
        title="Bill based on an estimate",
        description=(
            "Your bill is based on an estimate rather than an actual meter reading. "
            "This can lead to inaccurate charges."
        ),
        recommended_action=(
            "Photograph your water meter and send the photo to the water corporation "
            "with a request to correct the bill. You are entitled to a credit if the "
            "actual reading is lower."
        ),
    )


def check_bill_amount(ctx: DetectionContext) -> Optional[Finding]:
    if not _is_positive(ctx.actual_bill_amount):
        return None

    actual = ctx.actual_bill_amount
    expected = ctx.billing.total_price
    difference = actual - expected
    pct = percent_difference(actual, expected)

    if not is_significant_difference(pct, BILL_TOLERANCE_PERCENT):
        return None

    details = {"actual": actual, "expected": expected, "difference": difference, "percent": pct}
    pct_text = f"{pct:.1f}%" if pct is not None else "percentage not applicable"

    if difference > 0:
        return Finding(
            kind=FindingKind.ERROR,
            category=Category.OVERCHARGE,
            severity=Severity.HIGH,
            title="Possible overcharge",
            description=(
                f"The actual bill ({actual:.2f} NIS) is higher than the calculated amount "
                f"({expected:.2f} NIS) by about {abs(difference):.2f} NIS ({pct_text})."
            ),
            recommended_action=(
                "Check that the number of residents on the bill is correct and that every "
                "discount you are entitled to was applied. Contact the water corporation "
                "for clarification."
            ),
            details=details,
        )

    return Finding(
        kind=FindingKind.WARNING,
        category=Category.UNDERCHARGE,
        severity=Severity.MEDIUM,
        title="Possible undercharge",
        description=(
            f"The actual bill ({actual:.2f} NIS) is lower than the calculated amount "
            f"({expected:.2f} NIS) by about {abs(difference):.2f} NIS. "
            "A catch-up charge may follow."
        ),
        recommended_action=(
            "Check that the consumption you entered is correct. An undercharge can lead "
            "to a catch-up charge on later bills."
        ),
        details=details,
    )


def check_consumption_change(ctx: DetectionContext) -> Optional[Finding]:
    if not _is_positive(ctx.previous_consumption):
        return None

    previous = ctx.previous_consumption
    current = ctx.billing_input.consumption
    change = percent_change(current, previous)
    details = {"previous": previous, "current": current, "percent": change}

    if change > CONSUMPTION_CHANGE_PERCENT:
        return Finding(
            kind=FindingKind.WARNING,
            category=Category.CONSUMPTION_SPIKE,
            severity=Severity.HIGH,
            title="Sharp rise in consumption",
            description=(
                f"Consumption rose by {change:.1f}% compared to the previous bill "
                f"({previous:.2f} → {current:.2f} m3)."
            ),
            recommended_action=(
                "Check for leaks in taps, toilets and irrigation. If you find none, the "
                "meter may be faulty; ask the water corporation to inspect it."
            ),
            details=details,
        )

    if change < -CONSUMPTION_CHANGE_PERCENT:
        return Finding(
            kind=FindingKind.WARNING,
            category=Category.CONSUMPTION_DROP,
            severity=Severity.MEDIUM,
            title="Sharp drop in consumption",
            description=(
                f"Consumption fell by {abs(change):.1f}% compared to the previous bill "
                f"({previous:.2f} → {current:.2f} m3)."
            ),
            recommended_action=(
                "If the previous bill was based on a high estimate, this may be a "
                "correction. Otherwise, make sure the meter reading is correct."
            ),
            details=details,
        )

    return None


def check_allocation_usage(ctx: DetectionContext) -> Optional[Finding]:
    billing = ctx.billing
    if ctx.billing_input.persons != DEFAULT_BILLED_PERSONS or billing.allocation == 0:
        return None

    usage = billing.reduced_consumption / billing.allocation
    if usage >= ALLOCATION_USAGE_FLOOR:
        return None

    return Finding(
        kind=FindingKind.RECOMMENDATION,
        category=Category.ALLOCATION_UNDERUSE,
        severity=Severity.LOW,
        title="The number of residents may be wrong",
        description=(
            f"You are using only {usage * 100:.0f}% of your reduced-rate allocation. "
            f"The water corporation may be billing for {DEFAULT_BILLED_PERSONS} residents by default."
        ),
        recommended_action=(
            f"If fewer than {DEFAULT_BILLED_PERSONS} people live in the home, consider updating "
            "the water corporation, although this may reduce your allocation. If more do, "
            "you must update it."
        ),
        details={"allocation_usage_percent": usage * 100},
    )


def check_disability_eligibility(ctx: DetectionContext) -> Optional[Finding]:
    billing_input = ctx.billing_input
    if billing_input.has_disability_benefit or billing_input.consumption <= ctx.billing.allocation:
        return None

    return Finding(
        kind=FindingKind.RECOMMENDATION,
        category=Category.DISABILITY_ELIGIBILITY,
        severity=Severity.MEDIUM,
        title="Check eligibility for the disability benefit",
        description=(
            "If a member of the household has a disability of 70% or more recognised by "
            f"National Insurance, you are entitled to an extra {DISABILITY_BONUS_RATE} m3 per "
            "month at the reduced rate."
        ),
        recommended_action=(
            "Contact the water corporation with the National Insurance certificate to "
            "activate the benefit."
        ),
    )


def check_meter_reading(ctx: DetectionContext) -> Optional[Finding]:
    if not _is_positive(ctx.current_meter_reading):
        return None

    reading = ctx.current_meter_reading
    return Finding(
        kind=FindingKind.RECOMMENDATION,
        category=Category.METER_READING_NOTE,
        severity=Severity.LOW,
        title="Manual meter reading",
        description=f"Current meter reading: {reading:.2f} m3.",
        recommended_action=(
            "Compare this reading with the one printed on the bill. If they differ, "
            "photograph the meter and ask the water corporation for a correction."
        ),
        details={"meter_reading": reading},
    )


Rule = Callable[[DetectionContext], Optional[Finding]]

RULES: Sequence[Rule] = (
    check_estimated_billing,
    check_bill_amount,
    check_consumption_change,
    check_allocation_usage,
    check_disability_eligibility,
    check_meter_reading,
)


# ----------------------------------------------------------------------
# Entry points
# ----------------------------------------------------------------------
def detect(
    billing: BillingResult,
    billing_input: BillingInput,
    actual_bill_amount=None,
    previous_consumption=None,
    current_meter_reading=None,
    billing_basis: Optional[str] = None,
) -> List[Finding]:
    """
    Run every rule against one computed bill and return the findings,
    errors first, then warnings, then recommendations.
    """
    ctx = DetectionContext(
        billing=billing,
        billing_input=billing_input,
        actual_bill_amount=_optional_decimal(actual_bill_amount),
        previous_consumption=_optional_decimal(previous_consumption),
        current_meter_reading=_optional_decimal(current_meter_reading),
        billing_basis=billing_basis,
    )

    findings = [finding for finding in (rule(ctx) for rule in RULES) if finding is not None]
    findings.sort(key=lambda finding: KIND_ORDER[finding.kind])

    logger.debug(f"Detected {len(findings)} findings: {[f.category.value for f in findings]}")
    return findings


def summarize_bill_difference(billing: BillingResult, actual_bill_amount) -> Optional[BillDifferenceSummary]:
    """
    Side-by-side summary of the actual and the expected bill. None when no
    positive actual amount was supplied.
    """
    actual = _optional_decimal(actual_bill_amount)
    if not _is_positive(actual):
        return None

    return BillDifferenceSummary(
        actual=actual,
        expected=billing.total_price,
        difference=abs(actual - billing.total_price),
        overcharged=actual > billing.total_price,
    )
