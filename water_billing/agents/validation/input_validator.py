"""
input_validator.py
-------------------
✔️ Converts raw user-supplied values into validated billing inputs.

Purpose:
--------
Form fields and spreadsheet cells arrive as strings, floats (possibly NaN)
or booleans. The calculation engine and error detector assume validated
input, so every value is checked here first.

Workflow:
---------
1️⃣ Parse required fields (consumption, persons, period, disability, year).
2️⃣ Reject missing, non-numeric or out-of-range required values with
   `InvalidBillingInput`.
3️⃣ Parse optional comparative fields; blanks and unparsable values
   become None so the matching detector rule is skipped.

Inputs:
-------
- Mapping of raw values (form submission or DataFrame row)

Outputs:
--------
- BillingInput
- DetectionOptions
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from water_billing.agents.bill_calculation.calculation_engine import BillingInput
from water_billing.agents.bill_calculation.tariff_table import DEFAULT_TARIFF_YEAR
from water_billing.agents.error_detection.findings import BillingBasis

VALID_PERIODS = (1, 2)
TRUE_VALUES = {"true", "yes", "y", "1", "on"}
FALSE_VALUES = {"false", "no", "n", "0", "off", ""}


class InvalidBillingInput(ValueError):
    """Raised when a required billing value is missing or out of range."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


@dataclass(frozen=True)
class DetectionOptions:
    actual_bill_amount: Optional[Decimal] = None
    previous_consumption: Optional[Decimal] = None
    current_meter_reading: Optional[Decimal] = None
    billing_basis: Optional[BillingBasis] = None


def _parse_decimal(value: Any) -> Optional[Decimal]:
    """Finite Decimal for `value`, or None when blank / unparsable / NaN."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def _require_decimal(raw: Mapping, field: str) -> Decimal:
    number = _parse_decimal(raw.get(field))
    if number is None:
        raise InvalidBillingInput(field, f"expected a number, got {raw.get(field)!r}")
    return number


def _is_blank(value) -> bool:
    return value is None or str(value).strip().lower() in ("", "nan", "none")


def _require_int(raw: Mapping, field: str, default: Optional[int] = None) -> int:
    if default is not None and _is_blank(raw.get(field)):
        return default
    number = _require_decimal(raw, field)
    if number != number.to_integral_value():
        raise InvalidBillingInput(field, f"expected a whole number, got {raw.get(field)!r}")
    return int(number)


def parse_bool(value: Any, field: str = "value") -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float, Decimal)):
        return _parse_decimal(value) not in (None, 0)

    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise InvalidBillingInput(field, f"expected true/false, got {value!r}")


def parse_billing_input(raw: Mapping[str, Any]) -> BillingInput:
    """
    Build a BillingInput from raw values.

    Raises
    ------
    InvalidBillingInput
        consumption missing or negative, persons < 1, period not 1 or 2.
    """
    consumption = _require_decimal(raw, "consumption")
    if consumption < 0:
        raise InvalidBillingInput("consumption", "must not be negative")

    persons = _require_int(raw, "persons")
    if persons < 1:
        raise InvalidBillingInput("persons", "a household has at least one resident")

    period_months = _require_int(raw, "period_months")
    if period_months not in VALID_PERIODS:
        raise InvalidBillingInput("period_months", f"must be one of {VALID_PERIODS}")

    return BillingInput(
        consumption=consumption,
        persons=persons,
        period_months=period_months,
        has_disability_benefit=parse_bool(raw.get("has_disability_benefit"), "has_disability_benefit"),
        year=_require_int(raw, "year", default=DEFAULT_TARIFF_YEAR),
    )


def parse_billing_basis(value: Any) -> Optional[BillingBasis]:
    if _is_blank(value):
        return None
    try:
        return BillingBasis(str(value).strip().lower())
    except ValueError:
        raise InvalidBillingInput(
            "billing_basis", f"expected one of {[b.value for b in BillingBasis]}, got {value!r}"
        ) from None


def parse_detection_options(raw: Mapping[str, Any]) -> DetectionOptions:
    """
    Optional comparative data for the error detector. Values that are
    missing or not numbers are treated as not supplied.
    """
    return DetectionOptions(
        actual_bill_amount=_parse_decimal(raw.get("actual_bill_amount")),
        previous_consumption=_parse_decimal(raw.get("previous_consumption")),
        current_meter_reading=_parse_decimal(raw.get("current_meter_reading")),
        billing_basis=parse_billing_basis(raw.get("billing_basis")),
    )
