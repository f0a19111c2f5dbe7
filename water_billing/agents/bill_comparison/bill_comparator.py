"""
bill_comparator.py
------------------
📊 Compares issued water bills with computed tariff-based expected bills.

Purpose:
--------
Runs the calculation engine and the error detector over a whole table of
household bills (one row per account and billing period) so that a
utility export can be audited in one pass.

Workflow:
---------
1️⃣ Clean column names of the incoming DataFrame.
2️⃣ Validate each row into a BillingInput and DetectionOptions.
3️⃣ Use calculation_engine to compute the expected bill.
4️⃣ Use error_detector to collect findings.
5️⃣ Return a per-account comparison table and a findings table.

Inputs:
-------
- DataFrame with columns: account_id, consumption, persons, period_months,
  has_disability_benefit, year and optionally actual_bill_amount,
  previous_consumption, current_meter_reading, billing_basis

Outputs:
--------
- comparison DataFrame (one row per input row)
- findings DataFrame (one row per finding)

Depends On:
-----------
- pandas
- water_billing.utils.helpers
- water_billing.utils.logger
- water_billing.agents.validation.input_validator
- water_billing.agents.bill_calculation.calculation_engine
- water_billing.agents.error_detection.error_detector
"""

from typing import Tuple

import pandas as pd

from water_billing.agents.bill_calculation.calculation_engine import compute_bill
from water_billing.agents.error_detection.error_detector import detect
from water_billing.agents.validation.input_validator import (
    InvalidBillingInput,
    parse_billing_input,
    parse_detection_options,
)
from water_billing.utils.helpers import clean_column_names
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ["consumption", "persons", "period_months"]

STATUS_OK = "ok"
STATUS_FLAGGED = "flagged"
STATUS_INVALID = "invalid"

FINDING_COLUMNS = [
    "account_id",
    "kind",
    "category",
    "severity",
    "title",
    "description",
    "recommended_action",
]


def _account_id(row: pd.Series, position: int) -> str:
    value = row.get("account_id")
    if value is None or pd.isna(value) or str(value).strip() == "":
        return f"row-{position + 1}"
    return str(value).strip()


def run_bill_comparison(bills_df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Audit every household bill in `bills_df`.

    Rows that fail validation are kept in the comparison table with status
    'invalid' and the validation message; they produce no findings.
    """
    bills_df = clean_column_names(bills_df.copy())

    missing = [col for col in REQUIRED_COLUMNS if col not in bills_df.columns]
    if missing:
        raise ValueError(f"❌ Missing required columns: {missing}")

    comparison_rows = []
    finding_rows = []

    for position, (_, row) in enumerate(bills_df.iterrows()):
        account_id = _account_id(row, position)
        raw = row.to_dict()

        # Step 1️⃣: Validate
        try:
            billing_input = parse_billing_input(raw)
            options = parse_detection_options(raw)
        except InvalidBillingInput as e:
            logger.warning(f"⚠️ Skipping account {account_id}: {e}")
            comparison_rows.append({"account_id": account_id, "status": STATUS_INVALID, "notes": str(e)})
            continue

        # Step 2️⃣: Expected bill and findings
        billing = compute_bill(billing_input)
        findings = detect(
            billing,
            billing_input,
            actual_bill_amount=options.actual_bill_amount,
            previous_consumption=options.previous_consumption,
            current_meter_reading=options.current_meter_reading,
            billing_basis=options.billing_basis,
        )

        actual = options.actual_bill_amount
        comparison_rows.append({
            "account_id": account_id,
            **billing.as_dict(),
            "actual_bill_amount": actual,
            "difference": actual - billing.total_price if actual is not None else None,
            "finding_count": len(findings),
            "status": STATUS_FLAGGED if findings else STATUS_OK,
            "notes": "",
        })

        for finding in findings:
            finding_rows.append({"account_id": account_id, **finding.as_dict()})

    comparison_df = pd.DataFrame(comparison_rows)
    findings_df = pd.DataFrame(finding_rows, columns=FINDING_COLUMNS)

    flagged = (comparison_df["status"] == STATUS_FLAGGED).sum() if not comparison_df.empty else 0
    logger.info(
        f"✅ Bill comparison completed: {len(comparison_df)} bills, "
        f"{flagged} flagged, {len(findings_df)} findings."
    )
    return comparison_df, findings_df
