"""
workflow_manager.py
--------------------
🧠 Orchestrator: runs the batch water bill audit end to end.

Purpose:
--------
Controls the data flow for one audit run:
    1️⃣ Load the household bills CSV
    2️⃣ Compute expected bills and detect findings (bill_comparator)
    3️⃣ Save the comparison and findings tables
    4️⃣ Persist findings and the run record to the database

It manages step ordering, error handling, and logging.

Usage Example:
--------------
python -m water_billing.orchestrator.workflow_manager household_bills.csv --subdir samples
"""

import argparse
from typing import Optional

from water_billing.agents.bill_comparison.bill_comparator import run_bill_comparison
from water_billing.database.db_utils import finish_audit_run, insert_findings, start_audit_run
from water_billing.database.init_db import init_db
from water_billing.utils.helpers import load_csv, save_csv, save_json
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)

COMPARISON_FILE = "Bill_Audit_Results.csv"
FINDINGS_FILE = "Billing_Findings.csv"
SUMMARY_FILE = "Audit_Summary.json"


def run_audit_pipeline(file_name: str = "household_bills.csv", subdir: str = "incoming",
                       persist: bool = True) -> Optional[dict]:
    """
    Audits every bill in `subdir/file_name`. Returns a run summary, or None
    when the run failed.
    """
    logger.info(f"🚀 Starting water bill audit for {subdir}/{file_name}")

    run_id = None
    try:
        # Step 0️⃣: Open the audit run record
        if persist:
            init_db()
            run_id = start_audit_run(file_name)

        # Step 1️⃣: Load bills
        bills_df = load_csv(subdir, file_name)
        if bills_df.empty:
            logger.warning("⚠️ No billing data found.")
            if run_id is not None:
                finish_audit_run(run_id, "failed", error_msg="No billing data found.")
            return None

        # Step 2️⃣: Compare and detect
        comparison_df, findings_df = run_bill_comparison(bills_df)

        # Step 3️⃣: Save outputs
        comparison_path = save_csv(comparison_df, "processed", COMPARISON_FILE)
        findings_path = save_csv(findings_df, "processed", FINDINGS_FILE)

        # Step 4️⃣: Persist
        if persist and not findings_df.empty:
            insert_findings(findings_df.to_dict(orient="records"), audit_run_id=run_id)

        summary = {
            "audit_run_id": run_id,
            "source_file": file_name,
            "bills_processed": len(comparison_df),
            "bills_flagged": int((comparison_df["status"] == "flagged").sum()),
            "bills_invalid": int((comparison_df["status"] == "invalid").sum()),
            "findings_detected": len(findings_df),
            "findings_by_category": {
                category: int(count) for category, count in findings_df["category"].value_counts().items()
            },
            "comparison_file": comparison_path,
            "findings_file": findings_path,
        }
        save_json(summary, "output", SUMMARY_FILE)

        if run_id is not None:
            finish_audit_run(run_id, "success", len(comparison_df), len(findings_df))

        logger.info(
            f"✅ Audit complete: {summary['bills_processed']} bills, "
            f"{summary['findings_detected']} findings."
        )
        return summary

    except Exception as e:
        logger.error(f"❌ Audit pipeline failed: {e}")
        if run_id is not None:
            finish_audit_run(run_id, "failed", error_msg=str(e))
        return None


def main(argv=None):
    parser = argparse.ArgumentParser(description="Audit household water bills against the tariff.")
    parser.add_argument("file_name", nargs="?", default="household_bills.csv")
    parser.add_argument("--subdir", default="incoming", help="data sub-folder holding the CSV")
    parser.add_argument("--no-db", action="store_true", help="skip database persistence")
    args = parser.parse_args(argv)

    summary = run_audit_pipeline(args.file_name, subdir=args.subdir, persist=not args.no_db)
    return 0 if summary is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
