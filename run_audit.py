#!/usr/bin/env python
"""Audit the sample household bills and print the run summary"""

from water_billing.orchestrator.workflow_manager import run_audit_pipeline

print("🚀 Auditing data/samples/household_bills.csv ...")
summary = run_audit_pipeline("household_bills.csv", subdir="samples", persist=False)

if summary is None:
    print("❌ Audit failed, see logs/water_billing.log")
    raise SystemExit(1)

print(f"✅ {summary['bills_processed']} bills audited, {summary['bills_flagged']} flagged")
for category, count in summary["findings_by_category"].items():
    print(f"   {category}: {count}")
print(f"   Findings saved to {summary['findings_file']}")
