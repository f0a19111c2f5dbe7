"""Tests for the end-to-end batch audit pipeline."""
import json
import os

import pandas as pd
import pytest

from water_billing.database import db_utils
from water_billing.orchestrator.workflow_manager import (
    COMPARISON_FILE,
    FINDINGS_FILE,
    SUMMARY_FILE,
    main,
    run_audit_pipeline,
)
from water_billing.utils.data_paths import get_file_path

SAMPLE_BILLS = [
    {"account_id": 1001, "consumption": 20, "persons": 4, "period_months": 2,
     "has_disability_benefit": "false", "year": 2026, "actual_bill_amount": 200,
     "billing_basis": "measured"},
    {"account_id": 1002, "consumption": 1, "persons": 1, "period_months": 2,
     "has_disability_benefit": "false", "year": 2026, "billing_basis": "measured"},
    {"account_id": 1003, "consumption": 14, "persons": 3, "period_months": 2,
     "has_disability_benefit": "false", "year": 2026, "actual_bill_amount": 119.11,
     "previous_consumption": 10, "billing_basis": "measured"},
    {"account_id": 1004, "consumption": 6, "persons": 2, "period_months": 2,
     "has_disability_benefit": "false", "year": 2026, "previous_consumption": 10,
     "billing_basis": "estimated"},
    {"account_id": 1005, "consumption": 35, "persons": 2, "period_months": 2,
     "has_disability_benefit": "true", "year": 2025, "current_meter_reading": 1532.4,
     "billing_basis": "measured"},
    {"account_id": 1006, "consumption": -4, "persons": 2, "period_months": 2,
     "has_disability_benefit": "false", "year": 2026, "billing_basis": "measured"},
]


@pytest.fixture
def bills_csv():
    file_name = "test_household_bills.csv"
    pd.DataFrame(SAMPLE_BILLS).to_csv(get_file_path("incoming", file_name), index=False)
    return file_name


@pytest.fixture
def unusable_db(tmp_path, monkeypatch):
    """Database path nested under a regular file, so the engine cannot be created."""
    blocker = tmp_path / "not_a_folder"
    blocker.write_text("x")
    db_utils.reset_engine(None)
    monkeypatch.setattr(db_utils, "DB_URL", f"sqlite:///{blocker}/sub/water_billing.db")
    yield
    db_utils.reset_engine(None)


class TestRunAuditPipeline:

    def test_summary_without_database(self, bills_csv):
        summary = run_audit_pipeline(bills_csv, persist=False)

        assert summary["audit_run_id"] is None
        assert summary["bills_processed"] == 6
        assert summary["bills_flagged"] == 4
        assert summary["bills_invalid"] == 1
        assert summary["findings_detected"] == 6
        assert summary["findings_by_category"] == {
            "overcharge": 1,
            "consumption-spike": 1,
            "estimation": 1,
            "consumption-drop": 1,
            "allocation-underuse": 1,
            "meter-reading-note": 1,
        }

    def test_writes_outputs(self, bills_csv):
        summary = run_audit_pipeline(bills_csv, persist=False)

        assert summary["comparison_file"] == get_file_path("processed", COMPARISON_FILE)
        assert len(pd.read_csv(summary["comparison_file"])) == 6
        assert len(pd.read_csv(summary["findings_file"])) == 6
        with open(get_file_path("output", SUMMARY_FILE), encoding="utf-8") as f:
            assert json.load(f)["findings_detected"] == 6

    def test_persists_findings_and_run(self, db_engine, bills_csv):
        summary = run_audit_pipeline(bills_csv, persist=True)

        assert summary["audit_run_id"] is not None
        stored = db_utils.fetch_findings()
        assert len(stored) == 6
        assert set(stored["audit_run_id"]) == {summary["audit_run_id"]}
        assert set(db_utils.fetch_findings(account_id="1004")["category"]) == {
            "estimation", "consumption-drop", "allocation-underuse",
        }

    def test_missing_file_returns_none(self):
        assert run_audit_pipeline("does_not_exist.csv", persist=False) is None
        assert not os.path.exists(get_file_path("incoming", "does_not_exist.csv"))

    def test_database_setup_failure_returns_none(self, unusable_db, bills_csv):
        assert run_audit_pipeline(bills_csv, persist=True) is None


def test_main_exit_code(bills_csv):
    assert main([bills_csv, "--no-db"]) == 0
    assert main(["does_not_exist.csv", "--no-db"]) == 1


def test_main_exit_code_when_database_is_unusable(unusable_db, bills_csv):
    assert main([bills_csv]) == 1
