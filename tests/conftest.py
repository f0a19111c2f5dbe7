import os
import tempfile

# Point logs, data and the default database at a scratch folder before
# any water_billing module reads its configuration.
_SCRATCH = tempfile.mkdtemp(prefix="water_billing_tests_")
os.environ.setdefault("LOG_DIR", os.path.join(_SCRATCH, "logs"))
os.environ.setdefault("DATA_DIR", os.path.join(_SCRATCH, "data"))
os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("DB_PATH", os.path.join(_SCRATCH, "water_billing.db"))
os.environ.setdefault("LOG_TO_DB", "false")

import pytest
from sqlalchemy import create_engine

from water_billing.agents.bill_calculation.calculation_engine import BillingInput, compute_bill


@pytest.fixture
def db_engine(tmp_path):
    """Fresh SQLite database with all tables, wired into db_utils."""
    from water_billing.database import db_utils
    from water_billing.database.init_db import init_db

    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    db_utils.reset_engine(engine)
    yield engine
    db_utils.reset_engine(None)


@pytest.fixture
def family_of_four():
    """Four residents, bi-monthly, 2026, 20 m3: the whole bill is reduced rate."""
    billing_input = BillingInput(consumption=20, persons=4, period_months=2,
                                 has_disability_benefit=False, year=2026)
    return billing_input, compute_bill(billing_input)
