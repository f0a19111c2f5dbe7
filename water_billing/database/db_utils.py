"""
db_utils.py
------------
🗄️ Common database utility functions for the Water Bill Checker.

Purpose:
--------
Provides reusable insert/fetch/update operations for the batch audit.
Stores detected findings, audit run bookkeeping and log entries.

Dependencies:
-------------
- SQLAlchemy ORM
- pandas (for tabular export)
- water_billing.config (for DB_URL)
- water_billing.database.models (ORM classes)
"""
import os
from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from water_billing.config import DB_URL
from water_billing.database.models import AuditRun, BillFinding, LogEntry
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)

# ----------------------------------------------------------------------
# 1️⃣ Setup Engine and Session Factory (Lazy-loaded)
# ----------------------------------------------------------------------
_engine = None
_SessionLocal = None


def get_engine():
    """Lazily create and return the SQLAlchemy engine."""
    global _engine
    if _engine is None:
        url = make_url(DB_URL)
        if url.drivername.startswith("sqlite") and url.database:
            os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)
        _engine = create_engine(url)
    return _engine


def get_session():
    """Lazily create and return a new database session."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine())
    return _SessionLocal()


def reset_engine(engine=None):
    """
    Swap the engine used by this module (tests, alternate databases).
    Passing None disposes of the current engine and falls back to DB_URL.
    """
    global _engine, _SessionLocal
    if _engine is not None and engine is None:
        _engine.dispose()
    _engine = engine
    _SessionLocal = None

# ----------------------------------------------------------------------
# 2️⃣ Audit Runs
# ----------------------------------------------------------------------
def start_audit_run(source_file: str) -> Optional[int]:
    """
    Inserts a new audit run with status 'running' and returns its id.
    """
    session = get_session()
    try:
        run = AuditRun(source_file=source_file, status="running")
        session.add(run)
        session.commit()
        logger.info(f"▶️ Audit run {run.id} started for {source_file}")
        return run.id
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to start audit run: {e}")
        session.rollback()
        return None
    finally:
        session.close()


def finish_audit_run(run_id: int, status: str, bills_processed: int = 0,
                     findings_detected: int = 0, error_msg: Optional[str] = None):
    """
    Marks an audit run as finished ('success' or 'failed').
    """
    session = get_session()
    try:
        run = session.get(AuditRun, run_id)
        if run is None:
            logger.warning(f"⚠️ Audit run {run_id} not found in DB.")
            return
        run.end_time = datetime.utcnow()
        run.status = status
        run.bills_processed = bills_processed
        run.findings_detected = findings_detected
        run.error_msg = error_msg
        session.commit()
        logger.info(f"🔄 Audit run {run_id} → {status}")
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to update audit run {run_id}: {e}")
        session.rollback()
    finally:
        session.close()

# ----------------------------------------------------------------------
# 3️⃣ Findings
# ----------------------------------------------------------------------
def insert_findings(records: Iterable[dict], audit_run_id: Optional[int] = None) -> int:
    """
    Inserts finding rows (dicts with account_id, kind, category, severity,
    title, description, recommended_action). Returns the number inserted.
    """
    session = get_session()
    try:
        rows = [BillFinding(audit_run_id=audit_run_id, **record) for record in records]
        session.add_all(rows)
        session.commit()
        logger.info(f"📌 Inserted {len(rows)} findings.")
        return len(rows)
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to insert findings: {e}")
        session.rollback()
        return 0
    finally:
        session.close()


def fetch_findings(account_id: Optional[str] = None) -> pd.DataFrame:
    """
    Returns stored findings as a DataFrame, optionally for a single account.
    """
    session = get_session()
    try:
        query = session.query(BillFinding)
        if account_id:
            query = query.filter(BillFinding.account_id == str(account_id))
        records = [
            {
                "id": f.id,
                "audit_run_id": f.audit_run_id,
                "account_id": f.account_id,
                "kind": f.kind,
                "category": f.category,
                "severity": f.severity,
                "title": f.title,
                "description": f.description,
                "recommended_action": f.recommended_action,
                "detected_on": f.detected_on,
                "status": f.status,
            }
            for f in query.order_by(BillFinding.id).all()
        ]
        logger.info(f"📂 Retrieved {len(records)} findings.")
        return pd.DataFrame(records)
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to fetch findings: {e}")
        return pd.DataFrame()
    finally:
        session.close()

# ----------------------------------------------------------------------
# 4️⃣ Logs
# ----------------------------------------------------------------------
def insert_log_entry(level: str, description: str, message: str,
                     logger_name: Optional[str] = None, context: Optional[dict] = None):
    """
    Persists one log record. Does not log itself, since it is called from
    the DB log handler.
    """
    session = get_session()
    try:
        session.add(LogEntry(
            level=level,
            description=description,
            message=message,
            logger_name=logger_name,
            context=context,
        ))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    finally:
        session.close()
