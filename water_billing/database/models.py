# water_billing/database/models.py


from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class AuditRun(Base):
    """
    Tracks every batch audit execution.
    """
    __tablename__ = "audit_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_file = Column(String(255), nullable=False)
    start_time = Column(DateTime, default=datetime.utcnow)
    end_time = Column(DateTime)
    status = Column(String(20), default="running")
    bills_processed = Column(Integer, default=0)
    findings_detected = Column(Integer, default=0)
    error_msg = Column(Text)


class BillFinding(Base):
    """
    Stores findings produced by the error detector for each account.
    """
    __tablename__ = "bill_findings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    audit_run_id = Column(Integer)
    account_id = Column(String(100))
    kind = Column(String(20))
    category = Column(String(50))
    severity = Column(String(10))
    title = Column(String(255))
    description = Column(Text)
    recommended_action = Column(Text)
    detected_on = Column(DateTime, default=datetime.utcnow)
    status = Column(String(50), default="flagged")


class LogEntry(Base):
    """
    Stores application logs for audit/debug.
    """
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    logger_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    context = Column(JSON)
