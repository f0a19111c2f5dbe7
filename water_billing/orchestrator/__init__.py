"""
Orchestrator package: exposes the batch audit entry point.

NOTE: Functions are NOT imported at package level to avoid opening a
database connection on import. Import directly from workflow_manager
when needed.
"""

__all__ = [
    "run_audit_pipeline",
]
