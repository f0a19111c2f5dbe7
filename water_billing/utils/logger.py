"""
logger.py
----------
📄 Centralized logging utility for the Water Bill Checker.

Purpose:
--------
Provides a consistent logging setup for all agents (bill calculation,
error detection, batch comparison, orchestration) to log events,
errors, and actions.

Outputs:
---------
✅ Logs to console
✅ Logs to file at <LOG_DIR>/water_billing.log (LOG_TO_FILE)
✅ Logs to the `logs` table (LOG_TO_DB)

Usage Example:
---------------
from water_billing.utils.logger import get_logger
logger = get_logger(__name__)
logger.info("Bill comparison started successfully.")
"""

import os
import logging

from water_billing import config

# ----------------------------------------------------------------------
# 1️⃣ Configure logging format
# ----------------------------------------------------------------------
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "water_billing.log"


class LazyFileHandler(logging.FileHandler):
    """File handler that creates its folder and file on the first record."""

    def __init__(self, filename: str, mode: str = "a"):
        super().__init__(filename, mode=mode, delay=True)

    def _open(self):
        os.makedirs(os.path.dirname(self.baseFilename), exist_ok=True)
        return super()._open()


class DBLogHandler(logging.Handler):
    """Custom handler to persist logs to the database."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Lazy import to avoid circular deps at module load
            from water_billing.database.db_utils import insert_log_entry

            # Raw message (just the log message itself)
            description = record.getMessage()

            # Formatted message (with timestamp, level, logger name)
            message = self.format(record)

            context = {
                "module": record.module,
                "filename": record.filename,
                "lineno": record.lineno,
                "funcName": record.funcName,
            }
            insert_log_entry(
                level=record.levelname,
                description=description,
                message=message,
                logger_name=record.name,
                context=context,
            )
        except Exception:
            self.handleError(record)


# ----------------------------------------------------------------------
# 2️⃣ Logging setup function
# ----------------------------------------------------------------------
def get_logger(name: str = "water-billing") -> logging.Logger:
    """
    Returns a configured logger instance that logs to the console and,
    depending on configuration, to a log file and the database.

    Parameters
    ----------
    name : str
        The name of the logger (typically the module name).

    Returns
    -------
    logging.Logger
        Configured logger object.
    """
    logger = logging.getLogger(name)
    logger.setLevel(config.LOG_LEVEL)

    # Avoid duplicate handlers
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # File handler
        if config.LOG_TO_FILE:
            file_handler = LazyFileHandler(os.path.join(config.LOG_DIR, LOG_FILE_NAME), mode="a")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        # DB handler
        if config.LOG_TO_DB:
            db_handler = DBLogHandler()
            db_handler.setFormatter(formatter)
            logger.addHandler(db_handler)

    return logger


# ----------------------------------------------------------------------
# 3️⃣ Self-test block (runs only if executed directly)
# ----------------------------------------------------------------------
if __name__ == "__main__":
    test_logger = get_logger("logger_test")
    test_logger.info("✅ Logger initialized successfully.")
    test_logger.warning("⚠️ This is a sample warning.")
    test_logger.error("❌ Example error message.")
    print(f"Logs saved to: {os.path.join(config.LOG_DIR, LOG_FILE_NAME)}")
