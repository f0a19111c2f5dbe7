"""
helpers.py
-----------
🧰 Common utility functions for file handling, reading, and saving data.

Purpose:
--------
Centralized helper methods used by the batch comparison and the
orchestrator. Includes:
- Safe CSV reading/writing
- JSON export of run summaries
- Column-name cleaning for user-supplied spreadsheets

Dependencies:
-------------
- pandas
- water_billing.utils.data_paths
- water_billing.utils.logger

Usage Example:
--------------
from water_billing.utils.helpers import load_csv, save_csv
df = load_csv("incoming", "household_bills.csv")
save_csv(df, "processed", "Bill_Audit_Results.csv")
"""

import json
import pandas as pd
from water_billing.utils.data_paths import get_file_path
from water_billing.utils.logger import get_logger

logger = get_logger(__name__)

# ----------------------------------------------------------------------
# 1️⃣ CSV File Handlers
# ----------------------------------------------------------------------
def load_csv(subdir: str, filename: str) -> pd.DataFrame:
    """
    Loads a CSV file from a given data subdirectory (incoming, samples, etc.)
    """
    file_path = get_file_path(subdir, filename)
    try:
        df = pd.read_csv(file_path)
        logger.info(f"📄 Loaded CSV file: {file_path} | Rows: {len(df)}")
        return df
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"❌ Failed to load CSV {filename}: {e}")
        return pd.DataFrame()


def save_csv(df: pd.DataFrame, subdir: str, filename: str) -> str:
    """
    Saves a pandas DataFrame as CSV to a data subdirectory and returns the path.
    """
    file_path = get_file_path(subdir, filename)
    df.to_csv(file_path, index=False)
    logger.info(f"💾 Saved CSV file: {file_path} | Rows: {len(df)}")
    return file_path

# ----------------------------------------------------------------------
# 2️⃣ JSON File Handlers
# ----------------------------------------------------------------------
def save_json(data: dict, subdir: str, filename: str) -> str:
    """
    Saves a dictionary as a JSON file. Decimals and timestamps are written as strings.
    """
    file_path = get_file_path(subdir, filename)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4, default=str)
    logger.info(f"💾 JSON saved successfully: {file_path}")
    return file_path

# ----------------------------------------------------------------------
# 3️⃣ General Utilities
# ----------------------------------------------------------------------
def clean_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Cleans column names (strips whitespace, lowercases, replaces spaces).
    """
    df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")
    logger.debug("🧹 Cleaned column names for DataFrame.")
    return df
