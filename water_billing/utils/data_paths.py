"""
data_paths.py
--------------
Centralized file-path management utility.

📍 Purpose:
This module standardizes where household bill files are read from and
where audit outputs are written. The batch comparison and the
orchestrator import these paths instead of hard-coding directories.

Example:
    from water_billing.utils.data_paths import INCOMING_DIR, get_file_path
"""

import os

from water_billing import config

# ---------------------------------------------------------------------
# 1️⃣  Define the root 'data' directory (DATA_DIR setting)
# ---------------------------------------------------------------------
DATA_DIR = config.DATA_DIR

# ---------------------------------------------------------------------
# 2️⃣  Define sub-directories for different pipeline stages
# ---------------------------------------------------------------------
INCOMING_DIR  = os.path.join(DATA_DIR, "incoming")   # Household bill exports to audit
PROCESSED_DIR = os.path.join(DATA_DIR, "processed")  # Audit results and findings
SAMPLES_DIR   = os.path.join(DATA_DIR, "samples")    # Demo/reference files
OUTPUT_DIR    = os.path.join(DATA_DIR, "output")     # Exports for reporting collaborators

FOLDERS = {
    "incoming": INCOMING_DIR,
    "processed": PROCESSED_DIR,
    "samples": SAMPLES_DIR,
    "output": OUTPUT_DIR,
}


# ---------------------------------------------------------------------
# 3️⃣  Helper function to build safe file paths
# ---------------------------------------------------------------------
def get_file_path(subdir: str, filename: str) -> str:
    """
    Returns a full path for a given filename inside one of the known sub-folders,
    creating the folder if it is missing.
    Example: get_file_path("incoming", "household_bills.csv")
    """
    if subdir not in FOLDERS:
        raise ValueError(f"❌ Invalid subdir '{subdir}'. Must be one of: {list(FOLDERS.keys())}")

    folder = FOLDERS[subdir]
    os.makedirs(folder, exist_ok=True)
    return os.path.join(folder, filename)


# ---------------------------------------------------------------------
# 4️⃣  Diagnostics (run this file directly to verify folder setup)
# ---------------------------------------------------------------------
if __name__ == "__main__":
    print("✅ Data path configuration loaded successfully!\n")
    print(f"Data Directory   : {DATA_DIR}")
    print(f"Incoming Folder  : {INCOMING_DIR}")
    print(f"Processed Folder : {PROCESSED_DIR}")
    print(f"Samples Folder   : {SAMPLES_DIR}")
    print(f"Output Folder    : {OUTPUT_DIR}")

    example_path = get_file_path("incoming", "household_bills.csv")
    print(f"\nExample file path → {example_path}")
