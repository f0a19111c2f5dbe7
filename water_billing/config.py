# water_billing/config.py
import os
from dotenv import load_dotenv
from sqlalchemy.engine.url import URL

# Load from .env file for local development
load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def get_env(key: str, default=None):
    """
    Get an environment variable from os.environ (populated from .env
    when running locally).

    Parameters
    ----------
    key : str
        Environment variable name
    default : str, optional
        Default value if key not found

    Returns
    -------
    str
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, default: bool = False) -> bool:
    """Read a true/false style environment flag."""
    value = get_env(key)
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


ENV = get_env("ENV", "dev")

# -------------------------
# Database configuration
# -------------------------
DB_TYPE = get_env("DB_TYPE", "sqlite")
DB_URL = None

if DB_TYPE == "postgres":
    DB_URL = URL.create(
        drivername="postgresql+psycopg2",
        username=get_env("DB_USER"),
        password=get_env("DB_PASSWORD"),
        host=get_env("DB_HOST"),
        port=get_env("DB_PORT"),
        database=get_env("DB_NAME"),
    )
else:
    DB_PATH = get_env("DB_PATH", os.path.join(PROJECT_ROOT, "data", "water_billing.db"))
    DB_URL = f"sqlite:///{DB_PATH}"

# -------------------------
# Paths
# -------------------------
DATA_DIR = get_env("DATA_DIR", os.path.join(PROJECT_ROOT, "data"))
LOG_DIR = get_env("LOG_DIR", os.path.join(PROJECT_ROOT, "logs"))

# -------------------------
# Logging
# -------------------------
LOG_LEVEL = get_env("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = get_bool_env("LOG_TO_FILE", True)
# Mirrors log records into the `logs` table; off unless the DB is initialised.
LOG_TO_DB = get_bool_env("LOG_TO_DB", False)
