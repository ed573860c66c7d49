"""
Centralized configuration for the Study Abroad Cost backend.

Single source of truth for:
  - Database path and connection management
  - Application defaults (duration, cost tier, reporting currency)
  - Reference opportunity-cost assumptions
  - ROI projection assumptions (growth, investment, post-study salaries)
  - Logging configuration
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

# ─── Database ────────────────────────────────────────────────────────────────

DB_PATH = Path(__file__).parent / "study_cost.db"


@contextmanager
def get_db(db_path=None):
    """
    Context-managed database connection.

    Usage:
        with get_db() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT ...")

    The connection is automatically closed when the block exits,
    even if an exception occurs.
    """
    conn = sqlite3.connect(db_path or DB_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


# ─── Application Defaults ────────────────────────────────────────────────────

DEFAULT_DURATION_YEARS = 2
DEFAULT_DURATION_MONTHS = 0
DEFAULT_COST_TIER = "standard"

# All breakdown figures are normalized to this currency
REPORTING_CURRENCY = "USD"


# ─── Opportunity Cost Reference ──────────────────────────────────────────────

# Domestic reference salary per seniority tier, USD per year
REFERENCE_SALARIES_USD = {
    "junior": 30000.0,
    "mid": 52000.0,
    "senior": 85000.0,
}
DEFAULT_SENIORITY = "mid"

# Combined income tax + social contributions
DOMESTIC_TAX_RATE = 0.282

# Domestic living cost, USD per year
DOMESTIC_LIVING_COST_USD = 12700.0
DOMESTIC_CURRENCY = "USD"


# ─── ROI Projection ──────────────────────────────────────────────────────────
# Year-by-year net worth of the study-abroad path vs. staying home.
# Calendar year 1 is the first study year.

PROJECTION_YEARS = 10

# Share of yearly disposable income invested (rest kept as cash)
INVESTMENT_PORTION = 0.20
# Broad equity index, annualized
INVESTMENT_RETURN_RATE = 0.10

DOMESTIC_SALARY_GROWTH = 0.05
ABROAD_SALARY_GROWTH = 0.05
LIVING_COST_GROWTH = 0.03

# Years between graduation and the first paid year abroad
POST_STUDY_JOB_SEARCH_YEARS = 0

# Entry-level graduate salary in the study country, USD per year
ABROAD_REFERENCE_SALARIES_USD = {
    "USA": 85000.0,
    "UK": 48000.0,
    "Canada": 60000.0,
    "Australia": 58000.0,
    "Germany": 56000.0,
    "France": 45000.0,
    "Netherlands": 52000.0,
    "Switzerland": 95000.0,
    "Japan": 38000.0,
    "Singapore": 55000.0,
    "Hong Kong": 45000.0,
    "China": 30000.0,
}

# Combined income tax + social contributions in the study country
ABROAD_TAX_RATES = {
    "USA": 0.28,
    "UK": 0.26,
    "Canada": 0.27,
    "Australia": 0.25,
    "Germany": 0.38,
    "France": 0.33,
    "Netherlands": 0.36,
    "Switzerland": 0.22,
    "Japan": 0.25,
    "Singapore": 0.10,
    "Hong Kong": 0.12,
    "China": 0.20,
}


# ─── Logging ─────────────────────────────────────────────────────────────────

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level=logging.INFO):
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance."""
    return logging.getLogger(name)
