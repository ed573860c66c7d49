"""
Database setup for the Study Abroad Cost reference catalog
"""

import sqlite3

from config import DB_PATH, get_logger

logger = get_logger(__name__)


def create_database(db_path=None):
    """Create the database schema"""
    db_path = db_path or DB_PATH
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    # Schools table
    # ranking and work_duration_limit_months are optional: NULL means unknown,
    # which is distinct from zero.
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS schools (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            short_name TEXT NOT NULL UNIQUE,
            country TEXT NOT NULL,
            region TEXT NOT NULL,
            tuition_per_year REAL NOT NULL,
            ranking INTEGER,
            program TEXT,
            work_duration_limit_months INTEGER
        )
    """)

    # Regions: monthly living-cost baseline in local currency
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS regions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            country TEXT NOT NULL,
            name TEXT NOT NULL,
            baseline_per_month REAL NOT NULL,
            UNIQUE(country, name)
        )
    """)

    # Per-region living-cost category factors (absent category = 1.0)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS region_category_factors (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            region_id INTEGER NOT NULL,
            category TEXT NOT NULL,
            factor REAL NOT NULL DEFAULT 1.0,
            FOREIGN KEY (region_id) REFERENCES regions(id),
            UNIQUE(region_id, category)
        )
    """)

    # One-time ancillary fee defaults per country, local currency
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS fee_defaults (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            country TEXT NOT NULL,
            category TEXT NOT NULL,
            amount REAL NOT NULL,
            UNIQUE(country, category)
        )
    """)

    # Exchange rates: USD value of one unit of the currency
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS exchange_rates (
            currency TEXT PRIMARY KEY,
            usd_per_unit REAL NOT NULL,
            country_name TEXT,
            as_of TEXT
        )
    """)

    # ─── Indexes ─────────────────────────────────────────────────────────────

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_schools_country ON schools(country)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_fee_defaults_country ON fee_defaults(country)"
    )

    conn.commit()
    conn.close()

    logger.info("Database created at: %s", db_path)


if __name__ == "__main__":
    create_database()
