"""
Import Reference Data into Database
====================================
Populates the reference catalog tables (exchange_rates, regions,
region_category_factors, fee_defaults, schools) with the hand-curated
dataset below.

Run once after creating the tables:
    python3 import_reference_data.py
"""

import sqlite3

from config import DB_PATH, get_logger

logger = get_logger(__name__)

RATES_AS_OF = "2025-09-01"


def import_all(db_path=None):
    """Import all reference data into the database."""
    # First ensure tables exist
    from database import create_database

    db_path = db_path or DB_PATH
    create_database(db_path)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    _import_exchange_rates(cursor)
    _import_regions(cursor)
    _import_fee_defaults(cursor)
    _import_schools(cursor)

    conn.commit()
    conn.close()
    logger.info("All reference data imported successfully.")


# ═════════════════════════════════════════════════════════════════════════════
# EXCHANGE RATES
# ═════════════════════════════════════════════════════════════════════════════


def _import_exchange_rates(cursor):
    """Import exchange rates (USD per 1 unit of local currency)."""
    rates = {
        "USD": (1.0, "USA"),
        "GBP": (1.27, "UK"),
        "EUR": (1.09, "Eurozone"),
        "CAD": (0.73, "Canada"),
        "AUD": (0.66, "Australia"),
        "CHF": (1.13, "Switzerland"),
        "JPY": (0.0067, "Japan"),
        "SGD": (0.74, "Singapore"),
        "HKD": (0.128, "Hong Kong"),
        "CNY": (0.139, "China"),
    }

    cursor.execute("DELETE FROM exchange_rates")
    for currency, (rate, country) in rates.items():
        cursor.execute(
            "INSERT INTO exchange_rates (currency, usd_per_unit, country_name, as_of) "
            "VALUES (?, ?, ?, ?)",
            (currency, rate, country, RATES_AS_OF),
        )
    logger.info("Imported %d exchange rates", len(rates))


# ═════════════════════════════════════════════════════════════════════════════
# REGIONS
# ═════════════════════════════════════════════════════════════════════════════


def _import_regions(cursor):
    """Import regional monthly baselines and category factors."""
    # (country, region): (baseline_per_month_lc, {category: factor})
    regions = {
        ("USA", "Phoenix"): (1800, {}),
        ("USA", "Boston"): (2600, {"housing": 1.2, "transport": 0.9}),
        ("USA", "Champaign"): (1500, {"housing": 0.85, "entertainment": 0.9}),
        ("USA", "Los Angeles"): (2500, {"housing": 1.15, "transport": 1.3}),
        ("UK", "London"): (1700, {"housing": 1.25, "transport": 1.2}),
        ("UK", "Edinburgh"): (1200, {}),
        ("Canada", "Toronto"): (2400, {"housing": 1.2, "utilities": 0.9}),
        ("Australia", "Melbourne"): (2600, {"food": 1.1}),
        ("Germany", "Munich"): (1300, {"housing": 1.3, "transport": 0.8}),
        ("Netherlands", "Delft"): (1250, {"housing": 1.1, "transport": 0.7}),
        ("Switzerland", "Zurich"): (2300, {"food": 1.2}),
        ("Singapore", "Singapore"): (2000, {"housing": 1.2, "transport": 0.8}),
        ("Hong Kong", "Hong Kong"): (11000, {"housing": 1.3, "transport": 0.7}),
        ("Japan", "Tokyo"): (180000, {"housing": 1.1, "food": 0.95}),
    }

    cursor.execute("DELETE FROM region_category_factors")
    cursor.execute("DELETE FROM regions")
    factor_count = 0
    for (country, name), (baseline, factors) in regions.items():
        cursor.execute(
            "INSERT INTO regions (country, name, baseline_per_month) VALUES (?, ?, ?)",
            (country, name, baseline),
        )
        region_id = cursor.lastrowid
        for category, factor in factors.items():
            cursor.execute(
                "INSERT INTO region_category_factors (region_id, category, factor) "
                "VALUES (?, ?, ?)",
                (region_id, category, factor),
            )
            factor_count += 1
    logger.info("Imported %d regions (%d category factors)", len(regions), factor_count)


# ═════════════════════════════════════════════════════════════════════════════
# FEE DEFAULTS
# ═════════════════════════════════════════════════════════════════════════════

FEE_COLUMNS = (
    "application",
    "visa_legal",
    "insurance_medical",
    "transportation",
    "accommodation",
    "financial_services",
    "communication",
    "study",
    "job_search",
    "emergency",
)


def _import_fee_defaults(cursor):
    """Import one-time fee defaults per country (local currency)."""
    # Values follow FEE_COLUMNS order
    fees = {
        "USA": (150, 535, 2500, 1500, 2000, 200, 600, 1200, 800, 3000),
        # Immigration health surcharge is paid with the visa
        "UK": (80, 1266, 0, 900, 1500, 150, 400, 800, 500, 2500),
        "Canada": (150, 235, 900, 1600, 2500, 200, 700, 1200, 800, 3500),
        "Australia": (150, 1600, 700, 2000, 2500, 200, 700, 1200, 800, 3500),
        "Germany": (75, 75, 1400, 900, 1500, 150, 400, 800, 500, 2500),
        "Netherlands": (100, 228, 1200, 900, 1800, 150, 400, 800, 500, 2500),
        "Switzerland": (150, 150, 3600, 1000, 2000, 200, 500, 1000, 600, 3000),
        "Singapore": (20, 150, 400, 1300, 2000, 100, 500, 1000, 600, 3000),
        "Hong Kong": (600, 1800, 3000, 8000, 12000, 800, 2500, 6000, 4000, 20000),
        "Japan": (30000, 3000, 25000, 150000, 250000, 10000, 60000, 120000, 80000, 300000),
    }

    cursor.execute("DELETE FROM fee_defaults")
    count = 0
    for country, amounts in fees.items():
        for category, amount in zip(FEE_COLUMNS, amounts):
            cursor.execute(
                "INSERT INTO fee_defaults (country, category, amount) VALUES (?, ?, ?)",
                (country, category, amount),
            )
            count += 1
    logger.info("Imported %d fee defaults for %d countries", count, len(fees))


# ═════════════════════════════════════════════════════════════════════════════
# SCHOOLS
# ═════════════════════════════════════════════════════════════════════════════


def _import_schools(cursor):
    """Import the school catalog (tuition per year in local currency)."""
    # (name, short_name, country, region, tuition, ranking, program, work_limit_months)
    schools = [
        ("Arizona State University", "ASU", "USA", "Phoenix", 26000, 200, "MS Computer Science", 36),
        ("Northeastern University", "NEU", "USA", "Boston", 54000, 375, "MS Computer Science", 36),
        ("University of Illinois Urbana-Champaign", "UIUC", "USA", "Champaign", 38000, 69, "MCS", 36),
        ("University of Southern California", "USC", "USA", "Los Angeles", 62000, 125, "MS Computer Science", 36),
        ("Imperial College London", "IC", "UK", "London", 38000, 2, "MSc Computing", 24),
        ("University of Edinburgh", "UoE", "UK", "Edinburgh", 34000, 27, "MSc Artificial Intelligence", 24),
        ("University of Toronto", "UofT", "Canada", "Toronto", 60000, 25, "MScAC", 36),
        ("University of Melbourne", "UniMelb", "Australia", "Melbourne", 50000, 13, "Master of Computer Science", 24),
        ("Technical University of Munich", "TUM", "Germany", "Munich", 12000, 28, "MSc Informatics", 18),
        ("Delft University of Technology", "TUD", "Netherlands", "Delft", 20000, 49, "MSc Computer Science", 12),
        ("ETH Zurich", "ETH", "Switzerland", "Zurich", 4380, 7, "MSc Computer Science", 6),
        ("National University of Singapore", "NUS", "Singapore", "Singapore", 45000, 8, "MComp", None),
        ("University of Hong Kong", "HKU", "Hong Kong", "Hong Kong", 180000, 17, "MSc Computer Science", 24),
        ("University of Tokyo", "UTokyo", "Japan", "Tokyo", 535800, 32, "MS Information Science", None),
    ]

    cursor.execute("DELETE FROM schools")
    for row in schools:
        cursor.execute(
            "INSERT INTO schools (name, short_name, country, region, tuition_per_year, "
            "ranking, program, work_duration_limit_months) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            row,
        )
    logger.info("Imported %d schools", len(schools))


if __name__ == "__main__":
    from config import setup_logging

    setup_logging()
    import_all()
