"""
Profile Catalog
===============
Immutable in-memory view of the reference data: schools, regions, per-country
fee defaults and exchange rates.

Data source: schools, regions, region_category_factors, fee_defaults and
exchange_rates tables in study_cost.db. Rows are validated while loading, so
an unknown country or a negative amount fails at load time rather than
surfacing later as a silent default.

The catalog is passed explicitly into the calculator and comparator; nothing
in the core reads the database.

Main entry point:
    load_catalog(db_path=None) -> Catalog
"""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from config import REPORTING_CURRENCY, get_db, get_logger
from cost_model import (
    Country,
    CurrencyRate,
    FeeCategoryDefault,
    RegionProfile,
    SchoolProfile,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Catalog:
    schools: Mapping[str, SchoolProfile]  # keyed by short name
    regions: Mapping[Tuple[Country, str], RegionProfile]
    fees: Mapping[Country, FeeCategoryDefault]
    rates: CurrencyRate = field(default_factory=lambda: CurrencyRate({"USD": 1.0}))

    def __post_init__(self):
        for name in ("schools", "regions", "fees"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def school(self, short_name: str) -> Optional[SchoolProfile]:
        return self.schools.get(short_name)

    def region_for(self, school: SchoolProfile) -> Optional[RegionProfile]:
        return self.regions.get((school.country, school.region))

    def fees_for(self, school: SchoolProfile) -> Optional[FeeCategoryDefault]:
        return self.fees.get(school.country)

    def unknown_schools(self, short_names: Iterable[str]) -> list:
        return [name for name in short_names if name not in self.schools]

    def profile_pairs(
        self, short_names: Optional[Sequence[str]] = None
    ) -> list:
        """
        Resolve schools to (SchoolProfile, RegionProfile | None) pairs.

        Unknown short names are skipped; use unknown_schools() to report them.
        A school whose region is absent is kept with region None so the
        comparator can annotate it as a failure.
        """
        if short_names is None:
            short_names = sorted(self.schools)
        return [
            (self.schools[name], self.region_for(self.schools[name]))
            for name in short_names
            if name in self.schools
        ]


def build_catalog(
    schools: Iterable[SchoolProfile],
    regions: Iterable[RegionProfile],
    fees: Iterable[FeeCategoryDefault],
    rates: CurrencyRate,
) -> Catalog:
    """Assemble a Catalog from plain profile lists."""
    return Catalog(
        schools={s.short_name: s for s in schools},
        regions={(r.country, r.name): r for r in regions},
        fees={f.country: f for f in fees},
        rates=rates,
    )


# ─── Row Validation ──────────────────────────────────────────────────────────


def _non_negative(value, what: str) -> float:
    if value is None or value < 0:
        raise ValueError(f"{what} must be a non-negative number, got {value!r}")
    return float(value)


def _school_from_row(row) -> SchoolProfile:
    return SchoolProfile(
        name=row["name"],
        short_name=row["short_name"],
        country=Country.parse(row["country"]),
        region=row["region"],
        tuition_per_year=_non_negative(row["tuition_per_year"], f"tuition of {row['short_name']}"),
        ranking=row["ranking"],
        program=row["program"],
        work_duration_limit_months=row["work_duration_limit_months"],
    )


# ─── Database Loading ────────────────────────────────────────────────────────


def _load_schools(conn) -> list[SchoolProfile]:
    cursor = conn.cursor()
    cursor.execute(
        "SELECT name, short_name, country, region, tuition_per_year, ranking, "
        "program, work_duration_limit_months FROM schools ORDER BY short_name"
    )
    return [_school_from_row(row) for row in cursor.fetchall()]


def _load_regions(conn) -> list[RegionProfile]:
    cursor = conn.cursor()
    cursor.execute("SELECT region_id, category, factor FROM region_category_factors")
    factors: dict[int, dict[str, float]] = {}
    for row in cursor.fetchall():
        factors.setdefault(row["region_id"], {})[row["category"]] = _non_negative(
            row["factor"], f"factor {row['category']}"
        )

    cursor.execute("SELECT id, country, name, baseline_per_month FROM regions")
    return [
        RegionProfile(
            country=Country.parse(row["country"]),
            name=row["name"],
            baseline_per_month=_non_negative(
                row["baseline_per_month"], f"baseline of region {row['name']}"
            ),
            category_factors=factors.get(row["id"], {}),
        )
        for row in cursor.fetchall()
    ]


def _load_fees(conn) -> list[FeeCategoryDefault]:
    cursor = conn.cursor()
    cursor.execute("SELECT country, category, amount FROM fee_defaults")
    amounts: dict[Country, dict[str, float]] = {}
    for row in cursor.fetchall():
        country = Country.parse(row["country"])
        amounts.setdefault(country, {})[row["category"]] = _non_negative(
            row["amount"], f"{row['country']} fee {row['category']}"
        )
    return [FeeCategoryDefault(country=c, amounts=a) for c, a in amounts.items()]


def _load_rates(conn, reporting_currency: str) -> CurrencyRate:
    cursor = conn.cursor()
    cursor.execute("SELECT currency, usd_per_unit, as_of FROM exchange_rates")
    to_usd = {}
    as_of = None
    for row in cursor.fetchall():
        rate = row["usd_per_unit"]
        if rate is None or rate <= 0:
            raise ValueError(f"exchange rate for {row['currency']} must be positive, got {rate!r}")
        to_usd[row["currency"]] = float(rate)
        if row["as_of"]:
            row_date = date.fromisoformat(row["as_of"])
            as_of = row_date if as_of is None else max(as_of, row_date)

    if reporting_currency not in to_usd:
        raise ValueError(f"reporting currency {reporting_currency} has no exchange rate")
    return CurrencyRate(to_usd=to_usd, reporting_currency=reporting_currency, as_of=as_of)


def load_catalog(db_path=None, reporting_currency: str = REPORTING_CURRENCY) -> Catalog:
    """Load and validate the full reference catalog from the database."""
    with get_db(db_path) as conn:
        schools = _load_schools(conn)
        regions = _load_regions(conn)
        fees = _load_fees(conn)
        rates = _load_rates(conn, reporting_currency)

    catalog = build_catalog(schools, regions, fees, rates)
    logger.info(
        "Loaded catalog: %d schools, %d regions, %d fee tables, %d rates",
        len(catalog.schools),
        len(catalog.regions),
        len(catalog.fees),
        len(rates.to_usd),
    )
    return catalog
