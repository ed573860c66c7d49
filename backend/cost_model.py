"""
Cost Model
==========
Value types shared by the cost calculator, the opportunity cost engine and
the comparator.

Inputs (SchoolProfile, RegionProfile, FeeCategoryDefault, CurrencyRate) are
loaded once per process and never mutated. Outputs (CostBreakdown,
OpportunityCostResult, RankedComparison) are computed fresh per call.

Calculation problems are reported as CostError values, not exceptions:
calculation functions return a (result, error) pair where exactly one side
is None.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# ─── Enumerations ────────────────────────────────────────────────────────────


class Country(str, Enum):
    USA = "USA"
    UK = "UK"
    CANADA = "Canada"
    AUSTRALIA = "Australia"
    GERMANY = "Germany"
    FRANCE = "France"
    NETHERLANDS = "Netherlands"
    SWITZERLAND = "Switzerland"
    JAPAN = "Japan"
    SINGAPORE = "Singapore"
    HONG_KONG = "Hong Kong"
    CHINA = "China"

    @property
    def currency(self) -> str:
        return COUNTRY_CURRENCIES[self]

    @classmethod
    def parse(cls, name: str) -> "Country":
        """Look up a country by display name; unknown names raise ValueError."""
        for country in cls:
            if country.value == name:
                return country
        raise ValueError(f"Unknown country: {name!r}")


COUNTRY_CURRENCIES = {
    Country.USA: "USD",
    Country.UK: "GBP",
    Country.CANADA: "CAD",
    Country.AUSTRALIA: "AUD",
    Country.GERMANY: "EUR",
    Country.FRANCE: "EUR",
    Country.NETHERLANDS: "EUR",
    Country.SWITZERLAND: "CHF",
    Country.JAPAN: "JPY",
    Country.SINGAPORE: "SGD",
    Country.HONG_KONG: "HKD",
    Country.CHINA: "CNY",
}


class CostTier(str, Enum):
    """Consumption-level preset scaling living costs and discretionary fees."""

    BUDGET = "budget"
    STANDARD = "standard"
    COMFORTABLE = "comfortable"

    @property
    def multiplier(self) -> float:
        return TIER_MULTIPLIERS[self]

    @classmethod
    def parse(cls, name: str) -> "CostTier":
        try:
            return cls(name.lower())
        except ValueError:
            options = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown cost tier {name!r}, expected one of: {options}") from None


TIER_MULTIPLIERS = {
    CostTier.BUDGET: 0.8,
    CostTier.STANDARD: 1.0,
    CostTier.COMFORTABLE: 1.3,
}


class Seniority(str, Enum):
    """Reference salary tier for the domestic opportunity-cost baseline."""

    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"


class ErrorKind(str, Enum):
    INVALID_DURATION = "invalid_duration"
    MISSING_REGION = "missing_region"
    MISSING_RATE = "missing_rate"
    UNKNOWN_COST_CATEGORY = "unknown_cost_category"
    MISSING_FEE_SCHEDULE = "missing_fee_schedule"


@dataclass(frozen=True)
class CostError:
    """A deterministic input problem found while computing a cost."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


# ─── Cost Categories ─────────────────────────────────────────────────────────

# Share of the regional monthly baseline spent in each living-cost category.
# Shares sum to 1.0 so that a region with all factors at 1.0 spends exactly
# its baseline every month.
LIVING_COST_SHARES = {
    "housing": 0.45,
    "food": 0.25,
    "transport": 0.10,
    "utilities": 0.08,
    "entertainment": 0.07,
    "other": 0.05,
}


@dataclass(frozen=True)
class FeeCategory:
    name: str
    discretionary: bool


# Fixed categories are regulatory or contractual and never scale with tier.
FEE_CATEGORIES = {
    fc.name: fc
    for fc in (
        FeeCategory("application", discretionary=False),
        FeeCategory("visa_legal", discretionary=False),
        FeeCategory("insurance_medical", discretionary=False),
        FeeCategory("transportation", discretionary=True),
        FeeCategory("accommodation", discretionary=True),
        FeeCategory("financial_services", discretionary=False),
        FeeCategory("communication", discretionary=True),
        FeeCategory("study", discretionary=True),
        FeeCategory("job_search", discretionary=True),
        FeeCategory("emergency", discretionary=True),
    )
}


# ─── Inputs ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SchoolProfile:
    """A school option. Tuition is per year in the country's currency."""

    name: str
    short_name: str
    country: Country
    region: str
    tuition_per_year: float
    ranking: Optional[int] = None
    program: Optional[str] = None
    work_duration_limit_months: Optional[int] = None  # post-study work permit

    @property
    def currency(self) -> str:
        return self.country.currency


@dataclass(frozen=True)
class RegionProfile:
    """Regional living-cost baseline (local currency per month)."""

    country: Country
    name: str
    baseline_per_month: float
    category_factors: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "category_factors", MappingProxyType(dict(self.category_factors)))

    def factor(self, category: str) -> float:
        return self.category_factors.get(category, 1.0)

    @property
    def currency(self) -> str:
        return self.country.currency


@dataclass(frozen=True)
class FeeCategoryDefault:
    """One-time ancillary fee defaults for a country, in local currency."""

    country: Country
    amounts: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "amounts", MappingProxyType(dict(self.amounts)))

    @property
    def currency(self) -> str:
        return self.country.currency


@dataclass(frozen=True)
class Duration:
    years: int
    months: int = 0

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months

    def validate(self) -> Optional[CostError]:
        if self.years < 0 or not 0 <= self.months <= 11:
            return CostError(
                ErrorKind.INVALID_DURATION,
                f"years must be >= 0 and months in [0, 11], got {self.years}y {self.months}m",
            )
        if self.total_months <= 0:
            return CostError(ErrorKind.INVALID_DURATION, "duration must be longer than zero months")
        return None

    def __str__(self) -> str:
        return f"{self.years}y {self.months}m"


@dataclass(frozen=True)
class CurrencyRate:
    """
    USD value of one unit of each currency, plus the reporting currency.

    Converting X units of currency A to reporting currency R:
        X * to_usd[A] / to_usd[R]
    """

    to_usd: Mapping[str, float]
    reporting_currency: str = "USD"
    as_of: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "to_usd", MappingProxyType(dict(self.to_usd)))

    def _rate(self, currency: str) -> Tuple[Optional[float], Optional[CostError]]:
        rate = self.to_usd.get(currency)
        if rate is None:
            return None, CostError(ErrorKind.MISSING_RATE, f"no exchange rate for {currency}")
        if not math.isfinite(rate) or rate <= 0:
            return None, CostError(
                ErrorKind.MISSING_RATE, f"exchange rate for {currency} must be positive, got {rate!r}"
            )
        return rate, None

    def normalize(self, amount: float, currency: str) -> Tuple[Optional[float], Optional[CostError]]:
        """Convert a local-currency amount into the reporting currency."""
        source, error = self._rate(currency)
        if error:
            return None, error
        target, error = self._rate(self.reporting_currency)
        if error:
            return None, error
        return amount * source / target, None

    def denormalize(self, amount: float, currency: str) -> Tuple[Optional[float], Optional[CostError]]:
        """Convert a reporting-currency amount back into a local currency."""
        source, error = self._rate(self.reporting_currency)
        if error:
            return None, error
        target, error = self._rate(currency)
        if error:
            return None, error
        return amount * source / target, None


@dataclass(frozen=True)
class OpportunityCostInput:
    """Domestic reference figures, all per year, in `currency`."""

    reference_salary: float
    tax_rate: float
    domestic_living_cost: float
    currency: str = "USD"
    seniority: Optional[Seniority] = None


@dataclass(frozen=True)
class CareerPath:
    """
    One life path for the ROI projection, in reporting currency per year.

    Paid work starts after `work_start_delay` calendar years and, when
    `work_duration_limit_months` is set, stops once that many months have
    been worked. `study_cost` is spread evenly over the first
    `cost_duration` years and already includes living costs for those years.
    """

    name: str
    initial_salary: float
    salary_growth: float
    tax_rate: float
    living_cost: float
    living_cost_growth: float
    work_start_delay: int = 0
    work_duration_limit_months: Optional[int] = None
    study_cost: Optional[float] = None
    cost_duration: int = 0


# ─── Outputs ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LineItem:
    category: str
    kind: str  # "tuition", "living" or "fee"
    local_amount: float
    local_currency: str
    amount: float  # reporting currency
    discretionary: bool = False


@dataclass(frozen=True)
class CostBreakdown:
    school: str
    duration: Duration
    tier: CostTier
    currency: str
    tuition: float
    living_cost: float
    fees_subtotal: float
    total: float
    line_items: Tuple[LineItem, ...] = ()

    @property
    def base_cost(self) -> float:
        return self.tuition + self.living_cost

    def items_of_kind(self, kind: str) -> Tuple[LineItem, ...]:
        return tuple(item for item in self.line_items if item.kind == kind)


@dataclass(frozen=True)
class OpportunityCostResult:
    duration: Duration
    currency: str
    net_annual_savings: float
    total: float

    @property
    def is_loss(self) -> bool:
        """Staying home would also lose money (tax + living exceed salary)."""
        return self.net_annual_savings < 0


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    work_year: Optional[int]  # None while studying or after the work limit
    income: float
    net_income: float
    living_cost: float
    study_cost: float
    disposable_income: float
    cash_savings: float
    investment_amount: float
    investment_return: float
    total_investment: float
    total_investment_principal: float
    total_cash: float
    net_worth: float


@dataclass(frozen=True)
class PathProjection:
    path: CareerPath
    currency: str
    years: Tuple[YearlyProjection, ...] = ()

    @property
    def final_net_worth(self) -> float:
        return self.years[-1].net_worth if self.years else 0.0


@dataclass(frozen=True)
class RoiComparison:
    """Final-year outcome of studying abroad vs. staying home."""

    abroad: PathProjection
    domestic: PathProjection
    abroad_roi: Optional[float]  # None when the study cost is zero
    domestic_roi: Optional[float]

    @property
    def net_benefit(self) -> float:
        return self.abroad.final_net_worth - self.domestic.final_net_worth

    @property
    def roi_difference(self) -> Optional[float]:
        if self.abroad_roi is None or self.domestic_roi is None:
            return None
        return self.abroad_roi - self.domestic_roi


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    school: SchoolProfile
    breakdown: CostBreakdown
    opportunity_cost: Optional[OpportunityCostResult] = None
    roi: Optional[RoiComparison] = None

    status = "ok"

    @property
    def economic_cost(self) -> float:
        """Direct cost plus forgone domestic savings, when known."""
        if self.opportunity_cost is None:
            return self.breakdown.total
        return self.breakdown.total + self.opportunity_cost.total


@dataclass(frozen=True)
class FailedEntry:
    school: SchoolProfile
    error: CostError

    status = "failed"


@dataclass(frozen=True)
class RankedComparison:
    duration: Duration
    tier: CostTier
    currency: str
    entries: Tuple[RankedEntry, ...] = ()
    failures: Tuple[FailedEntry, ...] = ()
    opportunity_cost: Optional[OpportunityCostResult] = None
    opportunity_error: Optional[CostError] = None

    @property
    def cheapest(self) -> Optional[RankedEntry]:
        return self.entries[0] if self.entries else None
