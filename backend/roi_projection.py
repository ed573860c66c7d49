"""
ROI Projection
==============
Year-by-year net worth of studying abroad vs. staying home and working.

Timeline (calendar years, year 1 = first study year):
  - Abroad path: study years (tuition + living, no income), then an
    optional job-search gap, then paid work in the study country until the
    post-study work permit runs out. After that the path earns and spends
    nothing further while its investments keep compounding.
  - Domestic path: paid work from year 1 at the reference salary.

Per working year:
    salary      = initial_salary × (1 + salary_growth)^(work_year − 1)
    living      = living_cost × (1 + living_cost_growth)^(year − 1)
    disposable  = salary × (1 − tax_rate) − living
    invested    = max(disposable, 0) × INVESTMENT_PORTION
    return      = total_investment × r + invested × r × 0.5

The half-year return on new money approximates monthly contributions.

Net worth:
    net_worth = total_cash + total_investment − study_cost_paid

Final ROI (cost basis = the abroad path's study cost):
    abroad_roi   = (abroad_net_worth + cost) / cost
    domestic_roi = domestic_net_worth / cost

All figures are in the reporting currency.
"""

import math
from typing import Optional, Tuple

from config import (
    ABROAD_REFERENCE_SALARIES_USD,
    ABROAD_SALARY_GROWTH,
    ABROAD_TAX_RATES,
    DOMESTIC_SALARY_GROWTH,
    INVESTMENT_PORTION,
    INVESTMENT_RETURN_RATE,
    LIVING_COST_GROWTH,
    POST_STUDY_JOB_SEARCH_YEARS,
    PROJECTION_YEARS,
)
from cost_model import (
    CareerPath,
    CostBreakdown,
    CostError,
    CurrencyRate,
    ErrorKind,
    OpportunityCostInput,
    PathProjection,
    RegionProfile,
    RoiComparison,
    SchoolProfile,
    YearlyProjection,
)


# ─── Work Window ─────────────────────────────────────────────────────────────


def get_work_year(year: int, path: CareerPath) -> Optional[int]:
    """1-based work year for a calendar year, or None when not working."""
    if year <= path.work_start_delay:
        return None
    work_year = year - path.work_start_delay
    limit = path.work_duration_limit_months
    if limit is not None and (work_year - 1) * 12 >= limit:
        return None
    return work_year


def work_fraction(work_year: int, path: CareerPath) -> float:
    """Share of the work year covered by the work permit (1.0 if unlimited)."""
    limit = path.work_duration_limit_months
    if limit is None:
        return 1.0
    return min(1.0, (limit - (work_year - 1) * 12) / 12)


# ─── Projection ──────────────────────────────────────────────────────────────


def project(
    path: CareerPath,
    currency: str,
    years: int = PROJECTION_YEARS,
    return_rate: float = INVESTMENT_RETURN_RATE,
    investment_portion: float = INVESTMENT_PORTION,
) -> PathProjection:
    """Project one path over `years` calendar years."""
    total_cash = 0.0
    total_investment = 0.0
    total_principal = 0.0
    cost_paid = 0.0
    annual_study_cost = (
        path.study_cost / path.cost_duration
        if path.study_cost and path.cost_duration > 0
        else 0.0
    )

    yearly = []
    for year in range(1, years + 1):
        work_year = get_work_year(year, path)
        living_growth = (1 + path.living_cost_growth) ** (year - 1)
        study_cost = annual_study_cost if year <= path.cost_duration else 0.0
        cost_paid += study_cost

        if work_year is not None:
            income = (
                path.initial_salary
                * (1 + path.salary_growth) ** (work_year - 1)
                * work_fraction(work_year, path)
            )
            living = path.living_cost * living_growth
        else:
            income = 0.0
            # Study-year living is part of the study cost; a job-search gap
            # is paid out of pocket; after the work limit nothing is spent.
            in_gap = path.cost_duration < year <= path.work_start_delay
            living = path.living_cost * living_growth if in_gap else 0.0

        net_income = income * (1 - path.tax_rate)
        disposable = net_income - living
        invested = max(disposable, 0.0) * investment_portion
        cash_savings = disposable - invested

        investment_return = total_investment * return_rate + invested * return_rate * 0.5
        total_investment += investment_return + invested
        total_principal += invested
        total_cash += cash_savings

        yearly.append(
            YearlyProjection(
                year=year,
                work_year=work_year,
                income=income,
                net_income=net_income,
                living_cost=living,
                study_cost=study_cost,
                disposable_income=disposable,
                cash_savings=cash_savings,
                investment_amount=invested,
                investment_return=investment_return,
                total_investment=total_investment,
                total_investment_principal=total_principal,
                total_cash=total_cash,
                net_worth=total_cash + total_investment - cost_paid,
            )
        )

    return PathProjection(path=path, currency=currency, years=tuple(yearly))


def final_roi(abroad: PathProjection, domestic: PathProjection) -> RoiComparison:
    """Compare final net worth, using the abroad study cost as cost basis."""
    cost = abroad.path.study_cost or 0.0
    if cost <= 0:
        return RoiComparison(abroad=abroad, domestic=domestic, abroad_roi=None, domestic_roi=None)
    return RoiComparison(
        abroad=abroad,
        domestic=domestic,
        abroad_roi=(abroad.final_net_worth + cost) / cost,
        domestic_roi=domestic.final_net_worth / cost,
    )


# ─── Path Builders ───────────────────────────────────────────────────────────


def domestic_path(
    opportunity_input: OpportunityCostInput,
    rates: CurrencyRate,
) -> Tuple[Optional[CareerPath], Optional[CostError]]:
    """Stay home and work from year 1 at the reference salary."""
    salary, error = rates.normalize(opportunity_input.reference_salary, opportunity_input.currency)
    if error:
        return None, error
    living, error = rates.normalize(
        opportunity_input.domestic_living_cost, opportunity_input.currency
    )
    if error:
        return None, error

    return (
        CareerPath(
            name="Stay home",
            initial_salary=salary,
            salary_growth=DOMESTIC_SALARY_GROWTH,
            tax_rate=opportunity_input.tax_rate,
            living_cost=living,
            living_cost_growth=LIVING_COST_GROWTH,
        ),
        None,
    )


def abroad_path(
    school: SchoolProfile,
    region: RegionProfile,
    breakdown: CostBreakdown,
    rates: CurrencyRate,
) -> Tuple[Optional[CareerPath], Optional[CostError]]:
    """
    Study at `school`, then work in its country.

    A partial final study year counts as a whole year without income.
    Working-year living cost is the region baseline scaled by the same tier
    as the breakdown.
    """
    study_years = math.ceil(breakdown.duration.total_months / 12)

    salary, error = rates.normalize(ABROAD_REFERENCE_SALARIES_USD[school.country.value], "USD")
    if error:
        return None, error
    living, error = rates.normalize(
        region.baseline_per_month * 12 * breakdown.tier.multiplier, region.currency
    )
    if error:
        return None, error

    return (
        CareerPath(
            name=school.name,
            initial_salary=salary,
            salary_growth=ABROAD_SALARY_GROWTH,
            tax_rate=ABROAD_TAX_RATES[school.country.value],
            living_cost=living,
            living_cost_growth=LIVING_COST_GROWTH,
            work_start_delay=study_years + POST_STUDY_JOB_SEARCH_YEARS,
            work_duration_limit_months=school.work_duration_limit_months,
            study_cost=breakdown.total,
            cost_duration=study_years,
        ),
        None,
    )


def project_school(
    school: SchoolProfile,
    region: Optional[RegionProfile],
    breakdown: CostBreakdown,
    opportunity_input: OpportunityCostInput,
    rates: CurrencyRate,
    years: int = PROJECTION_YEARS,
) -> Tuple[Optional[RoiComparison], Optional[CostError]]:
    """Project both paths for one school and compare their final ROI."""
    if years < 1:
        return None, CostError(
            ErrorKind.INVALID_DURATION, f"projection horizon must be at least 1 year, got {years}"
        )
    if region is None:
        return None, CostError(
            ErrorKind.MISSING_REGION, f"region {school.region!r} not found for {school.short_name}"
        )

    home, error = domestic_path(opportunity_input, rates)
    if error:
        return None, error
    away, error = abroad_path(school, region, breakdown, rates)
    if error:
        return None, error

    currency = rates.reporting_currency
    return final_roi(project(away, currency, years), project(home, currency, years)), None
