"""
Comparator
==========
Ranks several school options by estimated total cost.

  - The cost calculator runs once per school. A school whose calculation
    fails is recorded as a failure and left out of the ranking; the rest of
    the comparison still completes.
  - The opportunity cost is computed once (it does not depend on the school)
    and attached to every ranked entry.
  - With project_roi, the stay-home projection is also computed once and
    each ranked school gets its own study-abroad projection against it.
  - Ranking is ascending by total cost, ties broken by school name, so
    identical input always yields identical order.
"""

from collections import defaultdict
from typing import Mapping, Optional, Sequence, Tuple

import cost_calculator
import opportunity_cost
import roi_projection
from calculator_common import avg_summary
from config import get_logger
from cost_model import (
    Country,
    CostTier,
    CurrencyRate,
    Duration,
    FailedEntry,
    FeeCategoryDefault,
    OpportunityCostInput,
    RankedComparison,
    RankedEntry,
    RegionProfile,
    SchoolProfile,
)

logger = get_logger(__name__)


def compare(
    profiles: Sequence[Tuple[SchoolProfile, Optional[RegionProfile]]],
    duration: Duration,
    tier: CostTier,
    fees: Mapping[Country, FeeCategoryDefault],
    rates: CurrencyRate,
    opportunity_input: Optional[OpportunityCostInput] = None,
    project_roi: bool = False,
) -> RankedComparison:
    """
    Compute and rank the cost of every (school, region) pair.

    Args:
        profiles: Schools with their resolved region (None when the region
            is missing from the catalog).
        fees: Fee defaults keyed by country.
        opportunity_input: Domestic reference figures; omit to skip the
            opportunity cost.
        project_roi: Also project year-by-year net worth against staying
            home (needs opportunity_input).
    """
    opportunity = None
    opportunity_error = None
    if opportunity_input is not None:
        opportunity, opportunity_error = opportunity_cost.compute(
            opportunity_input, duration, rates
        )
        if opportunity_error:
            logger.warning("Opportunity cost unavailable: %s", opportunity_error)

    # The stay-home path does not depend on the school either
    domestic = None
    if project_roi and opportunity_input is not None:
        home, error = roi_projection.domestic_path(opportunity_input, rates)
        if error:
            logger.warning("ROI projection unavailable: %s", error)
        else:
            domestic = roi_projection.project(home, rates.reporting_currency)

    succeeded = []
    failures = []
    for school, region in profiles:
        breakdown, error = cost_calculator.compute(
            school, region, duration, tier, fees.get(school.country), rates
        )
        if error:
            logger.warning("Excluding %s from ranking: %s", school.short_name, error)
            failures.append(FailedEntry(school=school, error=error))
            continue

        roi = None
        if domestic is not None:
            away, error = roi_projection.abroad_path(school, region, breakdown, rates)
            if error:
                logger.warning("No ROI projection for %s: %s", school.short_name, error)
            else:
                abroad = roi_projection.project(away, rates.reporting_currency)
                roi = roi_projection.final_roi(abroad, domestic)
        succeeded.append((school, breakdown, roi))

    succeeded.sort(key=lambda item: (item[1].total, item[0].name))
    failures.sort(key=lambda f: (f.school.name, f.school.short_name))

    entries = tuple(
        RankedEntry(
            rank=rank,
            school=school,
            breakdown=breakdown,
            opportunity_cost=opportunity,
            roi=roi,
        )
        for rank, (school, breakdown, roi) in enumerate(succeeded, 1)
    )

    return RankedComparison(
        duration=duration,
        tier=tier,
        currency=rates.reporting_currency,
        entries=entries,
        failures=tuple(failures),
        opportunity_cost=opportunity,
        opportunity_error=opportunity_error,
    )


def compare_catalog(
    catalog,
    short_names: Optional[Sequence[str]],
    duration: Duration,
    tier: CostTier,
    opportunity_input: Optional[OpportunityCostInput] = None,
    project_roi: bool = False,
) -> RankedComparison:
    """Compare schools from the catalog by short name (all schools if None)."""
    return compare(
        catalog.profile_pairs(short_names),
        duration,
        tier,
        catalog.fees,
        catalog.rates,
        opportunity_input,
        project_roi,
    )


def summary(comparison: RankedComparison) -> dict:
    """Average/min/max total cost per country plus overall counts."""
    by_country = defaultdict(list)
    for entry in comparison.entries:
        by_country[entry.school.country.value].append(entry.breakdown.total)

    cheapest = comparison.cheapest
    return {
        "ranked": len(comparison.entries),
        "failed": len(comparison.failures),
        "cheapest": cheapest.school.short_name if cheapest else None,
        "by_country": avg_summary(by_country),
    }
