"""
Cost Calculator for Study Abroad Programs
=========================================
Computes the total cost of a program at one school over a study duration,
normalized to the reporting currency.

Cost Formula:
    tuition     = tuition_per_year × months / 12
    living      = Σ(category)[baseline × share[c] × factor[c]] × tier × months
    fees        = Σ(category)[default_amount × (tier if discretionary else 1)]
    total       = tuition + living + fees

  - Tuition is prorated linearly by month; a partial year counts as a fraction.
  - Regional category factors are applied before the tier multiplier.
  - Fees are one-time costs, independent of duration. Fixed categories
    (visa, insurance, ...) never scale with tier.

Every local amount is converted with the supplied CurrencyRate. A missing rate
is an error, never an implicit 1.0.

Main entry points:
    compute(profile, region, duration, tier, fees, rates) -> (CostBreakdown, error)
    compute_for_school(catalog, short_name, duration, tier) -> (CostBreakdown, error)
"""

from typing import Optional, Tuple

from calculator_common import normalize_all, prorate_annual
from cost_model import (
    FEE_CATEGORIES,
    LIVING_COST_SHARES,
    CostBreakdown,
    CostError,
    CostTier,
    CurrencyRate,
    Duration,
    ErrorKind,
    FeeCategoryDefault,
    LineItem,
    RegionProfile,
    SchoolProfile,
)


# ─── Input Checks ────────────────────────────────────────────────────────────


def _check_region(
    profile: SchoolProfile, region: Optional[RegionProfile]
) -> Optional[CostError]:
    if (
        region is None
        or region.country != profile.country
        or region.name != profile.region
    ):
        return CostError(
            ErrorKind.MISSING_REGION,
            f"{profile.short_name} references region {profile.region!r} "
            f"({profile.country.value}) which is not in the catalog",
        )
    unknown = sorted(set(region.category_factors) - set(LIVING_COST_SHARES))
    if unknown:
        return CostError(
            ErrorKind.UNKNOWN_COST_CATEGORY,
            f"region {region.name} has unknown living-cost categories: {', '.join(unknown)}",
        )
    return None


def _check_fees(
    profile: SchoolProfile, fees: Optional[FeeCategoryDefault]
) -> Optional[CostError]:
    if fees is None or fees.country != profile.country:
        return CostError(
            ErrorKind.MISSING_FEE_SCHEDULE,
            f"no fee defaults for {profile.country.value}",
        )
    unknown = sorted(set(fees.amounts) - set(FEE_CATEGORIES))
    if unknown:
        return CostError(
            ErrorKind.UNKNOWN_COST_CATEGORY,
            f"{profile.country.value} fee table has unknown categories: {', '.join(unknown)}",
        )
    return None


# ─── Components ──────────────────────────────────────────────────────────────


def _living_cost_local(
    region: RegionProfile, duration: Duration, tier: CostTier
) -> list[tuple[str, float]]:
    """Per-category living cost over the whole duration, local currency."""
    return [
        (
            category,
            region.baseline_per_month
            * share
            * region.factor(category)
            * tier.multiplier
            * duration.total_months,
        )
        for category, share in LIVING_COST_SHARES.items()
    ]


def _fees_local(fees: FeeCategoryDefault, tier: CostTier) -> list[tuple[str, float]]:
    """One-time fee amounts, tier-scaled for discretionary categories only."""
    items = []
    for name, category in FEE_CATEGORIES.items():
        amount = fees.amounts.get(name, 0.0)
        if category.discretionary:
            amount *= tier.multiplier
        items.append((name, amount))
    return items


# ─── Core Calculation ────────────────────────────────────────────────────────


def compute(
    profile: SchoolProfile,
    region: Optional[RegionProfile],
    duration: Duration,
    tier: CostTier,
    fees: Optional[FeeCategoryDefault],
    rates: CurrencyRate,
) -> Tuple[Optional[CostBreakdown], Optional[CostError]]:
    """
    Compute the cost breakdown for one school.

    Returns:
        (CostBreakdown, None) on success
        (None, CostError) for the first problem found, checked in order:
        duration, region, region categories, fee table, exchange rates.
    """
    error = (
        duration.validate()
        or _check_region(profile, region)
        or _check_fees(profile, fees)
    )
    if error:
        return None, error

    # ── Tuition ──────────────────────────────────────────────────────────
    tuition_local = prorate_annual(profile.tuition_per_year, duration)
    tuition, error = rates.normalize(tuition_local, profile.currency)
    if error:
        return None, error

    # ── Living cost (per category, then summed) ──────────────────────────
    living_local = _living_cost_local(region, duration, tier)
    living, error = normalize_all(living_local, region.currency, rates)
    if error:
        return None, error

    # ── Ancillary fees ───────────────────────────────────────────────────
    fees_local = _fees_local(fees, tier)
    fee_amounts, error = normalize_all(fees_local, fees.currency, rates)
    if error:
        return None, error

    line_items = [
        LineItem("tuition", "tuition", tuition_local, profile.currency, tuition)
    ]
    line_items += [
        LineItem(category, "living", local, region.currency, living[category])
        for category, local in living_local
    ]
    line_items += [
        LineItem(
            name,
            "fee",
            local,
            fees.currency,
            fee_amounts[name],
            discretionary=FEE_CATEGORIES[name].discretionary,
        )
        for name, local in fees_local
    ]

    living_cost = sum(living.values())
    fees_subtotal = sum(fee_amounts.values())

    return (
        CostBreakdown(
            school=profile.short_name,
            duration=duration,
            tier=tier,
            currency=rates.reporting_currency,
            tuition=tuition,
            living_cost=living_cost,
            fees_subtotal=fees_subtotal,
            total=tuition + living_cost + fees_subtotal,
            line_items=tuple(line_items),
        ),
        None,
    )


def compute_for_school(
    catalog,
    short_name: str,
    duration: Duration,
    tier: CostTier,
) -> Tuple[Optional[CostBreakdown], Optional[CostError]]:
    """
    Resolve a school's region and fee table from the catalog and compute.

    Raises KeyError for a short name that is not in the catalog; a missing
    region or fee table is reported as a CostError like any other input problem.
    """
    profile = catalog.schools[short_name]
    return compute(
        profile,
        catalog.region_for(profile),
        duration,
        tier,
        catalog.fees_for(profile),
        catalog.rates,
    )
