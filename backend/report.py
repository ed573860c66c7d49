"""
Report Formatting
=================
Turns CostBreakdown / RankedComparison values into JSON-ready dicts for the
API and a plain-text table for the terminal. No calculation happens here.
"""

from typing import Optional

from comparator import summary
from cost_model import (
    CostBreakdown,
    CostError,
    OpportunityCostResult,
    PathProjection,
    RankedComparison,
    RoiComparison,
    SchoolProfile,
)


def format_currency(amount: float) -> str:
    """Compact money formatting: $950, $12.3K, $1.2M."""
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    if value < 0.01:
        return "$0"
    if value >= 1_000_000:
        return f"{sign}${value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{sign}${value / 1_000:.1f}K"
    return f"{sign}${value:.0f}"


# ─── Serialization ───────────────────────────────────────────────────────────


def school_to_dict(school: SchoolProfile) -> dict:
    return {
        "name": school.name,
        "short_name": school.short_name,
        "country": school.country.value,
        "region": school.region,
        "currency": school.currency,
        "tuition_per_year": school.tuition_per_year,
        "ranking": school.ranking,
        "program": school.program,
        "work_duration_limit_months": school.work_duration_limit_months,
    }


def error_to_dict(error: CostError) -> dict:
    return {"kind": error.kind.value, "message": error.message}


def breakdown_to_dict(breakdown: CostBreakdown, compact: bool = False) -> dict:
    data = {
        "school": breakdown.school,
        "duration": {
            "years": breakdown.duration.years,
            "months": breakdown.duration.months,
            "total_months": breakdown.duration.total_months,
        },
        "tier": breakdown.tier.value,
        "tier_multiplier": breakdown.tier.multiplier,
        "currency": breakdown.currency,
        "tuition": round(breakdown.tuition, 2),
        "living_cost": round(breakdown.living_cost, 2),
        "base_cost": round(breakdown.base_cost, 2),
        "fees_subtotal": round(breakdown.fees_subtotal, 2),
        "total": round(breakdown.total, 2),
    }
    if not compact:
        data["line_items"] = [
            {
                "category": item.category,
                "kind": item.kind,
                "local_amount": round(item.local_amount, 2),
                "local_currency": item.local_currency,
                "amount": round(item.amount, 2),
                "discretionary": item.discretionary,
            }
            for item in breakdown.line_items
        ]
    return data


def opportunity_to_dict(result: Optional[OpportunityCostResult]) -> Optional[dict]:
    if result is None:
        return None
    return {
        "currency": result.currency,
        "net_annual_savings": round(result.net_annual_savings, 2),
        "total": round(result.total, 2),
        "is_loss": result.is_loss,
    }


def projection_to_dict(projection: PathProjection, compact: bool = False) -> dict:
    path = projection.path
    data = {
        "name": path.name,
        "currency": projection.currency,
        "initial_salary": round(path.initial_salary, 2),
        "tax_rate": path.tax_rate,
        "work_start_delay": path.work_start_delay,
        "work_duration_limit_months": path.work_duration_limit_months,
        "study_cost": round(path.study_cost, 2) if path.study_cost is not None else None,
        "final_net_worth": round(projection.final_net_worth, 2),
    }
    if not compact:
        data["years"] = [
            {
                "year": y.year,
                "work_year": y.work_year,
                "income": round(y.income, 2),
                "net_income": round(y.net_income, 2),
                "living_cost": round(y.living_cost, 2),
                "study_cost": round(y.study_cost, 2),
                "disposable_income": round(y.disposable_income, 2),
                "investment_amount": round(y.investment_amount, 2),
                "investment_return": round(y.investment_return, 2),
                "total_investment": round(y.total_investment, 2),
                "total_cash": round(y.total_cash, 2),
                "net_worth": round(y.net_worth, 2),
            }
            for y in projection.years
        ]
    return data


def _round_or_none(value: Optional[float], digits: int = 4) -> Optional[float]:
    return None if value is None else round(value, digits)


def roi_to_dict(roi: Optional[RoiComparison], compact: bool = False) -> Optional[dict]:
    if roi is None:
        return None
    return {
        "abroad_roi": _round_or_none(roi.abroad_roi),
        "domestic_roi": _round_or_none(roi.domestic_roi),
        "roi_difference": _round_or_none(roi.roi_difference),
        "net_benefit": round(roi.net_benefit, 2),
        "abroad": projection_to_dict(roi.abroad, compact=compact),
        "domestic": projection_to_dict(roi.domestic, compact=compact),
    }


def comparison_to_dict(comparison: RankedComparison, compact: bool = False) -> dict:
    """Ranked entries first, then annotated failures."""
    return {
        "duration": {
            "years": comparison.duration.years,
            "months": comparison.duration.months,
        },
        "tier": comparison.tier.value,
        "currency": comparison.currency,
        "opportunity_cost": opportunity_to_dict(comparison.opportunity_cost),
        "opportunity_error": (
            error_to_dict(comparison.opportunity_error)
            if comparison.opportunity_error
            else None
        ),
        "entries": [
            {
                "rank": entry.rank,
                "status": entry.status,
                "school": school_to_dict(entry.school),
                "breakdown": breakdown_to_dict(entry.breakdown, compact=compact),
                "opportunity_cost": opportunity_to_dict(entry.opportunity_cost),
                "economic_cost": round(entry.economic_cost, 2),
                "roi": roi_to_dict(entry.roi, compact=compact),
            }
            for entry in comparison.entries
        ],
        "failures": [
            {
                "status": failure.status,
                "school": school_to_dict(failure.school),
                "error": error_to_dict(failure.error),
            }
            for failure in comparison.failures
        ],
        "summary": summary(comparison),
    }


# ─── Text Report ─────────────────────────────────────────────────────────────


def print_report(comparison: RankedComparison):
    """Print a formatted ranking table, failures included."""
    print("=" * 96)
    print("  STUDY ABROAD COST COMPARISON")
    print(
        f"  Duration: {comparison.duration}   Tier: {comparison.tier.value} "
        f"(x{comparison.tier.multiplier})   Currency: {comparison.currency}"
    )
    print("=" * 96)

    opp = comparison.opportunity_cost
    if opp is not None:
        label = "forgone savings" if not opp.is_loss else "savings (negative: staying also loses money)"
        print(
            f"\n  OPPORTUNITY COST: {format_currency(opp.total)} {label} "
            f"({format_currency(opp.net_annual_savings)}/yr)"
        )
    elif comparison.opportunity_error is not None:
        print(f"\n  OPPORTUNITY COST unavailable: {comparison.opportunity_error}")

    header = (
        f"\n{'#':>3} {'School':<10} {'Country':<12} {'Tuition':>9} "
        f"{'Living':>9} {'Fees':>8} {'Total':>9} {'w/ Opp.':>9}"
    )
    print(header)
    print("-" * 96)
    for entry in comparison.entries:
        b = entry.breakdown
        print(
            f"{entry.rank:>3} {entry.school.short_name:<10} {entry.school.country.value:<12} "
            f"{format_currency(b.tuition):>9} {format_currency(b.living_cost):>9} "
            f"{format_currency(b.fees_subtotal):>8} {format_currency(b.total):>9} "
            f"{format_currency(entry.economic_cost):>9}"
        )

    projected = [entry for entry in comparison.entries if entry.roi is not None]
    if projected:
        years = len(projected[0].roi.domestic.years)
        print(
            f"\n  {years}-YEAR NET WORTH   Stay home: "
            f"{format_currency(projected[0].roi.domestic.final_net_worth)}"
        )
        print(f"{'#':>3} {'School':<10} {'Net Worth':>10} {'Benefit':>10} {'ROI':>7}")
        for entry in projected:
            roi = entry.roi
            ratio = f"{roi.abroad_roi:.2f}x" if roi.abroad_roi is not None else "n/a"
            print(
                f"{entry.rank:>3} {entry.school.short_name:<10} "
                f"{format_currency(roi.abroad.final_net_worth):>10} "
                f"{format_currency(roi.net_benefit):>10} {ratio:>7}"
            )

    if comparison.failures:
        print(f"\n  NOT RANKED ({len(comparison.failures)})")
        for failure in comparison.failures:
            print(f"   {failure.school.short_name:<10} {failure.error}")


if __name__ == "__main__":
    from catalog import load_catalog
    from comparator import compare_catalog
    from config import (
        DEFAULT_COST_TIER,
        DEFAULT_DURATION_MONTHS,
        DEFAULT_DURATION_YEARS,
        setup_logging,
    )
    from cost_model import CostTier, Duration
    from opportunity_cost import reference_input

    setup_logging()
    print_report(
        compare_catalog(
            load_catalog(),
            None,
            Duration(DEFAULT_DURATION_YEARS, DEFAULT_DURATION_MONTHS),
            CostTier.parse(DEFAULT_COST_TIER),
            reference_input(),
            project_roi=True,
        )
    )
