"""
Opportunity Cost Engine
=======================
Forgone net domestic savings while studying abroad instead of working at home.

    net_annual_savings = reference_salary × (1 − tax_rate) − domestic_living_cost
    total              = net_annual_savings × months / 12

A negative result means staying home would also lose money (tax plus living
cost exceed the salary). It is reported as-is, not clamped to zero.

The result depends on the duration but not on the school, so the comparator
computes it once per comparison.
"""

from typing import Optional, Tuple

from calculator_common import prorate_annual
from config import (
    DEFAULT_SENIORITY,
    DOMESTIC_CURRENCY,
    DOMESTIC_LIVING_COST_USD,
    DOMESTIC_TAX_RATE,
    REFERENCE_SALARIES_USD,
)
from cost_model import (
    CostError,
    CurrencyRate,
    Duration,
    OpportunityCostInput,
    OpportunityCostResult,
    Seniority,
)


def reference_input(
    seniority=DEFAULT_SENIORITY,
    tax_rate: Optional[float] = None,
    domestic_living_cost: Optional[float] = None,
) -> OpportunityCostInput:
    """
    Build the domestic reference input from configured defaults.

    Args:
        seniority: "junior", "mid" or "senior" (or a Seniority member).
        tax_rate: Override for the combined domestic tax rate.
        domestic_living_cost: Override for the yearly domestic living cost.
    """
    seniority = Seniority(seniority)
    if tax_rate is None:
        tax_rate = DOMESTIC_TAX_RATE
    if domestic_living_cost is None:
        domestic_living_cost = DOMESTIC_LIVING_COST_USD

    return OpportunityCostInput(
        reference_salary=REFERENCE_SALARIES_USD[seniority.value],
        tax_rate=tax_rate,
        domestic_living_cost=domestic_living_cost,
        currency=DOMESTIC_CURRENCY,
        seniority=seniority,
    )


def compute(
    opportunity_input: OpportunityCostInput,
    duration: Duration,
    rates: CurrencyRate,
) -> Tuple[Optional[OpportunityCostResult], Optional[CostError]]:
    """Compute forgone net savings over the duration, in reporting currency."""
    error = duration.validate()
    if error:
        return None, error

    net_annual_local = (
        opportunity_input.reference_salary * (1 - opportunity_input.tax_rate)
        - opportunity_input.domestic_living_cost
    )
    net_annual, error = rates.normalize(net_annual_local, opportunity_input.currency)
    if error:
        return None, error
    total, error = rates.normalize(
        prorate_annual(net_annual_local, duration), opportunity_input.currency
    )
    if error:
        return None, error

    return (
        OpportunityCostResult(
            duration=duration,
            currency=rates.reporting_currency,
            net_annual_savings=net_annual,
            total=total,
        ),
        None,
    )
