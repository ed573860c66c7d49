"""
Shared Calculation Utilities for the Cost Calculators
=====================================================
Common functions used by the school cost calculator
(cost_calculator.py), the opportunity cost engine (opportunity_cost.py)
and the comparator (comparator.py).
"""

from typing import Iterable, Optional, Tuple

from cost_model import CostError, CurrencyRate, Duration


def prorate_annual(amount_per_year: float, duration: Duration) -> float:
    """
    Prorate a yearly amount linearly by month.
    A partial year contributes a proportional fraction (no floor/ceil).
    """
    return amount_per_year * (duration.total_months / 12)


def normalize_all(
    amounts: Iterable[Tuple[str, float]], currency: str, rates: CurrencyRate
) -> Tuple[Optional[dict], Optional[CostError]]:
    """
    Normalize several (key, local_amount) pairs sharing one currency.

    Returns:
        ({key: reporting_amount}, None) on success
        (None, CostError) on the first missing rate
    """
    result = {}
    for key, amount in amounts:
        value, error = rates.normalize(amount, currency)
        if error:
            return None, error
        result[key] = value
    return result, None


def avg_summary(groups: dict) -> dict:
    """
    Compute average/min/max/count summary for grouped numeric lists.

    Args:
        groups: Dict mapping group name to list of numeric values.

    Returns:
        Dict of {group_name: {avg, count, min, max}}, sorted by avg ascending
        (cheapest group first).
    """
    return {
        k: {
            "avg": round(sum(v) / len(v), 2) if v else 0,
            "count": len(v),
            "min": round(min(v), 2) if v else 0,
            "max": round(max(v), 2) if v else 0,
        }
        for k, v in sorted(
            groups.items(),
            key=lambda x: (sum(x[1]) / len(x[1]) if x[1] else 0, x[0]),
        )
    }
