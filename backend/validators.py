"""
Parameter Validation Module
===========================
Declarative validators for Flask request parameters.

Usage:
    from validators import validate_params, TIER, YEARS, MONTHS

    # In endpoint:
    params, error = validate_params(request.args, [TIER, YEARS, MONTHS])
    if error:
        return error
    tier = params["tier"]
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Set, Tuple, Union

from flask import jsonify

from config import (
    DEFAULT_COST_TIER,
    DEFAULT_DURATION_MONTHS,
    DEFAULT_DURATION_YEARS,
    DEFAULT_SENIORITY,
    PROJECTION_YEARS,
)
from cost_model import CostTier, Seniority

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


@dataclass
class ParamValidator:
    """
    Declarative validator for a single request parameter.

    Attributes:
        name: Parameter name in request.args
        param_type: Expected type (str, int, float, bool)
        default: Default value if not provided (None means optional)
        valid_values: Set of valid string values (for str type only)
        min_val: Minimum value (for int/float)
        max_val: Maximum value (for int/float)
        error_msg: Custom error message format
    """
    name: str
    param_type: type
    default: Any = None
    valid_values: Optional[Set[str]] = None
    min_val: Optional[Union[int, float]] = None
    max_val: Optional[Union[int, float]] = None
    error_msg: Optional[str] = None

    def _error(self, msg: str) -> Tuple:
        return jsonify({"error": self.error_msg or msg}), 400

    def _convert(self, raw: str) -> Any:
        if self.param_type == bool:
            lowered = raw.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(raw)
        if self.param_type == str:
            return raw.lower() if self.valid_values else raw
        value = self.param_type(raw)
        # float() accepts "nan" and "inf", neither of which is valid JSON
        if self.param_type == float and not math.isfinite(value):
            raise ValueError(raw)
        return value

    def validate(self, args: dict) -> Tuple[Optional[Any], Optional[Tuple]]:
        """
        Validate a parameter from request args.

        Returns:
            (value, None) on success
            (None, (jsonify_response, 400)) on error
        """
        raw = args.get(self.name)

        if raw is None or raw == "":
            return self.default, None

        try:
            value = self._convert(str(raw))
        except (ValueError, TypeError):
            return None, self._error(
                f"'{self.name}' must be a valid {self.param_type.__name__}"
            )

        if self.valid_values and value not in self.valid_values:
            options = ", ".join(f"'{v}'" for v in sorted(self.valid_values))
            return None, self._error(f"{self.name} must be one of: {options}")

        if self.min_val is not None and value < self.min_val:
            return None, self._error(f"{self.name} must be >= {self.min_val}")

        if self.max_val is not None and value > self.max_val:
            return None, self._error(f"{self.name} must be <= {self.max_val}")

        return value, None


def validate_params(
    args: dict,
    validators: list[ParamValidator]
) -> Tuple[dict, Optional[Tuple]]:
    """
    Validate multiple parameters at once.

    Returns:
        (params_dict, None) on success - dict maps param name to validated value
        ({}, error_tuple) on first validation error
    """
    result = {}
    for v in validators:
        value, error = v.validate(args)
        if error:
            return {}, error
        result[v.name] = value
    return result, None


def parse_school_list(raw: Optional[str]) -> Optional[list]:
    """Split a comma-separated 'schools' parameter; None means all schools."""
    if not raw:
        return None
    names = [name.strip() for name in raw.split(",")]
    return [name for name in names if name]


# ═══════════════════════════════════════════════════════════════════════════════
# PREDEFINED VALIDATORS
# ═══════════════════════════════════════════════════════════════════════════════

TIER = ParamValidator(
    name="tier",
    param_type=str,
    default=DEFAULT_COST_TIER,
    valid_values={t.value for t in CostTier},
)

YEARS = ParamValidator(
    name="years",
    param_type=int,
    default=DEFAULT_DURATION_YEARS,
    min_val=0,
    max_val=10,
)

# Zero total months is left to the calculator, which reports invalid_duration
MONTHS = ParamValidator(
    name="months",
    param_type=int,
    default=DEFAULT_DURATION_MONTHS,
    min_val=0,
    max_val=11,
    error_msg="months must be between 0 and 11",
)

SENIORITY = ParamValidator(
    name="seniority",
    param_type=str,
    default=DEFAULT_SENIORITY,
    valid_values={s.value for s in Seniority},
)

OPPORTUNITY = ParamValidator(
    name="opportunity",
    param_type=bool,
    default=False,
)

COMPACT = ParamValidator(
    name="compact",
    param_type=bool,
    default=False,
)

ROI = ParamValidator(
    name="roi",
    param_type=bool,
    default=False,
)

HORIZON = ParamValidator(
    name="horizon",
    param_type=int,
    default=PROJECTION_YEARS,
    min_val=1,
    max_val=40,
)


def validate_optional_float(args: dict, name: str) -> Tuple[Optional[float], Optional[Tuple]]:
    """Validate an optional float parameter."""
    validator = ParamValidator(name=name, param_type=float, default=None)
    return validator.validate(args)
