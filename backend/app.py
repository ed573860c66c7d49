"""
Flask API for the Study Abroad Cost estimator
Serves cost breakdowns and school rankings from the reference catalog
"""

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import setup_logging, get_logger
from validators import (
    validate_params,
    validate_optional_float,
    parse_school_list,
    TIER,
    YEARS,
    MONTHS,
    SENIORITY,
    OPPORTUNITY,
    COMPACT,
    ROI,
    HORIZON,
)

setup_logging()
logger = get_logger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for the frontend

# Loaded lazily from the database on first use; tests may install their own
app.config.setdefault("CATALOG", None)


def _catalog():
    if app.config["CATALOG"] is None:
        from catalog import load_catalog

        app.config["CATALOG"] = load_catalog()
    return app.config["CATALOG"]


def _duration_and_tier(params: dict):
    from cost_model import CostTier, Duration

    return Duration(params["years"], params["months"]), CostTier.parse(params["tier"])


# ─── Global Error Handlers ───────────────────────────────────────────────────


@app.errorhandler(404)
def not_found(e):
    """Return JSON instead of HTML for 404 errors."""
    return jsonify({"error": "Resource not found"}), 404


@app.errorhandler(ValueError)
def handle_value_error(e):
    """Catch unhandled ValueErrors and return a 400 JSON response."""
    logger.warning("ValueError: %s", e)
    return jsonify({"error": str(e)}), 400


@app.errorhandler(Exception)
def handle_exception(e):
    """Catch-all for unhandled exceptions, return a 500 JSON response."""
    logger.exception("Unhandled exception: %s", e)
    return jsonify({"error": "Internal server error"}), 500


@app.route("/api/health", methods=["GET"])
def health():
    """Health check endpoint"""
    return jsonify({"status": "ok", "message": "Study Abroad Cost API is running"})


@app.route("/api/schools", methods=["GET"])
def get_schools():
    """
    List catalog schools with optional filters
    Query params:
      - country: Filter by country name (USA, UK, ...)
      - max_tuition: Max yearly tuition in local currency
    """
    from report import school_to_dict

    max_tuition, error = validate_optional_float(request.args, "max_tuition")
    if error:
        return error

    schools = sorted(_catalog().schools.values(), key=lambda s: s.name)
    country = request.args.get("country")
    if country:
        schools = [s for s in schools if s.country.value == country]
    if max_tuition is not None:
        schools = [s for s in schools if s.tuition_per_year <= max_tuition]

    return jsonify({"count": len(schools), "schools": [school_to_dict(s) for s in schools]})


@app.route("/api/regions", methods=["GET"])
def get_regions():
    """List regions with their monthly baseline and category factors"""
    regions = [
        {
            "country": r.country.value,
            "name": r.name,
            "currency": r.currency,
            "baseline_per_month": r.baseline_per_month,
            "category_factors": dict(r.category_factors),
        }
        for r in sorted(_catalog().regions.values(), key=lambda r: (r.country.value, r.name))
    ]
    return jsonify({"count": len(regions), "regions": regions})


@app.route("/api/cost/<short_name>", methods=["GET"])
def get_school_cost(short_name):
    """
    Cost breakdown for one school.

    Query params (all optional):
      - years: Whole study years (default: 2)
      - months: Additional months, 0-11 (default: 0)
      - tier: Cost tier: "budget", "standard" or "comfortable" (default: standard)
      - compact: If "true", omit line items (default: false)
    """
    from cost_calculator import compute_for_school
    from report import breakdown_to_dict, error_to_dict, school_to_dict

    params, error = validate_params(request.args, [YEARS, MONTHS, TIER, COMPACT])
    if error:
        return error

    catalog = _catalog()
    school = catalog.school(short_name)
    if school is None:
        return jsonify({"error": f"School {short_name!r} not found"}), 404

    duration, tier = _duration_and_tier(params)
    breakdown, cost_error = compute_for_school(catalog, short_name, duration, tier)
    if cost_error:
        return jsonify({"school": school_to_dict(school), "error": error_to_dict(cost_error)}), 422

    return jsonify({
        "school": school_to_dict(school),
        "breakdown": breakdown_to_dict(breakdown, compact=params["compact"]),
    })


@app.route("/api/compare", methods=["GET"])
def get_comparison():
    """
    Rank schools by total cost.

    Query params (all optional):
      - schools: Comma-separated short names (default: whole catalog)
      - years, months, tier: As for /api/cost
      - opportunity: If "true", attach the domestic opportunity cost
      - seniority: Reference salary tier: "junior", "mid" or "senior" (default: mid)
      - roi: If "true", attach a year-by-year net worth projection per school
        (implies the opportunity-cost baseline)
      - compact: If "true", omit line items
    """
    from comparator import compare_catalog
    from opportunity_cost import reference_input
    from report import comparison_to_dict

    params, error = validate_params(
        request.args, [YEARS, MONTHS, TIER, SENIORITY, OPPORTUNITY, ROI, COMPACT]
    )
    if error:
        return error

    catalog = _catalog()
    short_names = parse_school_list(request.args.get("schools"))
    if short_names is not None:
        unknown = catalog.unknown_schools(short_names)
        if unknown:
            return jsonify({"error": f"Unknown schools: {', '.join(unknown)}"}), 404

    duration, tier = _duration_and_tier(params)
    wants_baseline = params["opportunity"] or params["roi"]
    opportunity_input = reference_input(params["seniority"]) if wants_baseline else None

    comparison = compare_catalog(
        catalog, short_names, duration, tier, opportunity_input, project_roi=params["roi"]
    )
    return jsonify(comparison_to_dict(comparison, compact=params["compact"]))


@app.route("/api/opportunity", methods=["GET"])
def get_opportunity_cost():
    """
    Forgone domestic savings over the study duration.

    Query params (all optional):
      - years, months: Study duration
      - seniority: Reference salary tier (default: mid)
      - tax_rate: Override combined tax rate (0-1)
      - living_cost: Override yearly domestic living cost
    """
    from cost_model import Duration
    from opportunity_cost import compute, reference_input
    from report import error_to_dict, opportunity_to_dict

    params, error = validate_params(request.args, [YEARS, MONTHS, SENIORITY])
    if error:
        return error
    tax_rate, error = validate_optional_float(request.args, "tax_rate")
    if error:
        return error
    if tax_rate is not None and not 0 <= tax_rate <= 1:
        return jsonify({"error": "tax_rate must be between 0 and 1"}), 400
    living_cost, error = validate_optional_float(request.args, "living_cost")
    if error:
        return error

    opportunity_input = reference_input(params["seniority"], tax_rate, living_cost)
    result, cost_error = compute(
        opportunity_input, Duration(params["years"], params["months"]), _catalog().rates
    )
    if cost_error:
        return jsonify({"error": error_to_dict(cost_error)}), 422

    return jsonify({
        "seniority": params["seniority"],
        "reference_salary": opportunity_input.reference_salary,
        "tax_rate": opportunity_input.tax_rate,
        "domestic_living_cost": opportunity_input.domestic_living_cost,
        "opportunity_cost": opportunity_to_dict(result),
    })


@app.route("/api/roi/<short_name>", methods=["GET"])
def get_school_roi(short_name):
    """
    Year-by-year net worth: study at one school vs. stay home and work.

    Query params (all optional):
      - years, months, tier: Study duration and cost tier, as for /api/cost
      - seniority: Domestic reference salary tier (default: mid)
      - horizon: Projection length in calendar years, 1-40 (default: 10)
      - compact: If "true", omit the yearly rows
    """
    from cost_calculator import compute_for_school
    from opportunity_cost import reference_input
    from report import error_to_dict, roi_to_dict, school_to_dict
    from roi_projection import project_school

    params, error = validate_params(
        request.args, [YEARS, MONTHS, TIER, SENIORITY, HORIZON, COMPACT]
    )
    if error:
        return error

    catalog = _catalog()
    school = catalog.school(short_name)
    if school is None:
        return jsonify({"error": f"School {short_name!r} not found"}), 404

    duration, tier = _duration_and_tier(params)
    breakdown, cost_error = compute_for_school(catalog, short_name, duration, tier)
    if cost_error is None:
        roi, cost_error = project_school(
            school,
            catalog.region_for(school),
            breakdown,
            reference_input(params["seniority"]),
            catalog.rates,
            params["horizon"],
        )
    if cost_error:
        return jsonify({"school": school_to_dict(school), "error": error_to_dict(cost_error)}), 422

    return jsonify({
        "school": school_to_dict(school),
        "total_cost": round(breakdown.total, 2),
        "roi": roi_to_dict(roi, compact=params["compact"]),
    })


if __name__ == "__main__":
    print("\n🎓 Study Abroad Cost API")
    print("📊 Tiers: budget, standard (default), comfortable")
    print("\n🔗 Test it: http://localhost:5000/api/compare?schools=ASU,IC,TUM&opportunity=true&compact=true\n")

    app.run(debug=True, host="0.0.0.0", port=5000)
