"""
Tests for the Flask API endpoints.

Uses a synthetic in-memory catalog instead of the on-disk database.
Run with: cd backend && python -m pytest tests/ -v
"""

import json
import sys
from pathlib import Path

# Ensure backend directory is on path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from catalog import build_catalog
from config import PROJECTION_YEARS
from cost_model import (
    Country,
    CurrencyRate,
    FeeCategoryDefault,
    RegionProfile,
    SchoolProfile,
)


@pytest.fixture
def catalog():
    schools = [
        SchoolProfile("Arizona State University", "ASU", Country.USA, "Phoenix", 26000, ranking=200),
        SchoolProfile("Imperial College London", "IC", Country.UK, "London", 30000, ranking=2),
        SchoolProfile("Ghost Institute", "GI", Country.USA, "Nowhere", 1000),
    ]
    regions = [
        RegionProfile(Country.USA, "Phoenix", 1800),
        RegionProfile(Country.UK, "London", 1500, {"housing": 1.0}),
    ]
    fees = [
        FeeCategoryDefault(Country.USA, {"visa_legal": 500, "study": 1000}),
        FeeCategoryDefault(Country.UK, {"visa_legal": 400}),
    ]
    rates = CurrencyRate({"USD": 1.0, "GBP": 1.25})
    return build_catalog(schools, regions, fees, rates)


@pytest.fixture
def client(catalog):
    from app import app

    app.config["TESTING"] = True
    app.config["CATALOG"] = catalog
    with app.test_client() as client:
        yield client
    app.config["CATALOG"] = None


class TestCatalogEndpoints:
    """Test listing endpoints."""

    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ok"

    def test_schools(self, client):
        data = client.get("/api/schools").get_json()
        assert data["count"] == 3
        assert data["schools"][0]["short_name"] == "ASU"

    def test_schools_country_filter(self, client):
        data = client.get("/api/schools?country=UK").get_json()
        assert [s["short_name"] for s in data["schools"]] == ["IC"]

    def test_schools_max_tuition(self, client):
        data = client.get("/api/schools?max_tuition=26000").get_json()
        assert {s["short_name"] for s in data["schools"]} == {"ASU", "GI"}

    def test_schools_bad_max_tuition(self, client):
        assert client.get("/api/schools?max_tuition=cheap").status_code == 400

    def test_schools_non_finite_max_tuition(self, client):
        for value in ("nan", "inf", "-inf"):
            assert client.get(f"/api/schools?max_tuition={value}").status_code == 400

    def test_regions(self, client):
        data = client.get("/api/regions").get_json()
        assert data["count"] == 2
        london = next(r for r in data["regions"] if r["name"] == "London")
        assert london["currency"] == "GBP"


class TestCostEndpoint:
    """Test the single-school breakdown endpoint."""

    def test_default_breakdown(self, client):
        """2 years, standard tier: 52000 + 43200 + 500 + 1000."""
        resp = client.get("/api/cost/ASU")
        assert resp.status_code == 200
        breakdown = resp.get_json()["breakdown"]
        assert breakdown["base_cost"] == pytest.approx(95200)
        assert breakdown["total"] == pytest.approx(96700)
        assert breakdown["tier"] == "standard"
        assert len(breakdown["line_items"]) > 0

    def test_partial_year(self, client):
        breakdown = client.get("/api/cost/ASU?years=2&months=6").get_json()["breakdown"]
        assert breakdown["tuition"] == pytest.approx(65000)

    def test_compact(self, client):
        breakdown = client.get("/api/cost/ASU?compact=true").get_json()["breakdown"]
        assert "line_items" not in breakdown

    def test_unknown_school(self, client):
        assert client.get("/api/cost/XYZ").status_code == 404

    def test_invalid_tier(self, client):
        assert client.get("/api/cost/ASU?tier=luxury").status_code == 400

    def test_months_out_of_range(self, client):
        assert client.get("/api/cost/ASU?months=12").status_code == 400

    def test_zero_duration(self, client):
        resp = client.get("/api/cost/ASU?years=0&months=0")
        assert resp.status_code == 422
        assert resp.get_json()["error"]["kind"] == "invalid_duration"

    def test_missing_region(self, client):
        resp = client.get("/api/cost/GI")
        assert resp.status_code == 422
        assert resp.get_json()["error"]["kind"] == "missing_region"


class TestCompareEndpoint:
    """Test the ranking endpoint."""

    def test_ranking_with_failure(self, client):
        data = client.get("/api/compare").get_json()
        assert [e["school"]["short_name"] for e in data["entries"]] == ["ASU", "IC"]
        assert data["failures"][0]["school"]["short_name"] == "GI"
        assert data["failures"][0]["error"]["kind"] == "missing_region"
        assert data["summary"]["cheapest"] == "ASU"

    def test_subset(self, client):
        data = client.get("/api/compare?schools=IC").get_json()
        assert [e["school"]["short_name"] for e in data["entries"]] == ["IC"]
        assert data["failures"] == []

    def test_unknown_school(self, client):
        assert client.get("/api/compare?schools=ASU,XYZ").status_code == 404

    def test_opportunity(self, client):
        data = client.get("/api/compare?schools=ASU&opportunity=true").get_json()
        assert data["opportunity_cost"]["total"] == pytest.approx(49272)
        entry = data["entries"][0]
        assert entry["economic_cost"] == pytest.approx(96700 + 49272)

    def test_no_opportunity_by_default(self, client):
        data = client.get("/api/compare?schools=ASU").get_json()
        assert data["opportunity_cost"] is None

    def test_bad_seniority(self, client):
        assert client.get("/api/compare?opportunity=true&seniority=intern").status_code == 400


class TestOpportunityEndpoint:
    """Test the opportunity cost endpoint."""

    def test_defaults(self, client):
        data = client.get("/api/opportunity").get_json()
        assert data["reference_salary"] == 52000
        assert data["opportunity_cost"]["total"] == pytest.approx(49272)

    def test_overrides(self, client):
        data = client.get("/api/opportunity?years=1&tax_rate=0.3&living_cost=50000").get_json()
        assert data["opportunity_cost"]["is_loss"] is True

    def test_tax_rate_out_of_range(self, client):
        assert client.get("/api/opportunity?tax_rate=1.5").status_code == 400

    def test_non_finite_overrides_rejected(self, client):
        """nan and inf would produce a body that is not valid JSON."""
        for query in ("living_cost=nan", "living_cost=-inf", "living_cost=inf", "tax_rate=nan"):
            resp = client.get(f"/api/opportunity?{query}")
            assert resp.status_code == 400, query
            assert "error" in json.loads(resp.get_data(as_text=True))


class TestRoiEndpoint:
    """Test the year-by-year net worth projection endpoint."""

    def test_default_projection(self, client):
        resp = client.get("/api/roi/ASU")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["total_cost"] == pytest.approx(96700)
        roi = data["roi"]
        assert roi["abroad"]["work_start_delay"] == 2
        assert roi["abroad"]["study_cost"] == pytest.approx(96700)
        assert len(roi["abroad"]["years"]) == PROJECTION_YEARS
        assert roi["abroad"]["years"][0]["work_year"] is None
        assert roi["abroad"]["years"][2]["work_year"] == 1
        assert roi["domestic"]["years"][0]["income"] == pytest.approx(52000)
        assert roi["abroad_roi"] is not None

    def test_horizon(self, client):
        roi = client.get("/api/roi/ASU?horizon=5").get_json()["roi"]
        assert len(roi["abroad"]["years"]) == 5
        assert len(roi["domestic"]["years"]) == 5

    def test_horizon_out_of_range(self, client):
        assert client.get("/api/roi/ASU?horizon=0").status_code == 400

    def test_compact(self, client):
        roi = client.get("/api/roi/ASU?compact=true").get_json()["roi"]
        assert "years" not in roi["abroad"]
        assert "final_net_worth" in roi["abroad"]

    def test_unknown_school(self, client):
        assert client.get("/api/roi/XYZ").status_code == 404

    def test_missing_region(self, client):
        resp = client.get("/api/roi/GI")
        assert resp.status_code == 422
        assert resp.get_json()["error"]["kind"] == "missing_region"

    def test_compare_with_roi(self, client):
        data = client.get("/api/compare?schools=ASU,IC&roi=true&compact=true").get_json()
        assert data["opportunity_cost"]["total"] == pytest.approx(49272)
        for entry in data["entries"]:
            assert entry["roi"] is not None
            assert entry["roi"]["abroad"]["study_cost"] == pytest.approx(entry["breakdown"]["total"])

    def test_compare_without_roi(self, client):
        data = client.get("/api/compare?schools=ASU").get_json()
        assert data["entries"][0]["roi"] is None
