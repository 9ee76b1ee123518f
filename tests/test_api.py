"""
Tests for FastAPI REST API endpoints.

Covers:
- Root/health endpoint
- Programme listing and evaluation
- Roadmap, loan and savings endpoints
- Portal overview with a household repository
- Error handling
"""

import pytest
from fastapi.testclient import TestClient

from energiebuddy.api.main import (
    HouseholdRecord,
    InMemoryHouseholdRepository,
    app,
    get_repository,
)
from energiebuddy.core.models import Address, ConsumptionRecord, HouseholdProfile, PropertyType


@pytest.fixture
def client():
    """Create test client for API."""
    return TestClient(app)


@pytest.fixture
def repository(row_house_1965, voucher_address):
    """Repository with one known household, wired into the app."""
    repo = InMemoryHouseholdRepository()
    repo.add("abc123", HouseholdRecord(
        profile=row_house_1965,
        address=voucher_address,
        consumption=[
            ConsumptionRecord(year=2023, gas_m3=2700, electricity_kwh=3600),
            ConsumptionRecord(year=2024, gas_m3=2500, electricity_kwh=3500),
        ],
    ))
    repo.add("new-build", HouseholdRecord(
        profile=HouseholdProfile(property_type=PropertyType.TUSSENWONING, construction_year=2016),
        address=Address(postal_code="1234 AB"),
        consumption=[ConsumptionRecord(year=2024, gas_m3=900)],
    ))
    repo.add("eighties", HouseholdRecord(
        profile=HouseholdProfile(property_type=PropertyType.TUSSENWONING, construction_year=1980),
        address=voucher_address,
        consumption=[ConsumptionRecord(year=2024, gas_m3=1500)],
    ))
    app.dependency_overrides[get_repository] = lambda: repo
    yield repo
    app.dependency_overrides.clear()


class TestRootEndpoint:
    """Tests for root/health check endpoint."""

    def test_root_returns_ok(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["name"] == "EnergieBuddy API"
        assert "evaluate" in data["endpoints"]

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestSubsidyEndpoints:
    """Tests for programme listing and evaluation."""

    def test_list_programs(self, client):
        data = client.get("/programs").json()
        kinds = {p["id"]: p["kind"] for p in data}

        assert kinds == {
            "waarde_check": "splittable",
            "nip": "single_use",
            "isde": "per_measure_estimate",
            "stimuleringslening": None,
        }

    def test_evaluate_all(self, client, scenario_a_json):
        response = client.post("/subsidies/evaluate", json=scenario_a_json)
        assert response.status_code == 200
        results = {r["program_id"]: r for r in response.json()}

        assert results["waarde_check"]["eligible"]
        assert results["waarde_check"]["amount"] == 2000
        assert results["nip"]["amount"] == 2000
        assert len(results["nip"]["explanation"]) == 4

    def test_evaluate_one(self, client, scenario_a_json):
        response = client.post("/subsidies/nip/evaluate", json=scenario_a_json)
        assert response.status_code == 200
        assert response.json()["criteria"][0]["status"] == "pass"

    def test_empty_body_needs_more_info(self, client):
        response = client.post("/subsidies/nip/evaluate", json={})
        assert response.status_code == 200
        data = response.json()
        assert not data["eligible"]
        assert data["needs_more_info"]

    def test_expired_voucher(self, client, scenario_a_json):
        body = dict(scenario_a_json, as_of="2027-01-01")
        data = client.post("/subsidies/waarde_check/evaluate", json=body).json()
        assert not data["eligible"]

    def test_unknown_program(self, client, scenario_a_json):
        response = client.post("/subsidies/bogus/evaluate", json=scenario_a_json)
        assert response.status_code == 404

    def test_invalid_property_type(self, client):
        body = {"profile": {"property_type": "kasteel"}}
        assert client.post("/subsidies/evaluate", json=body).status_code == 422


class TestRoadmapEndpoint:
    """Tests for the roadmap endpoint."""

    def test_scenario_a(self, client, scenario_a_json):
        data = client.post("/roadmap", json=scenario_a_json).json()
        first = data["steps"][0]

        assert first["measure_id"] == "spouwmuur"
        assert first["subsidies"] == {"nip": 1800}
        assert first["final_cost"] == 0
        assert first["fully_subsidized"]
        assert data["total_final_cost"] == 17750
        assert data["forfeited"] == {"nip": 200}

    def test_completed_measures_excluded(self, client, scenario_a_json):
        scenario_a_json["profile"]["wall_insulation"] = True
        data = client.post("/roadmap", json=scenario_a_json).json()

        assert data["steps"][0]["measure_id"] == "dak"
        assert data["steps"][0]["subsidies"]["nip"] == 2000


class TestLoanEndpoints:
    """Tests for loan quotes."""

    def test_quote(self, client):
        data = client.get("/loan/quote", params={"principal": 5000}).json()

        assert data["term_years"] == 10
        assert data["display"]["monthly_payment"] == 45
        assert data["monthly_payment"] * 120 == pytest.approx(5000 + data["total_interest"])

    def test_quote_requires_positive_principal(self, client):
        assert client.get("/loan/quote", params={"principal": 0}).status_code == 422
        assert client.get("/loan/quote").status_code == 422

    def test_examples(self, client):
        data = client.get("/loan/examples").json()
        assert [q["principal"] for q in data] == [3000, 8000, 15000, 25000]


class TestSavingsEndpoint:
    """Tests for insulation savings."""

    def test_savings(self, client, scenario_a_json):
        body = {"gas_m3": 2000, "profile": scenario_a_json["profile"]}
        data = client.post("/savings/insulation", json=body).json()

        assert [s["measure_id"] for s in data["savings"]] == ["spouwmuur", "dak", "vloer", "glas"]
        assert data["total_m3"] == 1060
        assert data["total_euro"] == 1537

    def test_negative_gas_rejected(self, client):
        assert client.post("/savings/insulation", json={"gas_m3": -1}).status_code == 422


class TestPortalOverview:
    """Tests for the token-based household overview."""

    def test_missing_token(self, client, repository):
        assert client.get("/portal/overview").status_code == 401

    def test_unknown_token(self, client, repository):
        assert client.get("/portal/overview", params={"token": "nope"}).status_code == 404

    def test_overview(self, client, repository):
        response = client.get("/portal/overview", params={"token": "abc123"})
        assert response.status_code == 200
        data = response.json()

        assert data["building_period"]["code"] == "1945_1975"
        assert data["energy_costs"]["year"] == 2024
        assert data["comparison"]["gas_band"] == "boven"
        assert data["roadmap"]["steps"][0]["fully_subsidized"]
        assert data["savings"]["total_m3"] > 0
        assert "floor_insulation" in data["inferred_fields"]

    def test_overview_without_reference(self, client, repository):
        data = client.get("/portal/overview", params={"token": "new-build"}).json()

        assert "comparison" not in data
        assert data["energy_costs"]["gas_cost"] == 1305

    def test_overview_roadmap_matches_savings(self, client, repository):
        """Period defaults drive both the roadmap and the savings estimate."""
        data = client.get("/portal/overview", params={"token": "eighties"}).json()
        insulation = {"spouwmuur", "dak", "vloer", "glas"}
        roadmap_ids = {s["measure_id"] for s in data["roadmap"]["steps"]} & insulation
        saving_ids = {s["measure_id"] for s in data["savings"]["savings"]}

        assert data["building_period"]["code"] == "1975_1987"
        assert "spouwmuur" not in roadmap_ids
        assert roadmap_ids == saving_ids == {"vloer", "glas"}
