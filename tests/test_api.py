"""
Tests for FastAPI REST API endpoints.

Covers:
- Root/health endpoints
- Building design CRUD
- City reference data
- Analysis, ranking, comparison and profile endpoints
- Error handling (400 validation, 404 missing, 500 store errors)
"""

import pytest

from conftest import make_design_payload


@pytest.fixture
def created(api_client, design_payload):
    response = api_client.post("/building-designs", json=design_payload)
    assert response.status_code == 201
    return response.json()


class TestRootEndpoint:
    """Tests for root/health check endpoints."""

    def test_root_returns_ok(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["name"] == "Facade Energy API"
        assert "analyze_buildings" in data["endpoints"]

    def test_health_reports_cache(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["cache"]["connected"] is True


class TestBuildingDesignEndpoints:

    def test_create(self, created):
        assert created["id"]
        assert created["building_id"] == created["id"]
        assert created["facades"]["north"]["wwr"] == 0.3
        assert created["skylight"] == {"width": 2.0, "length": 3.0}

    def test_create_missing_facades(self, api_client):
        response = api_client.post("/building-designs", json={"name": "Empty"})

        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Building design is missing facades data"
        assert data["field"] == "facades"
        assert data["suggestions"]

    def test_create_zero_property(self, api_client):
        payload = make_design_payload()
        payload["facades"]["south"]["height"] = 0

        response = api_client.post("/building-designs", json=payload)

        assert response.status_code == 400
        assert response.json()["field"] == "facades.south.height"

    def test_create_requires_object(self, api_client):
        response = api_client.post("/building-designs", json=[1, 2])
        assert response.status_code == 422

    def test_list_and_filter(self, api_client, created, design_payload):
        api_client.post("/building-designs", json={**design_payload, "id": created["id"], "name": "Rev 2"})
        api_client.post("/building-designs", json=make_design_payload(name="Elsewhere"))

        assert len(api_client.get("/building-designs").json()) == 3
        group = api_client.get("/building-designs", params={"building_id": created["id"]}).json()
        assert [d["name"] for d in group] == ["Reference block", "Rev 2"]

    def test_get(self, api_client, created):
        response = api_client.get(f"/building-designs/{created['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Reference block"

    def test_get_missing(self, api_client):
        response = api_client.get("/building-designs/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Building design not found"

    def test_update(self, api_client, created):
        response = api_client.put(f"/building-designs/{created['id']}", json={"name": "Renamed"})

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["facades"] == created["facades"]

    def test_update_invalid(self, api_client, created):
        facades = created["facades"]
        facades["west"]["wwr"] = 30

        response = api_client.put(f"/building-designs/{created['id']}", json={"facades": facades})

        assert response.status_code == 400
        assert response.json()["field"] == "facades.west.wwr"

    def test_update_missing(self, api_client):
        response = api_client.put("/building-designs/missing", json={"name": "x"})
        assert response.status_code == 404

    def test_delete(self, api_client, created):
        response = api_client.delete(f"/building-designs/{created['id']}")
        assert response.status_code == 204
        assert api_client.get(f"/building-designs/{created['id']}").status_code == 404
        assert api_client.delete(f"/building-designs/{created['id']}").status_code == 404

    def test_clear(self, api_client, created):
        response = api_client.delete("/building-designs")
        assert response.json() == {"deleted": 1}
        assert api_client.get("/building-designs").json() == []


class TestCityEndpoints:

    def test_list(self, api_client):
        cities = api_client.get("/cities").json()
        assert [c["name"] for c in cities] == ["Bangalore", "Mumbai", "Kolkata", "Delhi"]

    def test_get(self, api_client):
        response = api_client.get("/cities/kolkata")
        assert response.status_code == 200
        assert response.json()["solar_radiation"]["roof"] == 450

    def test_get_missing(self, api_client):
        assert api_client.get("/cities/Chennai").status_code == 404


class TestAnalysisEndpoints:

    def test_analyze_design(self, api_client, created):
        response = api_client.get(f"/analysis/{created['id']}", params={"city": "Mumbai"})

        assert response.status_code == 200
        data = response.json()
        assert data["building_design_id"] == created["id"]
        assert data["heat_gain"]["total"] == pytest.approx(26880)
        assert data["energy_consumption"] == pytest.approx(26880 / 3412 / 4)
        assert data["carbon_emissions"] == pytest.approx(data["energy_consumption"] / 1000 * 0.82)
        assert data["peak_demand"] == pytest.approx(data["energy_consumption"] * 0.2)

    def test_analyze_design_hourly(self, api_client, created):
        response = api_client.get(
            f"/analysis/{created['id']}",
            params={"city": "Mumbai", "season": "winter", "hour": 3},
        )
        assert response.status_code == 200
        assert response.json()["heat_gain"]["total"] == 0
        assert response.json()["season"] == "winter"

    def test_unknown_city(self, api_client, created):
        response = api_client.get(f"/analysis/{created['id']}", params={"city": "Atlantis"})

        assert response.status_code == 400
        assert response.json()["field"] == "city"

    def test_bad_hour(self, api_client, created):
        response = api_client.get(f"/analysis/{created['id']}", params={"city": "Mumbai", "hour": "noon"})
        assert response.status_code == 400
        assert response.json()["field"] == "hour"

    @pytest.mark.parametrize("hour", ["inf", "1e400"])
    def test_infinite_hour(self, api_client, created, hour):
        response = api_client.get(f"/analysis/{created['id']}", params={"city": "Mumbai", "hour": hour})
        assert response.status_code == 400
        assert response.json()["field"] == "hour"

    def test_unknown_season(self, api_client, created):
        response = api_client.get(f"/analysis/{created['id']}", params={"city": "Mumbai", "season": "spring"})
        assert response.status_code == 400
        assert response.json()["field"] == "season"

    def test_missing_design(self, api_client):
        response = api_client.get("/analysis/missing", params={"city": "Mumbai"})
        assert response.status_code == 404

    def test_analyze_buildings(self, api_client, created):
        cheap = api_client.post("/building-designs", json=make_design_payload(name="Cheap", wwr=0.1)).json()

        response = api_client.get("/analysis/buildings", params={"ids": f"{created['id']},{cheap['id']}"})

        assert response.status_code == 200
        results = response.json()
        assert len(results) == 8
        energies = [r["energy_consumption"] for r in results]
        assert energies == sorted(energies)
        assert results[0]["building_design_id"] == cheap["id"]

    def test_analyze_buildings_empty(self, api_client):
        response = api_client.get("/analysis/buildings")
        assert response.status_code == 404
        assert response.json()["detail"] == "No building designs found"

    def test_analyze_buildings_store_error(self, api_client, created, memory_client):
        memory_client.replace_cities([{"name": "Broken", "solar_radiation": {}, "electricity_rate": 1}])

        response = api_client.get("/analysis/buildings")

        assert response.status_code == 500
        assert "Invalid city data" in response.json()["detail"]

    def test_rankings(self, api_client, created):
        api_client.post("/building-designs", json=make_design_payload(name="Cheap", wwr=0.1))

        response = api_client.get("/analysis/rankings", params={"city": "Delhi", "season": "summer"})

        assert response.status_code == 200
        rankings = response.json()
        assert [r["name"] for r in rankings] == ["Cheap", "Reference block"]
        assert [r["rank"] for r in rankings] == [1, 2]

    def test_compare(self, api_client, created):
        api_client.post("/building-designs", json=make_design_payload(name="Cheap", wwr=0.1))

        response = api_client.get("/analysis/compare", params={"city": "Delhi"})

        assert response.status_code == 200
        data = response.json()
        assert data["season"] == "summer"
        assert data["best_performer"]["name"] == "Cheap"
        assert data["cost_savings"] > 0
        assert created["id"] in data["performance_metrics"]

    def test_profile(self, api_client, created):
        response = api_client.get(
            f"/analysis/{created['id']}/profile",
            params={"city": "Bangalore", "season": "winter", "orientation_weighting": "true"},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["hours"]) == 24
        assert data["season"] == "winter"
        assert data["hours"][0]["energy_consumption"] == 0
