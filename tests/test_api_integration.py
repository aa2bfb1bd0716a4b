"""
Integration tests for API endpoints.

Tests the full HTTP request/response cycle against the in-memory store.
"""
import pytest

from app.domain.errors import CAPACITY_EXCEEDED_MESSAGE


API = "/api/v1"


def create_farm(client, **overrides) -> dict:
    payload = {"name": "Oliveraie Nord", "location": "Sfax", "length": 100, "width": 60}
    payload.update(overrides)
    response = client.post(f"{API}/farms", json=payload, headers={"X-Owner-Id": "owner-1"})
    assert response.status_code == 201
    return response.json()


def create_zone(client, farm_id, **overrides):
    payload = {"name": "Zone A", "width": 50, "length": 40}
    payload.update(overrides)
    return client.post(f"{API}/farms/{farm_id}/zones", json=payload)


# ============================================================
# Health Check Tests
# ============================================================

class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, test_client):
        """Root endpoint should return healthy status."""
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "service" in data
        assert "version" in data

    def test_health_endpoint(self, test_client):
        """Health endpoint should return healthy status."""
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


# ============================================================
# Farm Endpoint Tests
# ============================================================

class TestFarmEndpoints:

    def test_create_and_get_farm(self, test_client):
        farm = create_farm(test_client)

        assert farm["owner_id"] == "owner-1"
        assert farm["area"] == 6000

        response = test_client.get(f"{API}/farms/{farm['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Oliveraie Nord"

    def test_owner_from_body(self, test_client):
        response = test_client.post(
            f"{API}/farms",
            json={"name": "F", "length": 10, "width": 10, "owner_id": "owner-9"},
        )

        assert response.status_code == 201
        assert response.json()["owner_id"] == "owner-9"

    def test_create_without_owner(self, test_client):
        response = test_client.post(f"{API}/farms", json={"name": "F", "length": 10, "width": 10})

        assert response.status_code == 400
        assert response.json()["error"] == "owner_id is required"

    def test_non_positive_dimension_rejected(self, test_client):
        response = test_client.post(
            f"{API}/farms",
            json={"name": "F", "length": 0, "width": 10},
            headers={"X-Owner-Id": "o"},
        )

        assert response.status_code == 422

    def test_list_farms_by_owner(self, test_client):
        create_farm(test_client)

        mine = test_client.get(f"{API}/farms", headers={"X-Owner-Id": "owner-1"}).json()
        theirs = test_client.get(f"{API}/farms", headers={"X-Owner-Id": "owner-2"}).json()

        assert len(mine) == 1
        assert theirs == []

    def test_unknown_farm(self, test_client):
        response = test_client.get(f"{API}/farms/does-not-exist")

        assert response.status_code == 404
        assert response.json()["type"] == "Not found"

    def test_update_and_delete_farm(self, test_client):
        farm = create_farm(test_client)

        response = test_client.patch(f"{API}/farms/{farm['id']}", json={"width": 80})
        assert response.status_code == 200
        assert response.json()["area"] == 8000

        response = test_client.delete(f"{API}/farms/{farm['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert test_client.get(f"{API}/farms/{farm['id']}").status_code == 404

    def test_layout(self, test_client):
        farm = create_farm(test_client)
        create_zone(test_client, farm["id"])

        layout = test_client.get(f"{API}/farms/{farm['id']}/layout").json()

        assert layout["used_area"] == 2000
        assert layout["remaining_area"] == 4000
        assert layout["zones"][0]["area"] == 2000


# ============================================================
# Zone Endpoint Tests
# ============================================================

class TestZoneEndpoints:

    def test_create_zone_defaults(self, test_client):
        farm = create_farm(test_client)

        response = create_zone(test_client, farm["id"])

        assert response.status_code == 201
        zone = response.json()
        assert zone["farm_id"] == farm["id"]
        assert zone["mode"] == "AUTO"
        assert (zone["x"], zone["y"]) == (0, 0)

    def test_zone_exceeding_farm_is_rejected(self, test_client):
        farm = create_farm(test_client)
        create_zone(test_client, farm["id"])

        response = create_zone(test_client, farm["id"], name="Zone B", width=60, length=70)

        assert response.status_code == 400
        assert response.json()["error"] == CAPACITY_EXCEEDED_MESSAGE
        assert len(test_client.get(f"{API}/farms/{farm['id']}/zones").json()) == 1

    def test_capacity_rejection_body(self, test_client):
        farm = create_farm(test_client)

        response = create_zone(test_client, farm["id"], width=100, length=100)

        assert response.status_code == 400
        assert response.json() == {
            "error": CAPACITY_EXCEEDED_MESSAGE,
            "type": "Capacity exceeded",
        }

    def test_zone_filling_farm_exactly_is_accepted(self, test_client):
        farm = create_farm(test_client)
        create_zone(test_client, farm["id"])

        response = create_zone(test_client, farm["id"], name="Zone B", width=40, length=100)

        assert response.status_code == 201

    def test_zone_on_unknown_farm(self, test_client):
        response = create_zone(test_client, "missing")

        assert response.status_code == 404

    def test_invalid_moisture_threshold(self, test_client):
        farm = create_farm(test_client)

        response = create_zone(test_client, farm["id"], moisture_threshold=120)

        assert response.status_code == 422

    def test_get_grid_and_delete_zone(self, test_client):
        farm = create_farm(test_client)
        zone = create_zone(test_client, farm["id"], width=22, length=30).json()
        base = f"{API}/farms/{farm['id']}/zones/{zone['id']}"

        grid = test_client.get(f"{base}/grid").json()
        assert grid["trees_per_row"] == 4
        assert grid["row_capacity"] == 6
        assert grid["tree_count"] == 0

        assert test_client.delete(base).status_code == 200
        assert test_client.get(base).status_code == 404


# ============================================================
# Tree Endpoint Tests
# ============================================================

class TestTreeEndpoints:

    @pytest.fixture
    def trees_url(self, test_client) -> str:
        farm = create_farm(test_client)
        zone = create_zone(test_client, farm["id"], width=22, length=30).json()
        return f"{API}/farms/{farm['id']}/zones/{zone['id']}/trees"

    def test_single_tree(self, test_client, trees_url):
        response = test_client.post(trees_url, json={"tree_code": "R1-T3", "row_number": 1, "index_in_row": 3})

        assert response.status_code == 201
        tree = response.json()
        assert tree["health_status"] == "OK"
        assert (tree["x"], tree["y"]) == (15, 5)

    def test_tree_array_is_stored_as_batch(self, test_client, trees_url):
        response = test_client.post(trees_url, json=[
            {"tree_code": "A1"},
            {"tree_code": "A2", "index_in_row": 1, "health_status": "STRESS"},
        ])

        assert response.status_code == 201
        trees = response.json()
        assert [t["tree_code"] for t in trees] == ["A1", "A2"]
        assert trees[0]["row_number"] == 0
        assert len(test_client.get(trees_url).json()) == 2

    def test_empty_tree_code(self, test_client, trees_url):
        response = test_client.post(trees_url, json={"tree_code": ""})

        assert response.status_code == 400

    def test_bulk_placement(self, test_client, trees_url):
        response = test_client.post(f"{trees_url}/bulk", json={"count": 10, "code_prefix": "T"})

        assert response.status_code == 201
        trees = response.json()
        assert [t["tree_code"] for t in trees[:4]] == ["T001", "T002", "T003", "T004"]
        assert [(t["row_number"], t["index_in_row"]) for t in trees[8:]] == [(2, 0), (2, 1)]

    def test_bulk_count_out_of_range(self, test_client, trees_url):
        response = test_client.post(f"{trees_url}/bulk", json={"count": 1001})

        assert response.status_code == 422

    def test_bulk_in_narrow_zone(self, test_client):
        farm = create_farm(test_client)
        zone = create_zone(test_client, farm["id"], width=3).json()

        response = test_client.post(
            f"{API}/farms/{farm['id']}/zones/{zone['id']}/trees/bulk", json={"count": 5}
        )

        assert response.status_code == 400
        assert response.json()["type"] == "Invalid zone dimensions"

    def test_delete_tree(self, test_client, trees_url):
        tree = test_client.post(trees_url, json={"tree_code": "T"}).json()

        assert test_client.delete(f"{trees_url}/{tree['id']}").status_code == 200
        assert test_client.get(trees_url).json() == []


# ============================================================
# Task Endpoint Tests
# ============================================================

class TestTaskEndpoints:

    def test_task_lifecycle(self, test_client):
        farm = create_farm(test_client)
        tasks_url = f"{API}/farms/{farm['id']}/tasks"

        response = test_client.post(tasks_url, json={"worker_id": "w1", "title": "Inspect Zone A", "priority": "HIGH"})
        assert response.status_code == 201
        task = response.json()
        assert task["status"] == "TODO"

        response = test_client.patch(f"{tasks_url}/{task['id']}", json={"status": "DONE"})
        assert response.json()["status"] == "DONE"

        assert len(test_client.get(tasks_url, params={"status": "DONE"}).json()) == 1
        assert test_client.get(tasks_url, params={"status": "TODO"}).json() == []


# ============================================================
# Response Format Tests
# ============================================================

class TestResponseFormats:
    """Tests for API response formats."""

    def test_openapi_schema_available(self, test_client):
        response = test_client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/v1/farms/{farm_id}/zones" in paths
        assert "/api/v1/farms/{farm_id}/zones/{zone_id}/trees/bulk" in paths

    def test_rate_limit_documented_in_openapi(self, test_client):
        paths = test_client.get("/openapi.json").json()["paths"]

        assert "429" in paths["/api/v1/farms/{farm_id}/zones"]["post"]["responses"]

    def test_docs_endpoint_available(self, test_client):
        response = test_client.get("/docs")

        assert response.status_code == 200


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
