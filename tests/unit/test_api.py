"""
Unit tests for the Flask API.
"""

import json

import pytest

from canhousing.api.server import create_app
from canhousing.core.constants import COMPARISON_WARNING
from canhousing.exceptions import DatasetNotFoundError


class TestHealthAndOptions:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.get_json()["listings"] == 3

    def test_options(self, client):
        data = client.get("/api/options").get_json()
        assert data["provinces"] == ["Nova Scotia", "Ontario"]
        assert data["cities_by_province"] == {"Nova Scotia": ["Halifax"], "Ontario": ["Toronto"]}
        assert data["price_bounds"] == [300000.0, 1200000.0]


class TestDashboard:

    def test_initial_state(self, client):
        data = client.get("/api/dashboard").get_json()
        dashboard = data["dashboard"]
        assert dashboard["constraints"]["provinces"] == ["Ontario"]
        assert dashboard["constraints"]["cities"] == ["Toronto"]
        assert dashboard["listing_count"] == 1
        assert "listings" not in dashboard

    def test_listings_on_request(self, client):
        dashboard = client.get("/api/dashboard?listings=true").get_json()["dashboard"]
        assert dashboard["listings"][0]["price"] == 500000.0

    def test_province_change(self, client):
        response = client.post("/api/dashboard/constraints", json={"provinces": ["Nova Scotia"]})
        dashboard = response.get_json()["dashboard"]
        assert response.status_code == 200
        assert dashboard["available_cities"] == ["Halifax"]
        assert dashboard["constraints"]["cities"] == ["Halifax"]

    def test_comparison_warning(self, client):
        response = client.post("/api/dashboard/constraints", json={"comparison_cities": ["Toronto"]})
        dashboard = response.get_json()["dashboard"]
        assert dashboard["comparison"] is None
        assert dashboard["notifications"] == [{"message": COMPARISON_WARNING, "level": "warning"}]

    def test_comparison_endpoint(self, client):
        client.post("/api/dashboard/constraints", json={"comparison_cities": ["Toronto", "Halifax"]})
        data = client.get("/api/dashboard/comparison").get_json()
        assert data["status"] == "success"
        assert data["comparison"]["prices"]["Halifax"] == [300000.0]

    def test_comparison_endpoint_warning(self, client):
        data = client.get("/api/dashboard/comparison").get_json()
        assert data["status"] == "warning"
        assert data["comparison"] is None

    @pytest.mark.parametrize("payload", [
        {"min_beds": -1},
        {"price_range": [5, 1]},
        {"unknown": 1},
    ])
    def test_bad_constraints(self, client, payload):
        response = client.post("/api/dashboard/constraints", json=payload)
        assert response.status_code == 400
        assert response.get_json()["status"] == "error"

    def test_non_json_body(self, client):
        response = client.post("/api/dashboard/constraints", data="nope", content_type="text/plain")
        assert response.status_code == 400

    def test_sessions_are_isolated(self, client):
        client.post(
            "/api/dashboard/constraints",
            json={"provinces": ["Nova Scotia"]},
            headers={"X-Session-Id": "alice"},
        )
        alice = client.get("/api/dashboard", headers={"X-Session-Id": "alice"}).get_json()
        bob = client.get("/api/dashboard", headers={"X-Session-Id": "bob"}).get_json()
        assert alice["dashboard"]["constraints"]["provinces"] == ["Nova Scotia"]
        assert bob["dashboard"]["constraints"]["provinces"] == ["Ontario"]


class TestCharts:

    def test_list(self, client):
        assert "map" in client.get("/api/dashboard/charts").get_json()["charts"]

    def test_histogram_figure(self, client):
        response = client.get("/api/dashboard/charts/price_distribution?bin_width=25000")
        assert response.status_code == 200
        figure = json.loads(response.data)
        assert figure["data"][0]["type"] == "histogram"
        assert figure["data"][0]["xbins"]["size"] == 25000

    def test_unknown_chart(self, client):
        assert client.get("/api/dashboard/charts/pie").status_code == 404

    def test_bad_bin_width(self, client):
        response = client.get("/api/dashboard/charts/price_distribution?bin_width=-5")
        assert response.status_code == 400

    def test_summary(self, client):
        data = client.get("/api/dashboard/summary").get_json()
        assert data["rows"][0]["city"] == "Toronto"
        assert data["rows"][0]["count"] == 1
        assert "average" in data["rows"][0]["styles"]


class TestCreateApp:

    def test_missing_dataset_is_fatal(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CANHOUSING_DATA_PATH", str(tmp_path / "missing.csv"))
        with pytest.raises(DatasetNotFoundError):
            create_app()

    def test_loads_configured_dataset(self, scenario_csv, monkeypatch):
        monkeypatch.setenv("CANHOUSING_DATA_PATH", str(scenario_csv))
        app = create_app(test_config={"TESTING": True})
        assert app.test_client().get("/api/health").get_json()["listings"] == 3

    def test_dataset_error_is_503(self, app):
        @app.route("/reload")
        def reload():
            raise DatasetNotFoundError("listings.csv", reason="file not found")

        response = app.test_client().get("/reload")
        assert response.status_code == 503
        assert "listings.csv" in response.get_json()["error"]

    def test_unknown_path_is_json_404(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.get_json()["status"] == "error"
