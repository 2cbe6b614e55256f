"""
FastAPI 엔드포인트 테스트
"""
import pytest


class TestRecommendEndpoint:

    def test_recommend_valid(self, test_client, both_ends_taken):
        response = test_client.post("/api/recommend", json=both_ends_taken)
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "sociallyAware"
        assert data["recommendation"] == 3
        assert data["occupied"] == [1, 7]
        assert [s["position"] for s in data["scores"]] == [3, 5]
        assert [s["position"] for s in data["all_scores"]] == [2, 3, 4, 5, 6]

        excluded = data["excluded_options"]
        assert len(excluded) == 1
        assert excluded[0]["position"] == 4
        assert excluded[0]["excluded"] is True
        viability = excluded[0]["breakdown"]["collective_welfare_details"]["next_user_viability"]
        assert viability == {"score": 0.0, "acceptable": 0, "total": 4}

        best = data["best_score"]
        assert best["position"] == 3
        assert best["tier"] == "avoid"
        assert best["label"] == "INADVISABLE"
        assert data["advisory"] is None
        assert data["notices"] == []

    def test_recommend_defaults_to_empty_row(self, test_client):
        response = test_client.post("/api/recommend", json={"station_count": 5})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "optimal"
        assert data["recommendation"] == 1
        assert data["has_dividers"] is False
        assert data["advisory"]["title"] == "OPTIMAL CONDITIONS DETECTED"

    def test_recommend_full(self, test_client):
        response = test_client.post("/api/recommend", json={
            "station_count": 3, "occupied": [3, 1, 2],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "full"
        assert data["recommendation"] is None
        assert data["scores"] == []
        assert data["best_score"] is None
        assert data["advisory"]["title"] == "FACILITY AT MAXIMUM CAPACITY"

    def test_recommend_middlemist_notice(self, test_client, middlemist_config):
        response = test_client.post("/api/recommend", json=middlemist_config)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "desperate"
        assert [n["kind"] for n in data["notices"]] == ["middlemist"]
        assert data["advisory"]["title"] == "PROTOCOL ADVISORY"

    def test_recommend_is_cached(self, test_client):
        payload = {"station_count": 9, "occupied": [5, 2], "has_dividers": True}
        first = test_client.post("/api/recommend", json=payload).json()
        reordered = test_client.post("/api/recommend", json={**payload, "occupied": [2, 5]}).json()
        assert first == reordered

        from api.cache import make_key, recommend_cache
        assert recommend_cache.get(make_key(9, [2, 5], True)) is not None

    @pytest.mark.parametrize("payload", [
        {"station_count": 7, "occupied": [8]},
        {"station_count": 7, "occupied": [0]},
        {"station_count": 7, "occupied": [2, 2]},
        {"station_count": 11, "occupied": []},
    ])
    def test_recommend_invalid_configuration(self, test_client, payload):
        response = test_client.post("/api/recommend", json=payload)
        assert response.status_code == 400
        assert "detail" in response.json()

    def test_recommend_schema_errors(self, test_client):
        assert test_client.post("/api/recommend", json={"occupied": [1]}).status_code == 422
        assert test_client.post("/api/recommend", json={"station_count": 1}).status_code == 422
        assert test_client.post(
            "/api/recommend", json={"station_count": 5, "occupied": "1,2"}
        ).status_code == 422

    def test_invalid_json(self, test_client):
        response = test_client.post(
            "/api/recommend",
            content="invalid json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422


class TestTableAndSweep:

    def test_score_table(self, test_client):
        response = test_client.get(
            "/api/recommend/table",
            params=[("station_count", 7), ("occupied", 1), ("occupied", 7)],
        )
        assert response.status_code == 200
        rows = response.json()
        assert [r["position"] for r in rows] == [2, 3, 4, 5, 6]
        assert [r["position"] for r in rows if r["excluded"]] == [4]
        assert [r["position"] for r in rows if r["recommended"]] == [3]

    def test_score_table_invalid(self, test_client):
        response = test_client.get(
            "/api/recommend/table",
            params=[("station_count", 5), ("occupied", 6)],
        )
        assert response.status_code == 400

    def test_sweep(self, test_client):
        response = test_client.get("/api/sweep", params={"station_count": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["n_configurations"] == 8
        counts = {s["status"]: s["count"] for s in data["summary"]}
        assert counts == {"optimal": 1, "normal": 2, "sociallyAware": 0, "desperate": 4, "full": 1}
        full = [c for c in data["configurations"] if c["status"] == "full"]
        assert full == [{
            "occupied": [1, 2, 3], "status": "full",
            "recommendation": None, "best_composite": None, "n_excluded": 0,
        }]

    def test_sweep_out_of_range(self, test_client):
        assert test_client.get("/api/sweep", params={"station_count": 11}).status_code == 400
        assert test_client.get("/api/sweep", params={"station_count": 1}).status_code == 400


class TestServiceEndpoints:

    def test_defaults(self, test_client):
        response = test_client.get("/api/defaults")
        assert response.status_code == 200
        assert response.json() == {
            "station_count": 5,
            "occupied": [],
            "has_dividers": False,
            "min_stations": 2,
            "max_stations": 10,
        }

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["max_stations"] == 10
        assert data["cache_entries"] >= 0

    def test_404_not_found(self, test_client):
        assert test_client.get("/api/nonexistent").status_code == 404

    def test_method_not_allowed(self, test_client):
        assert test_client.get("/api/recommend").status_code == 405
