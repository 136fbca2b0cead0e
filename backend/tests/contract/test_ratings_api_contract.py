"""Contract tests for the /api/ratings endpoints."""

import pytest


@pytest.fixture
def seeded_client(client):
    for payload in ({"rating": 5, "comment": "excellent"}, {"rating": 4}, {"rating": 4}):
        response = client.post("/api/ratings", json=payload)
        assert response.status_code == 201
    return client


class TestListRatings:
    """GET /api/ratings"""

    def test_empty_list(self, client):
        response = client.get("/api/ratings")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_newest_first_with_timestamps(self, seeded_client):
        response = seeded_client.get("/api/ratings")

        assert response.status_code == 200
        rows = response.json()["data"]
        assert len(rows) == 3
        assert [row["rating"] for row in rows] == [4, 4, 5]
        for row in rows:
            assert set(row) == {"id", "rating", "comment", "created_at", "timestamp"}
            assert isinstance(row["timestamp"], int)
        timestamps = [row["timestamp"] for row in rows]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_allows_any_origin(self, client):
        response = client.get("/api/ratings")

        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_store_failure_is_500(self, failing_client):
        response = failing_client.get("/api/ratings")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch ratings"}


class TestCreateRating:
    """POST /api/ratings"""

    def test_created(self, client):
        response = client.post("/api/ratings", json={"rating": 4, "comment": "great"})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"]
        assert data["rating"] == 4
        assert data["comment"] == "great"
        assert data["created_at"]

    def test_client_supplied_id_and_created_at_ignored(self, client):
        response = client.post(
            "/api/ratings",
            json={"rating": 3, "id": "mine", "created_at": "1999-01-01T00:00:00Z"},
        )

        data = response.json()["data"]
        assert data["id"] != "mine"
        assert not data["created_at"].startswith("1999")

    def test_score_range_not_enforced(self, client):
        response = client.post("/api/ratings", json={"rating": 9})

        assert response.status_code == 201
        assert response.json()["data"]["rating"] == 9

    def test_missing_rating_is_500(self, client):
        response = client.post("/api/ratings", json={"comment": "no score"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create rating"}

    def test_malformed_body_is_500(self, client):
        response = client.post(
            "/api/ratings",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create rating"}

    def test_store_failure_is_500(self, failing_client):
        response = failing_client.post("/api/ratings", json={"rating": 4})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create rating"}


class TestRatingSummary:
    """GET /api/ratings/summary"""

    def test_summary_shape(self, seeded_client):
        response = seeded_client.get("/api/ratings/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["error"] is None
        assert body["data"] == {
            "total": 3,
            "average": 4.33,
            "monthly": 3,
            "distribution": {"1": 0, "2": 0, "3": 0, "4": 2, "5": 1},
        }

    def test_empty_store(self, client):
        body = client.get("/api/ratings/summary").json()

        assert body["data"]["total"] == 0
        assert body["data"]["average"] == 0
        assert body["error"] is None

    def test_store_failure_still_200_with_zero_summary(self, failing_client):
        response = failing_client.get("/api/ratings/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["error"] is None
        assert body["data"]["total"] == 0
        assert body["data"]["distribution"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}


class TestRequestCorrelation:

    def test_request_id_echoed(self, client):
        response = client.get("/api/ratings", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_generated(self, client):
        response = client.get("/api/ratings")

        assert response.headers["X-Request-ID"]
