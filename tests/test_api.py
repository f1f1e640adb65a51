"""
API Route Tests

Exercises the HTTP routes with the database and authentication replaced
by test doubles.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_current_user_id, get_db
from app.main import app


@pytest.fixture
def client(mock_db, sample_course_data):
    """TestClient with a mocked database and an authenticated user."""
    nodes = {
        "courses": sample_course_data,
        "categories": {"web": {"name": "Web Development"}, "data": {"name": "Data Science"}},
    }
    mock_db.get = AsyncMock(side_effect=lambda path, params=None: nodes.get(path))

    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user_id] = lambda: "u1"
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(mock_db):
    """TestClient with a mocked database and real authentication."""
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "catalog_cache" in body["caches"]

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"


class TestCourseRoutes:

    def test_list_courses_with_filters(self, client):
        response = client.get("/api/v1/courses/", params={"price": "paid", "sort": "priceDesc"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [item["id"] for item in body["items"]] == ["c3", "c2"]
        assert body["items"][0]["enrollmentCount"] == 75
        assert body["items"][0]["display_rating"] == 4.5

    def test_category_options(self, client):
        response = client.get("/api/v1/courses/categories")

        assert response.status_code == 200
        assert response.json()[0] == {"value": "all", "label": "All Courses"}

    def test_recommendations_require_auth(self, anonymous_client):
        response = anonymous_client.get("/api/v1/courses/recommendations")

        assert response.status_code == 401

    def test_invalid_token_is_401(self, anonymous_client):
        with patch("app.api.deps.verify_firebase_id_token", AsyncMock(return_value=None)):
            response = anonymous_client.get(
                "/api/v1/courses/recommendations",
                headers={"Authorization": "Bearer bad"},
            )

        assert response.status_code == 401

    def test_valid_token_reaches_route(self, anonymous_client):
        with patch("app.api.deps.verify_firebase_id_token", AsyncMock(return_value={"sub": "u1", "user_id": "u1"})):
            response = anonymous_client.get(
                "/api/v1/courses/recommendations",
                headers={"Authorization": "Bearer good"},
            )

        assert response.status_code == 200
        assert response.json() == []

    def test_record_interaction(self, client, mock_db):
        response = client.post(
            "/api/v1/courses/recommendations/interactions",
            json={"course_id": "c1", "action": "click"},
        )

        assert response.status_code == 204
        assert mock_db.push.call_args.args[1]["action"] == "click"

    def test_invalid_interaction_action_is_422(self, client):
        response = client.post(
            "/api/v1/courses/recommendations/interactions",
            json={"course_id": "c1", "action": "like"},
        )

        assert response.status_code == 422


class TestEnrollmentRoutes:

    def test_enroll(self, client):
        response = client.post("/api/v1/enrollments/", json={"course_id": "c1"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == "-Nnew"
        assert body["courseId"] == "c1"
        assert body["userId"] == "u1"

    def test_update_missing_enrollment_is_404(self, client):
        response = client.patch(
            "/api/v1/enrollments/nope/lessons",
            json={"lesson_id": "l1", "progress": 50},
        )

        assert response.status_code == 404

    def test_progress_out_of_range_is_422(self, client):
        response = client.patch(
            "/api/v1/enrollments/e1/lessons",
            json={"lesson_id": "l1", "progress": 150},
        )

        assert response.status_code == 422

    def test_delete_other_users_enrollment_is_403(self, client, mock_db):
        mock_db.get = AsyncMock(return_value={"userId": "someone-else", "courseId": "c1"})

        response = client.delete("/api/v1/enrollments/e1")

        assert response.status_code == 403


class TestDashboardAndAnalyticsRoutes:

    def test_dashboard(self, client, mock_db):
        mock_db.get_children_where = AsyncMock(return_value={
            "e1": {"userId": "u1", "courseId": "c2", "progress": 100},
        })

        response = client.get("/api/v1/dashboard/")

        assert response.status_code == 200
        body = response.json()
        assert body["stats"]["completed"] == 1
        assert body["categories"][0]["category"] == "Data Science"

    def test_insights_for_new_user(self, client):
        response = client.get("/api/v1/analytics/insights")

        assert response.status_code == 200
        assert response.json()["engagement_score"] == 0

    def test_record_lesson(self, client, mock_db):
        response = client.post(
            "/api/v1/analytics/lessons",
            json={"course_id": "c1", "lesson_id": "l1", "time_spent": 120, "completed": True},
        )

        assert response.status_code == 200
        assert response.json()["totalStudyTime"] == 120
        mock_db.patch.assert_called_once()

    def test_negative_time_is_422(self, client):
        response = client.post(
            "/api/v1/analytics/lessons",
            json={"course_id": "c1", "lesson_id": "l1", "time_spent": -5},
        )

        assert response.status_code == 422

    def test_complete_unknown_course_is_404(self, client):
        response = client.post("/api/v1/analytics/courses/missing/complete")

        assert response.status_code == 404

    def test_refresh_streaks(self, client):
        response = client.post("/api/v1/analytics/streaks/refresh")

        assert response.status_code == 200
        assert response.json() == {"learning_streak": 0, "longest_learning_streak": 0}

    def test_achievements(self, client):
        response = client.get("/api/v1/analytics/achievements")

        assert response.status_code == 200
        assert len(response.json()) == 6


class TestNewsletterRoutes:

    def test_subscribe(self, anonymous_client):
        response = anonymous_client.post(
            "/api/v1/newsletter/subscribe",
            json={"email": "reader@example.com"},
        )

        assert response.status_code == 201
        assert response.json()["email"] == "reader@example.com"

    def test_invalid_email_is_422(self, anonymous_client):
        response = anonymous_client.post(
            "/api/v1/newsletter/subscribe",
            json={"email": "not-an-email"},
        )

        assert response.status_code == 422

    def test_duplicate_is_409(self, anonymous_client, mock_db):
        mock_db.get_children_where = AsyncMock(return_value={"-N1": {"email": "reader@example.com"}})

        response = anonymous_client.post(
            "/api/v1/newsletter/subscribe",
            json={"email": "reader@example.com"},
        )

        assert response.status_code == 409
