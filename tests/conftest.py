"""
Pytest Configuration and Fixtures

Provides reusable fixtures for testing the BYAMN Learning Backend.
"""

from datetime import date
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.cache import catalog_cache, certificate_cache
from app.models.analytics import UserAnalytics
from app.models.course import Category, Course
from app.models.enrollment import Enrollment
from app.services.realtime_db import RealtimeDatabase


# ==================== Cache Fixtures ====================

@pytest.fixture(autouse=True)
def clear_caches() -> Generator[None, None, None]:
    """Start every test with empty caches."""
    catalog_cache.clear()
    certificate_cache.clear()
    yield
    catalog_cache.clear()
    certificate_cache.clear()


# ==================== Database Fixtures ====================

@pytest.fixture
def mock_db() -> AsyncMock:
    """
    Create a mock realtime database client.

    Returns:
        AsyncMock configured to behave like RealtimeDatabase.
    """
    db = AsyncMock(spec=RealtimeDatabase)
    db.get = AsyncMock(return_value=None)
    db.get_children_where = AsyncMock(return_value={})
    db.put = AsyncMock(return_value=None)
    db.patch = AsyncMock(return_value=None)
    db.push = AsyncMock(return_value="-Nnew")
    db.delete = AsyncMock(return_value=None)
    return db


# ==================== HTTP Client Fixtures ====================

@pytest.fixture
def mock_httpx_response():
    """
    Factory fixture to create mock httpx responses.

    Usage:
        response = mock_httpx_response(status_code=200, json_data={"key": "value"})
    """
    def _create_response(
        status_code: int = 200,
        json_data=None,
        text: str = "",
        headers: dict = None,
    ):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data
        response.text = text
        response.headers = headers or {}
        return response
    return _create_response


# ==================== Catalog Fixtures ====================

@pytest.fixture
def sample_categories() -> list:
    """Two named categories."""
    return [
        Category(id="web", name="Web Development"),
        Category(id="data", name="Data Science"),
    ]


@pytest.fixture
def sample_course_data() -> dict:
    """Raw course documents keyed by id, as stored in the database."""
    return {
        "c1": {
            "title": "HTML Basics",
            "description": "Learn the building blocks of the web",
            "category": "web",
            "instructor": "Asha Rao",
            "difficulty": "Beginner",
            "duration": "1:30",
            "price": 0,
            "rating": 4.2,
            "enrollmentCount": 120,
            "createdAt": "2024-01-10T00:00:00Z",
        },
        "c2": {
            "title": "Pandas in Depth",
            "description": "Dataframes, grouping and joins",
            "category": "data",
            "instructor": "Ben Ito",
            "difficulty": "Intermediate",
            "duration": "5:00",
            "price": 499,
            "rating": 4.8,
            "enrollmentCount": 40,
            "createdAt": {"_seconds": 1706745600},
        },
        "c3": {
            "title": "Full Stack Projects",
            "description": "Ship a complete web app",
            "category": "web",
            "instructor": "Asha Rao",
            "difficulty": "Advanced",
            "duration": "7:00",
            "price": 999,
            "enrollmentCount": 75,
            "created": 1704067200000,
        },
    }


@pytest.fixture
def sample_courses(sample_course_data) -> list:
    """Validated courses in insertion order."""
    return [
        Course.model_validate({**data, "id": key})
        for key, data in sample_course_data.items()
    ]


# ==================== Progress Fixtures ====================

@pytest.fixture
def make_enrollment():
    """
    Factory fixture to build enrollments.

    Usage:
        enrollment = make_enrollment("c1", progress=50)
    """
    def _create(course_id: str, progress: int = 0, user_id: str = "user-1", **extra) -> Enrollment:
        return Enrollment.model_validate({
            "id": f"e-{course_id}",
            "userId": user_id,
            "courseId": course_id,
            "progress": progress,
            **extra,
        })
    return _create


# ==================== Analytics Fixtures ====================

@pytest.fixture
def sample_analytics_data() -> dict:
    """Analytics document with five recorded days, four of them active."""
    return {
        "totalStudyTime": 7200,
        "lessonsCompleted": 10,
        "coursesCompleted": 3,
        "learningStreak": 5,
        "favoriteCategories": {"web": 2},
        "dailyActivity": {
            "2024-01-01": {"studyTime": 1800, "lessonsCompleted": 3},
            "2024-01-02": {"studyTime": 1800, "lessonsCompleted": 2},
            "2024-01-03": {"studyTime": 0, "lessonsCompleted": 0},
            "2024-01-04": {"studyTime": 1800, "lessonsCompleted": 3},
            "2024-01-05": {"studyTime": 1800, "lessonsCompleted": 2},
        },
    }


@pytest.fixture
def sample_analytics(sample_analytics_data) -> UserAnalytics:
    return UserAnalytics.model_validate(sample_analytics_data)


@pytest.fixture
def activity_day() -> date:
    """Last recorded day of ``sample_analytics``."""
    return date(2024, 1, 5)
