"""
Tracking Service

Reads and writes the per-user analytics document at ``userAnalytics/{uid}``
and serves the insights derived from it.

Writes use multi-path PATCH requests so every counter touched by one
event lands in a single request.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status

from app.core.dates import utc_now_iso
from app.models.analytics import UserAnalytics
from app.models.base import as_count, as_number
from app.schemas.analytics import Achievement, LearningInsights, StreakResponse
from app.services import achievement_service, analytics_service
from app.services.realtime_db import RealtimeDatabase


logger = logging.getLogger(__name__)


def _analytics_path(user_id: str) -> str:
    return f"userAnalytics/{user_id}"


def _child(node: Any, *keys: str) -> Dict[str, Any]:
    for key in keys:
        node = node.get(key) if isinstance(node, dict) else None
    return node if isinstance(node, dict) else {}


async def _fetch_raw_analytics(user_id: str, db: RealtimeDatabase) -> Dict[str, Any]:
    data = await db.get(_analytics_path(user_id))
    return data if isinstance(data, dict) else {}


async def fetch_user_analytics(
    user_id: str,
    db: RealtimeDatabase,
) -> Optional[UserAnalytics]:
    """
    Fetch a user's analytics document.

    Args:
        user_id: Firebase user id.
        db: Realtime database client.

    Returns:
        UserAnalytics, or None if the user has no analytics yet.
    """
    data = await db.get(_analytics_path(user_id))
    if not isinstance(data, dict):
        return None
    return UserAnalytics.model_validate(data)


async def persist_analytics(
    user_id: str,
    patch: Dict[str, Any],
    db: RealtimeDatabase,
) -> None:
    """
    Update keys of a user's analytics document.

    Keys may be slash-separated child paths. Concurrent writers follow
    last-write-wins.
    """
    await db.patch(_analytics_path(user_id), patch)


async def initialize_user_analytics(user_id: str, db: RealtimeDatabase) -> UserAnalytics:
    """
    Create an empty analytics document unless one already exists.

    Args:
        user_id: Firebase user id.
        db: Realtime database client.

    Returns:
        The existing or newly created analytics.
    """
    existing = await fetch_user_analytics(user_id, db)
    if existing is not None:
        return existing

    document = {
        "totalStudyTime": 0,
        "lessonsCompleted": 0,
        "coursesCompleted": 0,
        "dailyActivity": {},
        "favoriteCategories": {},
        "learningStreak": 0,
        "longestLearningStreak": 0,
        "lastActiveDate": None,
        "createdAt": utc_now_iso(),
    }
    await db.put(_analytics_path(user_id), document)
    logger.info("Initialized analytics for user %s", user_id)
    return UserAnalytics.model_validate(document)


async def record_lesson_activity(
    user_id: str,
    course_id: str,
    lesson_id: str,
    time_spent: float,
    completed: bool,
    db: RealtimeDatabase,
    today: Optional[date] = None,
) -> UserAnalytics:
    """
    Record time spent in a lesson.

    Updates the lesson's detail entry, the user's cumulative counters and
    today's daily activity bucket.

    Args:
        user_id: Firebase user id.
        course_id: Course containing the lesson.
        lesson_id: Lesson that was studied.
        time_spent: Seconds spent in this session.
        completed: Whether the lesson was completed.
        db: Realtime database client.
        today: Day to credit (defaults to the current UTC day).

    Returns:
        The analytics after the update.
    """
    time_spent = max(0.0, time_spent)
    day_key = (today or analytics_service.today_utc()).isoformat()
    now = utc_now_iso()

    document = await _fetch_raw_analytics(user_id, db)
    lesson = _child(document, "lessonDetails", course_id, lesson_id)
    daily = _child(document, "dailyActivity", day_key)
    completed_count = 1 if completed else 0

    lesson_entry = {
        "timeSpent": as_number(lesson.get("timeSpent")) + time_spent,
        "completed": completed,
        "lastAccessed": now,
        "accesses": as_count(lesson.get("accesses")) + 1,
    }
    daily_entry = {
        "studyTime": as_number(daily.get("studyTime")) + time_spent,
        "lessonsCompleted": as_count(daily.get("lessonsCompleted")) + completed_count,
    }
    patch = {
        f"lessonDetails/{course_id}/{lesson_id}": lesson_entry,
        "totalStudyTime": as_number(document.get("totalStudyTime")) + time_spent,
        "lessonsCompleted": as_count(document.get("lessonsCompleted")) + completed_count,
        "lastActiveDate": now,
        f"dailyActivity/{day_key}": daily_entry,
    }
    await persist_analytics(user_id, patch, db)

    document = dict(document)
    document.update({key: value for key, value in patch.items() if "/" not in key})
    document["dailyActivity"] = {**_child(document, "dailyActivity"), day_key: daily_entry}
    return UserAnalytics.model_validate(document)


async def record_course_completion(
    user_id: str,
    course_id: str,
    db: RealtimeDatabase,
) -> UserAnalytics:
    """
    Record that a user completed a course.

    Completing the same course twice counts once.

    Raises:
        HTTPException: 404 if the course does not exist.
    """
    course = await db.get(f"courses/{course_id}")
    if not isinstance(course, dict):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Course {course_id} not found",
        )

    document = await _fetch_raw_analytics(user_id, db)
    if course_id in _child(document, "completedCourses"):
        return UserAnalytics.model_validate(document)

    patch: Dict[str, Any] = {
        "coursesCompleted": as_count(document.get("coursesCompleted")) + 1,
        f"completedCourses/{course_id}": {
            "completedAt": utc_now_iso(),
            "completionStatus": True,
        },
    }
    category = course.get("category")
    favorites = dict(_child(document, "favoriteCategories"))
    if category:
        favorites[str(category)] = as_count(favorites.get(str(category))) + 1
        patch[f"favoriteCategories/{category}"] = favorites[str(category)]

    await persist_analytics(user_id, patch, db)
    logger.info("User %s completed course %s", user_id, course_id)

    document = dict(document)
    document["coursesCompleted"] = patch["coursesCompleted"]
    document["favoriteCategories"] = favorites
    return UserAnalytics.model_validate(document)


async def refresh_streaks(
    user_id: str,
    db: RealtimeDatabase,
    today: Optional[date] = None,
) -> StreakResponse:
    """
    Recompute and store the current and longest streaks.

    The stored longest streak never decreases.
    """
    analytics = await fetch_user_analytics(user_id, db) or UserAnalytics()
    current = analytics_service.current_streak(analytics.daily_activity, today)
    longest = max(
        analytics_service.longest_streak(analytics.daily_activity),
        analytics.longest_learning_streak,
        current,
    )

    await persist_analytics(
        user_id,
        {"learningStreak": current, "longestLearningStreak": longest},
        db,
    )
    return StreakResponse(learning_streak=current, longest_learning_streak=longest)


async def get_insights(
    user_id: str,
    db: RealtimeDatabase,
    today: Optional[date] = None,
) -> LearningInsights:
    """Learning insights for a user; all zero when nothing was recorded."""
    analytics = await fetch_user_analytics(user_id, db)
    return analytics_service.build_insights(analytics, today)


async def get_achievements(user_id: str, db: RealtimeDatabase) -> List[Achievement]:
    """Default achievements flagged with whether the user earned them."""
    analytics = await fetch_user_analytics(user_id, db)
    return achievement_service.user_achievements(analytics)
