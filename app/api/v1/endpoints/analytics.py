"""
Analytics Routes

Endpoints for recording study activity and reading learning insights.
"""

from typing import List

from fastapi import APIRouter

from app.api.deps import CurrentUserId, Database
from app.models.analytics import UserAnalytics
from app.schemas.analytics import (
    Achievement,
    LearningInsights,
    LessonActivityCreate,
    StreakResponse,
)
from app.services import tracking_service


router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get(
    "/insights",
    response_model=LearningInsights,
    summary="Learning insights",
)
async def get_insights(user_id: CurrentUserId, db: Database) -> LearningInsights:
    """
    Aggregated analytics for the current user.

    Includes consistency, streaks, velocity, weekly averages, peak hours
    and the engagement score. A user with no recorded activity gets zeros.
    """
    return await tracking_service.get_insights(user_id, db)


@router.post(
    "/lessons",
    response_model=UserAnalytics,
    summary="Record lesson study time",
)
async def record_lesson_activity(
    activity: LessonActivityCreate,
    user_id: CurrentUserId,
    db: Database,
) -> UserAnalytics:
    """Credit study time (and optionally a completed lesson) to today."""
    return await tracking_service.record_lesson_activity(
        user_id,
        activity.course_id,
        activity.lesson_id,
        activity.time_spent,
        activity.completed,
        db,
    )


@router.post(
    "/courses/{course_id}/complete",
    response_model=UserAnalytics,
    summary="Record course completion",
)
async def record_course_completion(
    course_id: str,
    user_id: CurrentUserId,
    db: Database,
) -> UserAnalytics:
    return await tracking_service.record_course_completion(user_id, course_id, db)


@router.post(
    "/streaks/refresh",
    response_model=StreakResponse,
    summary="Recompute learning streaks",
)
async def refresh_streaks(user_id: CurrentUserId, db: Database) -> StreakResponse:
    return await tracking_service.refresh_streaks(user_id, db)


@router.get(
    "/achievements",
    response_model=List[Achievement],
    summary="Achievements",
)
async def list_achievements(user_id: CurrentUserId, db: Database) -> List[Achievement]:
    """Default achievements and whether the current user earned each."""
    return await tracking_service.get_achievements(user_id, db)
