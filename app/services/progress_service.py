"""
Progress Service

Business logic for course enrollments, lesson progress and the
student dashboard.
"""

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import HTTPException, status

from app.core.dates import utc_now_iso
from app.models.enrollment import Enrollment
from app.schemas.dashboard import DashboardResponse
from app.services import dashboard_service
from app.services.catalog_service import CategoryLookup
from app.services.course_service import fetch_catalog
from app.services.realtime_db import RealtimeDatabase, parse_documents


logger = logging.getLogger(__name__)

COMPLETE = 100


async def fetch_user_enrollments(user_id: str, db: RealtimeDatabase) -> List[Enrollment]:
    """
    Get all enrollments of a user.

    Args:
        user_id: Firebase user id.
        db: Realtime database client.

    Returns:
        List of enrollments.
    """
    data = await db.get_children_where("enrollments", "userId", user_id)
    return parse_documents(data, Enrollment)


async def get_enrollment(enrollment_id: str, db: RealtimeDatabase) -> Dict[str, Any]:
    """
    Get the raw enrollment document.

    Raises:
        HTTPException: 404 if the enrollment does not exist.
    """
    data = await db.get(f"enrollments/{enrollment_id}")
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Enrollment {enrollment_id} not found",
        )
    return data


def _check_owner(document: Dict[str, Any], user_id: str) -> None:
    if document.get("userId") != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this enrollment",
        )


async def enroll_user(user_id: str, course_id: str, db: RealtimeDatabase) -> Enrollment:
    """
    Enroll a user in a course.

    Enrolling twice in the same course returns the existing enrollment.

    Args:
        user_id: Firebase user id.
        course_id: Course to enroll in.
        db: Realtime database client.

    Returns:
        The new or existing enrollment.
    """
    for enrollment in await fetch_user_enrollments(user_id, db):
        if enrollment.course_id == course_id:
            logger.debug("User %s already enrolled in %s", user_id, course_id)
            return enrollment

    document = {
        "userId": user_id,
        "courseId": course_id,
        "enrolledAt": utc_now_iso(),
        "progress": 0,
        "completedLessons": [],
    }
    key = await db.push("enrollments", document)
    logger.info("User %s enrolled in course %s", user_id, course_id)
    return Enrollment.model_validate({**document, "id": key})


async def update_lesson_progress(
    enrollment_id: str,
    lesson_id: str,
    progress: int,
    user_id: str,
    db: RealtimeDatabase,
) -> Enrollment:
    """
    Mark a lesson completed and set the course progress.

    Args:
        enrollment_id: Enrollment to update.
        lesson_id: Lesson the user completed.
        progress: New course progress (0-100).
        user_id: User making the request.
        db: Realtime database client.

    Returns:
        Updated enrollment.

    Raises:
        HTTPException: 404 if missing, 403 if owned by another user.
    """
    document = await get_enrollment(enrollment_id, db)
    _check_owner(document, user_id)

    lessons = document.get("completedLessons") or []
    if isinstance(lessons, dict):
        lessons = list(lessons.values())
    if lesson_id not in lessons:
        lessons = [*lessons, lesson_id]

    now = utc_now_iso()
    updated = {
        **document,
        "completedLessons": lessons,
        "progress": progress,
        "lastAccessed": now,
    }
    if progress >= COMPLETE and not document.get("completedAt"):
        updated["completedAt"] = now

    await db.put(f"enrollments/{enrollment_id}", updated)
    return Enrollment.model_validate({**updated, "id": enrollment_id})


async def delete_enrollment(enrollment_id: str, user_id: str, db: RealtimeDatabase) -> None:
    """
    Delete one of the user's enrollments.

    Raises:
        HTTPException: 404 if missing, 403 if owned by another user.
    """
    document = await get_enrollment(enrollment_id, db)
    _check_owner(document, user_id)
    await db.delete(f"enrollments/{enrollment_id}")
    logger.info("User %s deleted enrollment %s", user_id, enrollment_id)


async def get_dashboard(user_id: str, db: RealtimeDatabase) -> DashboardResponse:
    """
    Build the student dashboard.

    The catalog and the user's enrollments are fetched concurrently.
    """
    (courses, categories), enrollments = await asyncio.gather(
        fetch_catalog(db),
        fetch_user_enrollments(user_id, db),
    )
    return dashboard_service.build_dashboard(
        enrollments,
        courses,
        CategoryLookup.from_categories(categories),
    )
