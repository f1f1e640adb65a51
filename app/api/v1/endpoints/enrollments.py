"""
Enrollment Routes

Endpoints for enrolling in courses and tracking lesson progress.
"""

from fastapi import APIRouter, status

from app.api.deps import CurrentUserId, Database
from app.models.enrollment import Enrollment
from app.schemas.progress import EnrollmentCreate, LessonProgressUpdate
from app.services import progress_service


router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.post(
    "/",
    response_model=Enrollment,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll in a course",
)
async def enroll(
    enrollment_data: EnrollmentCreate,
    user_id: CurrentUserId,
    db: Database,
) -> Enrollment:
    """
    Enroll the current user in a course.

    Enrolling twice returns the existing enrollment.
    """
    return await progress_service.enroll_user(user_id, enrollment_data.course_id, db)


@router.patch(
    "/{enrollment_id}/lessons",
    response_model=Enrollment,
    summary="Mark a lesson completed",
)
async def update_lesson_progress(
    enrollment_id: str,
    update: LessonProgressUpdate,
    user_id: CurrentUserId,
    db: Database,
) -> Enrollment:
    """
    Add a lesson to the completed list and set course progress.

    Args:
        enrollment_id: Enrollment to update.
        update: Lesson id and new progress.
        user_id: Authenticated user (must own the enrollment).
        db: Realtime database client.

    Returns:
        Updated enrollment.
    """
    return await progress_service.update_lesson_progress(
        enrollment_id,
        update.lesson_id,
        update.progress,
        user_id,
        db,
    )


@router.delete(
    "/{enrollment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an enrollment",
)
async def delete_enrollment(
    enrollment_id: str,
    user_id: CurrentUserId,
    db: Database,
) -> None:
    await progress_service.delete_enrollment(enrollment_id, user_id, db)
