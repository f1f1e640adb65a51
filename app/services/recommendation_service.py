"""
Recommendation Service

Personalized course recommendations for a signed-in student.

Courses are scored on favourite categories, rating, popularity, lesson
length, difficulty, freshness and past interactions. Already enrolled
courses are never recommended.
"""

import math
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence

from app.core.dates import utc_now
from app.models.analytics import UserAnalytics
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.enums import InteractionAction
from app.schemas.course import Recommendation
from app.services.catalog_service import CategoryLookup


MAX_RECOMMENDATIONS = 6
FRESH_COURSE_DAYS = 30
RECENT_COMPLETIONS = 3

DIFFICULTY_BOOST = {"advanced": 12, "intermediate": 8}
DEFAULT_DIFFICULTY_BOOST = 4


def _lesson_length_points(course: Course) -> float:
    total = course.total_lesson_duration
    # 1 to 6 hours of lessons suits completion best
    if 3600 < total < 21600:
        return 8
    if total > 0:
        return 3
    return 0


def score_course(
    course: Course,
    analytics: Optional[UserAnalytics],
    completed_categories: Sequence[Optional[str]],
    ignored_ids: Iterable[str],
    now: datetime,
) -> float:
    """
    Score one course for a user; higher is more relevant, never negative.

    Args:
        course: Candidate course (not enrolled).
        analytics: User analytics, or None for a new user.
        completed_categories: Categories of recently completed courses.
        ignored_ids: Courses shown to the user but never clicked.
        now: Reference time for freshness.
    """
    score = 0.0
    favorites: Mapping[str, int] = analytics.favorite_categories if analytics else {}

    if course.category and favorites.get(course.category):
        score += favorites[course.category] * 15

    if course.rating and course.rating >= 4.0:
        score += course.rating * 3

    if course.enrollment_count > 50:
        score += math.log(course.enrollment_count) * 2

    score += _lesson_length_points(course)

    if analytics and analytics.learning_velocity > 0 and course.difficulty:
        score += DIFFICULTY_BOOST.get(course.difficulty.lower(), DEFAULT_DIFFICULTY_BOOST)

    age_days = (now - course.created_at).total_seconds() / 86400
    if age_days < FRESH_COURSE_DAYS:
        score += max(0.0, 10 - age_days / 3)

    if course.id in ignored_ids:
        score -= 5

    score += 7 * sum(1 for category in completed_categories if category == course.category)

    return max(0.0, score)


def recommend_courses(
    courses: Sequence[Course],
    enrollments: Sequence[Enrollment],
    analytics: Optional[UserAnalytics],
    interactions: Sequence[Mapping[str, str]],
    lookup: Optional[CategoryLookup] = None,
    now: Optional[datetime] = None,
    limit: int = MAX_RECOMMENDATIONS,
) -> List[Recommendation]:
    """
    Rank unenrolled courses for a user.

    Args:
        courses: Full catalog.
        enrollments: The user's enrollments.
        analytics: The user's analytics, or None.
        interactions: Past recommendation interactions
            (``{"courseId": ..., "action": "view" | "click" | "enroll"}``).
        lookup: Category names for display.
        now: Reference time (defaults to now).
        limit: Maximum number of results.

    Returns:
        Recommendations with a positive score, best first.
    """
    if not courses:
        return []

    lookup = lookup or CategoryLookup()
    now = now or utc_now()

    enrolled_ids = {e.course_id for e in enrollments}
    completed_ids = [e.course_id for e in enrollments if e.is_completed]

    clicked = {i.get("courseId") for i in interactions if i.get("action") == InteractionAction.CLICK.value}
    viewed = {i.get("courseId") for i in interactions if i.get("action") == InteractionAction.VIEW.value}
    ignored_ids = viewed - clicked

    by_id = {course.id: course for course in courses}
    completed_categories = [
        by_id[course_id].category
        for course_id in completed_ids[-RECENT_COMPLETIONS:]
        if course_id in by_id
    ]

    scored = []
    for course in courses:
        if course.id in enrolled_ids:
            continue
        score = score_course(course, analytics, completed_categories, ignored_ids, now)
        if score > 0:
            scored.append((score, course))

    scored.sort(key=lambda item: item[0], reverse=True)

    return [
        Recommendation(
            course=course,
            score=round(score, 2),
            category_name=lookup.name_for(course.category) or "General",
        )
        for score, course in scored[:limit]
    ]
