"""
Course Service

Reads the course catalog from the realtime database and serves
filtered, sorted and personalized views of it.
"""

import asyncio
import logging
from typing import Any, Dict, List, Tuple

from app.core.cache import cache_catalog, get_cached_catalog
from app.core.config import settings
from app.core.dates import utc_now_iso
from app.models.course import Category, Course
from app.models.enums import InteractionAction
from app.schemas.course import CategoryFilterOption, CourseListResponse, CourseQuery, Recommendation
from app.services import catalog_service, recommendation_service, tracking_service
from app.services.catalog_service import CategoryLookup
from app.services.realtime_db import RealtimeDatabase, iter_children, parse_documents


logger = logging.getLogger(__name__)


async def fetch_courses(db: RealtimeDatabase) -> List[Course]:
    """
    Fetch all courses, newest first.

    Args:
        db: Realtime database client.

    Returns:
        List of courses.
    """
    courses = parse_documents(await db.get("courses"), Course)
    return catalog_service.sort_courses(courses, "newest")


async def fetch_categories(db: RealtimeDatabase) -> List[Category]:
    """Fetch all course categories."""
    return parse_documents(await db.get("categories"), Category)


async def fetch_catalog(db: RealtimeDatabase) -> Tuple[List[Course], List[Category]]:
    """
    Fetch courses and categories together.

    Both reads run concurrently; the result is cached for
    ``CATALOG_CACHE_TTL`` seconds.
    """
    cached = get_cached_catalog()
    if cached is not None:
        return cached

    courses, categories = await asyncio.gather(
        fetch_courses(db),
        fetch_categories(db),
    )
    cache_catalog((courses, categories), ttl=settings.CATALOG_CACHE_TTL)
    logger.info("Loaded catalog: %d courses, %d categories", len(courses), len(categories))
    return courses, categories


async def search_courses(query: CourseQuery, db: RealtimeDatabase) -> CourseListResponse:
    """
    Filter and sort the catalog.

    Args:
        query: Search criteria.
        db: Realtime database client.

    Returns:
        Matching courses in the requested order.
    """
    courses, categories = await fetch_catalog(db)
    lookup = CategoryLookup.from_categories(categories)
    items = catalog_service.apply_query(courses, query, lookup)
    return CourseListResponse(items=items, total=len(items), query=query)


async def get_category_options(db: RealtimeDatabase) -> List[CategoryFilterOption]:
    """Category filter options for the loaded catalog."""
    courses, categories = await fetch_catalog(db)
    return catalog_service.category_options(courses, CategoryLookup.from_categories(categories))


async def fetch_recommendation_interactions(
    user_id: str,
    db: RealtimeDatabase,
) -> List[Dict[str, Any]]:
    """Fetch a user's past recommendation interactions."""
    data = await db.get(f"recommendationInteractions/{user_id}")
    return [child for _, child in iter_children(data)]


async def track_recommendation_interaction(
    user_id: str,
    course_id: str,
    action: InteractionAction,
    db: RealtimeDatabase,
) -> str:
    """Record that a user viewed, clicked or enrolled from a recommendation."""
    return await db.push(
        f"recommendationInteractions/{user_id}",
        {
            "courseId": course_id,
            "action": action.value,
            "timestamp": utc_now_iso(),
        },
    )


async def get_recommendations(user_id: str, db: RealtimeDatabase) -> List[Recommendation]:
    """
    Personalized recommendations for a user.

    Fetches the catalog, enrollments, analytics and interactions
    concurrently, then ranks unenrolled courses. Each returned course
    is recorded as viewed.
    """
    from app.services import progress_service

    (courses, categories), enrollments, analytics, interactions = await asyncio.gather(
        fetch_catalog(db),
        progress_service.fetch_user_enrollments(user_id, db),
        tracking_service.fetch_user_analytics(user_id, db),
        fetch_recommendation_interactions(user_id, db),
    )

    recommendations = recommendation_service.recommend_courses(
        courses,
        enrollments,
        analytics,
        interactions,
        lookup=CategoryLookup.from_categories(categories),
    )

    await asyncio.gather(*(
        track_recommendation_interaction(user_id, item.course.id, InteractionAction.VIEW, db)
        for item in recommendations
    ))
    return recommendations
