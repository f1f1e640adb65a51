"""
Course Routes

Endpoints for browsing the catalog and personalized recommendations.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUserId, Database
from app.schemas.course import (
    ALL,
    CategoryFilterOption,
    CourseListResponse,
    CourseQuery,
    Recommendation,
    RecommendationInteractionCreate,
)
from app.services import course_service


router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get(
    "/",
    response_model=CourseListResponse,
    summary="Search the course catalog",
)
async def list_courses(
    db: Database,
    search: str = Query("", description="Matches title, description, instructor and category"),
    category: str = Query(ALL, description="Category name"),
    difficulty: Optional[str] = Query(ALL, description="beginner, intermediate or advanced"),
    duration: str = Query(ALL, description="short, medium or long"),
    instructor: str = Query(ALL, description="Instructor name"),
    price: str = Query(ALL, description="free or paid"),
    sort: str = Query("newest", description="newest, oldest, enrollmentAsc, enrollmentDesc, ratingDesc, priceAsc or priceDesc"),
) -> CourseListResponse:
    """
    Filter and sort the catalog.

    Every facet defaults to ``all``; unknown sort keys fall back to newest.
    """
    query = CourseQuery(
        search=search,
        category=category,
        difficulty=difficulty,
        duration=duration,
        instructor=instructor,
        price=price,
        sort=sort,
    )
    return await course_service.search_courses(query, db)


@router.get(
    "/categories",
    response_model=List[CategoryFilterOption],
    summary="Category filter options",
)
async def list_category_options(db: Database) -> List[CategoryFilterOption]:
    """Categories present in the catalog, preceded by ``All Courses``."""
    return await course_service.get_category_options(db)


@router.get(
    "/recommendations",
    response_model=List[Recommendation],
    summary="Personalized recommendations",
)
async def list_recommendations(
    user_id: CurrentUserId,
    db: Database,
) -> List[Recommendation]:
    """
    Up to six unenrolled courses ranked for the current user.

    Returned courses are recorded as viewed.
    """
    return await course_service.get_recommendations(user_id, db)


@router.post(
    "/recommendations/interactions",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Record a recommendation interaction",
)
async def record_interaction(
    interaction: RecommendationInteractionCreate,
    user_id: CurrentUserId,
    db: Database,
) -> None:
    await course_service.track_recommendation_interaction(
        user_id,
        interaction.course_id,
        interaction.action,
        db,
    )
