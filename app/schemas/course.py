"""
Course Schemas

Pydantic models for catalog queries and responses.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.course import Course
from app.models.enums import InteractionAction


ALL = "all"


class CourseQuery(BaseModel):
    """
    Immutable catalog search criteria.

    Every facet defaults to ``"all"`` (inactive). Use ``with_changes`` to
    derive a new query instead of mutating one.
    """

    model_config = ConfigDict(frozen=True)

    search: str = Field(default="", description="Case-insensitive search term")
    category: str = Field(default=ALL, description="Category name")
    difficulty: Optional[str] = Field(default=ALL, description="beginner, intermediate or advanced")
    duration: str = Field(default=ALL, description="short, medium or long")
    instructor: str = Field(default=ALL, description="Instructor name")
    price: str = Field(default=ALL, description="free or paid")
    sort: str = Field(default="newest", description="Sort key")

    def with_changes(self, **changes: Any) -> "CourseQuery":
        """Return a copy of this query with ``changes`` applied."""
        return self.model_copy(update=changes)

    @property
    def normalized_search(self) -> str:
        return self.search.strip().lower()


class CourseListResponse(BaseModel):
    """Schema for a filtered and sorted catalog page."""

    items: List[Course]
    total: int
    query: CourseQuery


class CategoryFilterOption(BaseModel):
    """One category button in the catalog filter bar."""

    value: str = Field(..., description="Value to pass as the category facet")
    label: str = Field(..., description="Display label")


class Recommendation(BaseModel):
    """Schema for a personalized course recommendation."""

    course: Course
    score: float = Field(..., description="Relevance score (higher is better)")
    category_name: str = Field(..., description="Mapped category name")


class RecommendationInteractionCreate(BaseModel):
    """Schema for recording what a user did with a recommendation."""

    course_id: str = Field(..., min_length=1, description="Recommended course")
    action: InteractionAction = Field(..., description="view, click or enroll")
