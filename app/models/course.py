"""
Course Model

Catalog course and category documents.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, computed_field, field_validator, model_validator

from app.core.dates import first_present, normalize
from app.models.base import Document, as_count, as_number, as_text


DEFAULT_RATING = 4.5


class Category(Document):
    """Course category document at ``categories/{id}``."""

    id: str
    name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> str:
        return str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @property
    def display_name(self) -> str:
        """Category name, or the id when the name is missing."""
        return self.name or self.id


class Course(Document):
    """
    Course document at ``courses/{id}``.

    Attributes:
        id: Document key.
        category: Category id or name.
        difficulty: Free-form difficulty label (compared case-insensitively).
        duration: ``"H:MM"`` string or minutes.
        price: 0 means free.
        rating: 0-5, None when unrated.
        enrollment_count: Number of enrolled students.
        created_at: Creation instant, resolved once from
            ``createdAt``/``created``/``date``/``timestamp``.
        lessons: Lesson documents (stored as a list or a keyed object).
    """

    id: str
    title: str = ""
    description: str = ""
    category: Optional[str] = None
    instructor: Optional[str] = None
    language: Optional[str] = None
    difficulty: Optional[str] = None
    duration: Optional[Union[str, float]] = None
    price: float = 0.0
    rating: Optional[float] = None
    enrollment_count: int = Field(default=0, alias="enrollmentCount")
    thumbnail: Optional[str] = None
    lessons: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: normalize(None), alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def _resolve_created_at(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            raw = data.pop("created_at", None) or first_present(data)
            data["createdAt"] = normalize(raw)
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> str:
        return str(value)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> str:
        return as_text(value) or ""

    @field_validator("category", "instructor", "language", "difficulty", "thumbnail", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @field_validator("duration", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> Optional[Union[str, float]]:
        if isinstance(value, str):
            return value.strip() or None
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        return None

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value: Any) -> float:
        return max(0.0, as_number(value))

    @field_validator("rating", mode="before")
    @classmethod
    def _rating(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        rating = as_number(value, default=-1.0)
        if rating < 0:
            return None
        return min(rating, 5.0)

    @field_validator("enrollment_count", mode="before")
    @classmethod
    def _enrollment_count(cls, value: Any) -> int:
        return as_count(value)

    @field_validator("lessons", mode="before")
    @classmethod
    def _lessons(cls, value: Any) -> List[Dict[str, Any]]:
        if isinstance(value, dict):
            value = list(value.values())
        if not isinstance(value, list):
            return []
        return [lesson for lesson in value if isinstance(lesson, dict)]

    @computed_field
    @property
    def display_rating(self) -> float:
        """Rating shown to students; unrated courses show the default."""
        return self.rating if self.rating is not None else DEFAULT_RATING

    @property
    def is_free(self) -> bool:
        return not self.price

    @property
    def total_lesson_duration(self) -> float:
        """Sum of lesson durations in seconds."""
        return sum(as_number(lesson.get("duration")) for lesson in self.lessons)
