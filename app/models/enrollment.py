"""
Enrollment Model

User-course enrollment with lesson progress tracking.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from app.core.dates import normalize
from app.models.base import Document, as_number, as_text


class Enrollment(Document):
    """
    Enrollment document at ``enrollments/{id}``.

    A progress of 100 is the only completion predicate.

    Attributes:
        id: Document key.
        user_id: Owner of the enrollment.
        course_id: Enrolled course.
        progress: Integer percentage 0-100.
        completed_lessons: Distinct ids of completed lessons.
        enrolled_at: When the user enrolled.
        last_accessed: Last lesson progress update.
        completed_at: Completion time, if completed.
        certificate_id: Issued certificate, if any.
    """

    id: str
    user_id: str = Field(..., alias="userId")
    course_id: str = Field(..., alias="courseId")
    progress: int = 0
    completed_lessons: List[str] = Field(default_factory=list, alias="completedLessons")
    enrolled_at: Optional[datetime] = Field(default=None, alias="enrolledAt")
    last_accessed: Optional[datetime] = Field(default=None, alias="lastAccessed")
    completed_at: Optional[datetime] = Field(default=None, alias="completedAt")
    certificate_id: Optional[str] = Field(default=None, alias="certificateId")

    @field_validator("id", "user_id", "course_id", mode="before")
    @classmethod
    def _key(cls, value: Any) -> str:
        return str(value) if value is not None else ""

    @field_validator("progress", mode="before")
    @classmethod
    def _progress(cls, value: Any) -> int:
        return min(100, max(0, int(round(as_number(value)))))

    @field_validator("completed_lessons", mode="before")
    @classmethod
    def _completed_lessons(cls, value: Any) -> List[str]:
        # Sparse arrays come back from the database as keyed objects
        if isinstance(value, dict):
            value = list(value.values())
        if not isinstance(value, list):
            return []
        lessons: List[str] = []
        for lesson in value:
            lesson_id = as_text(lesson)
            if lesson_id and lesson_id not in lessons:
                lessons.append(lesson_id)
        return lessons

    @field_validator("enrolled_at", "last_accessed", "completed_at", mode="before")
    @classmethod
    def _instant(cls, value: Any) -> Optional[datetime]:
        if not value:
            return None
        return normalize(value)

    @field_validator("certificate_id", mode="before")
    @classmethod
    def _certificate_id(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @property
    def is_completed(self) -> bool:
        return self.progress == 100

    @property
    def is_in_progress(self) -> bool:
        return 0 < self.progress < 100

    @property
    def is_not_started(self) -> bool:
        return self.progress == 0
