"""
Progress Schemas

Pydantic models for enrollment and lesson progress requests.
"""

from pydantic import BaseModel, Field


class EnrollmentCreate(BaseModel):
    """Schema for enrolling in a course."""

    course_id: str = Field(..., min_length=1, description="Course ID to enroll in")


class LessonProgressUpdate(BaseModel):
    """Schema for marking a lesson complete."""

    lesson_id: str = Field(..., min_length=1, description="Completed lesson ID")
    progress: int = Field(..., ge=0, le=100, description="Overall course progress percentage")
