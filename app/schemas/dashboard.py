"""
Dashboard Schemas

Pydantic models for the student dashboard.
"""

from typing import List

from pydantic import BaseModel, Field

from app.models.course import Course
from app.models.enrollment import Enrollment


class DashboardStats(BaseModel):
    """Enrollment counters shown at the top of the dashboard."""

    enrolled: int
    completed: int
    in_progress: int
    certificates: int = Field(..., description="Completed courses are certificate eligible")


class DonutSegment(BaseModel):
    """One segment of the progress donut chart."""

    label: str
    count: int
    start_percent: float
    end_percent: float
    clip_path: str = Field(..., description="CSS clip-path for the segment")


class ProgressDistribution(BaseModel):
    """Enrollments grouped by progress state."""

    not_started: int
    in_progress: int
    completed: int
    total: int
    segments: List[DonutSegment]


class CategoryShare(BaseModel):
    """One bar of the category chart."""

    category: str
    count: int
    height_percent: float


class EnrolledCourse(BaseModel):
    """An enrollment joined to its course."""

    enrollment: Enrollment
    course: Course
    category_name: str


class DashboardResponse(BaseModel):
    """Schema for the complete dashboard payload."""

    stats: DashboardStats
    progress: ProgressDistribution
    categories: List[CategoryShare]
    courses: List[EnrolledCourse]
