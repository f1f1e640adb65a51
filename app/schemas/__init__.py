"""
BYAMN Learning Backend - Schemas Module

Pydantic models for request/response validation.
"""

from app.schemas.course import (
    CourseQuery,
    CourseListResponse,
    CategoryFilterOption,
    Recommendation,
    RecommendationInteractionCreate,
)
from app.schemas.progress import EnrollmentCreate, LessonProgressUpdate
from app.schemas.analytics import (
    Achievement,
    LearningInsights,
    LessonActivityCreate,
    PeakHours,
    StreakResponse,
    WeeklyAverage,
)
from app.schemas.dashboard import (
    CategoryShare,
    DashboardResponse,
    DashboardStats,
    DonutSegment,
    EnrolledCourse,
    ProgressDistribution,
)
from app.schemas.newsletter import NewsletterSubscribeRequest, NewsletterSubscribeResponse

__all__ = [
    # Course
    "CourseQuery",
    "CourseListResponse",
    "CategoryFilterOption",
    "Recommendation",
    "RecommendationInteractionCreate",
    # Progress
    "EnrollmentCreate",
    "LessonProgressUpdate",
    # Analytics
    "Achievement",
    "LearningInsights",
    "LessonActivityCreate",
    "PeakHours",
    "StreakResponse",
    "WeeklyAverage",
    # Dashboard
    "CategoryShare",
    "DashboardResponse",
    "DashboardStats",
    "DonutSegment",
    "EnrolledCourse",
    "ProgressDistribution",
    # Newsletter
    "NewsletterSubscribeRequest",
    "NewsletterSubscribeResponse",
]
