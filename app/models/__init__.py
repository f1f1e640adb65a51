"""
BYAMN Learning Backend - Models Module

Pydantic models for the realtime database documents.
"""

# Enums
from app.models.enums import (
    DurationBucket,
    PriceFilter,
    SortKey,
    InteractionAction,
    SubscriptionStatus,
)

# Documents
from app.models.base import Document
from app.models.course import Category, Course
from app.models.enrollment import Enrollment
from app.models.analytics import DailyActivity, UserAnalytics

__all__ = [
    # Enums
    "DurationBucket",
    "PriceFilter",
    "SortKey",
    "InteractionAction",
    "SubscriptionStatus",
    # Documents
    "Document",
    "Category",
    "Course",
    "Enrollment",
    "DailyActivity",
    "UserAnalytics",
]
