"""
BYAMN Learning Backend - Services Module

Business logic layer. The catalog, analytics, achievement, recommendation
and dashboard modules are pure; the rest talk to the realtime database.
"""

from app.services import catalog_service
from app.services import analytics_service
from app.services import achievement_service
from app.services import recommendation_service
from app.services import dashboard_service
from app.services import tracking_service
from app.services import course_service
from app.services import progress_service
from app.services import newsletter_service
from app.services import ai_reply_service

__all__ = [
    "catalog_service",
    "analytics_service",
    "achievement_service",
    "recommendation_service",
    "dashboard_service",
    "tracking_service",
    "course_service",
    "progress_service",
    "newsletter_service",
    "ai_reply_service",
]
