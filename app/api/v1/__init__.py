"""
API v1 Router

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analytics, courses, dashboard, enrollments, newsletter

router = APIRouter()

# Include course routes
router.include_router(courses.router)

# Include enrollment routes
router.include_router(enrollments.router)

# Include dashboard routes
router.include_router(dashboard.router)

# Include analytics routes
router.include_router(analytics.router)

# Include newsletter routes
router.include_router(newsletter.router)
