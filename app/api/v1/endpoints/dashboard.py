"""
Dashboard Routes
"""

from fastapi import APIRouter

from app.api.deps import CurrentUserId, Database
from app.schemas.dashboard import DashboardResponse
from app.services import progress_service


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/",
    response_model=DashboardResponse,
    summary="Student dashboard",
)
async def get_dashboard(user_id: CurrentUserId, db: Database) -> DashboardResponse:
    """Enrollment stats, progress and category charts, and enrolled courses."""
    return await progress_service.get_dashboard(user_id, db)
