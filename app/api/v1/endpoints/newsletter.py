"""
Newsletter Routes
"""

from fastapi import APIRouter, status

from app.api.deps import Database
from app.schemas.newsletter import NewsletterSubscribeRequest, NewsletterSubscribeResponse
from app.services import newsletter_service


router = APIRouter(prefix="/newsletter", tags=["Newsletter"])


@router.post(
    "/subscribe",
    response_model=NewsletterSubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to the newsletter",
)
async def subscribe(
    request: NewsletterSubscribeRequest,
    db: Database,
) -> NewsletterSubscribeResponse:
    """
    Add an address to the newsletter.

    Returns 409 if the address is already subscribed.
    """
    return await newsletter_service.subscribe(request.email, request.source, db)
