"""
Newsletter Service

Newsletter signups stored under ``newsletter_subscribers``.
"""

import logging

from fastapi import HTTPException, status

from app.core.dates import utc_now_iso
from app.models.enums import SubscriptionStatus
from app.schemas.newsletter import NewsletterSubscribeResponse
from app.services.realtime_db import RealtimeDatabase


logger = logging.getLogger(__name__)

SUBSCRIBERS_PATH = "newsletter_subscribers"


async def is_subscribed(email: str, db: RealtimeDatabase) -> bool:
    """Check whether an address is already on the list."""
    existing = await db.get_children_where(SUBSCRIBERS_PATH, "email", email)
    return bool(existing)


async def subscribe(
    email: str,
    source: str,
    db: RealtimeDatabase,
) -> NewsletterSubscribeResponse:
    """
    Add an address to the newsletter.

    Args:
        email: Validated subscriber address.
        source: Form the signup came from.
        db: Realtime database client.

    Returns:
        The stored subscription.

    Raises:
        HTTPException: 409 if the address is already subscribed.
    """
    email = email.strip().lower()

    if await is_subscribed(email, db):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You are already subscribed to our newsletter!",
        )

    key = await db.push(
        SUBSCRIBERS_PATH,
        {
            "email": email,
            "subscribedAt": utc_now_iso(),
            "status": SubscriptionStatus.ACTIVE.value,
            "source": source,
        },
    )
    logger.info("Newsletter subscription %s from %s", key, source)

    return NewsletterSubscribeResponse(
        id=key,
        email=email,
        message="Successfully subscribed to our newsletter!",
    )
