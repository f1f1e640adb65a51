"""
API Dependencies

Reusable dependencies for API routes including authentication.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import verify_firebase_id_token
from app.services.realtime_db import RealtimeDatabase, get_database


# Bearer scheme for Firebase ID tokens in the Authorization header
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> RealtimeDatabase:
    """Dependency providing the shared realtime database client."""
    return get_database()


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """
    Dependency to get the authenticated user's id.

    This dependency:
    1. Extracts the ID token from the Authorization header
    2. Verifies it against Google's signing certificates
    3. Raises 401 if the token is missing or invalid

    Args:
        credentials: Bearer credentials (auto-extracted).

    Returns:
        str: Firebase user id.

    Raises:
        HTTPException: 401 if authentication fails.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = await verify_firebase_id_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id: str | None = payload.get("user_id") or payload.get("sub")
    if not user_id:
        raise credentials_exception

    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
Database = Annotated[RealtimeDatabase, Depends(get_db)]
