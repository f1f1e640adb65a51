"""
Security Utilities

Firebase ID token verification.

Tokens are RS256 JWTs signed with Google's rotating keys; the public
certificates are fetched from Google and cached for their max-age.
"""

import logging
import re
from typing import Dict, Optional

import httpx
from jose import JWTError, jwt

from app.core.cache import cache_certificates, get_cached_certificates
from app.core.config import settings
from app.core.http_client import get_with_retry


logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = (
    "https://www.googleapis.com/robot/v1/metadata/x509/"
    "securetoken@system.gserviceaccount.com"
)
ALGORITHM = "RS256"

_MAX_AGE = re.compile(r"max-age=(\d+)")


def parse_max_age(cache_control: str) -> Optional[int]:
    """Extract ``max-age`` seconds from a Cache-Control header."""
    match = _MAX_AGE.search(cache_control or "")
    return int(match.group(1)) if match else None


async def fetch_google_certificates() -> Dict[str, str]:
    """
    Get Google's token signing certificates keyed by key id.

    Returns:
        dict: PEM certificates by ``kid``.

    Raises:
        httpx.HTTPError: If the certificates cannot be fetched.
    """
    cached = get_cached_certificates()
    if cached is not None:
        return cached

    response = await get_with_retry(GOOGLE_CERTS_URL)
    response.raise_for_status()
    certificates = response.json()

    cache_certificates(
        certificates,
        ttl=parse_max_age(response.headers.get("cache-control", "")),
    )
    return certificates


async def verify_firebase_id_token(token: str) -> dict | None:
    """
    Verify a Firebase ID token.

    Checks the signature against Google's certificates, the audience
    (project id), the issuer and expiry.

    Args:
        token: Encoded ID token.

    Returns:
        dict: Decoded claims if valid, None otherwise.
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return None

    key_id = header.get("kid")
    if header.get("alg") != ALGORITHM or not key_id:
        return None

    try:
        certificates = await fetch_google_certificates()
    except httpx.HTTPError as e:
        logger.error("Could not fetch Google certificates: %s", e)
        return None

    certificate = certificates.get(key_id)
    if certificate is None:
        return None

    try:
        payload = jwt.decode(
            token,
            certificate,
            algorithms=[ALGORITHM],
            audience=settings.FIREBASE_PROJECT_ID,
            issuer=settings.firebase_issuer,
        )
    except JWTError:
        return None

    if not payload.get("sub"):
        return None
    return payload
