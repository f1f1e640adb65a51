"""
HTTP Client Module

Provides a globally shared httpx.AsyncClient with:
- Connection pooling for all realtime database and third-party API calls
- Retries with exponential backoff for idempotent requests
- Configurable timeouts
"""

import asyncio
import logging
from typing import Any, Optional

import httpx


logger = logging.getLogger(__name__)


# ============== Configuration ==============

# Connection pool limits
MAX_CONNECTIONS = 100
MAX_KEEPALIVE_CONNECTIONS = 20
KEEPALIVE_EXPIRY = 30  # seconds

# Timeout configuration
DEFAULT_TIMEOUT = 15.0  # seconds

# Retry configuration
MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 0.5  # seconds

# POST creates a new child on every call, so it is never retried
IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "PATCH", "DELETE"})


# ============== Global Client Instance ==============

_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """
    Get or create the global async HTTP client.

    Returns:
        httpx.AsyncClient: Shared client instance.
    """
    global _http_client
    if _http_client is None:
        limits = httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=KEEPALIVE_EXPIRY,
        )
        timeout = httpx.Timeout(DEFAULT_TIMEOUT)

        _http_client = httpx.AsyncClient(
            limits=limits,
            timeout=timeout,
            http2=True,
        )
    return _http_client


async def close_http_client() -> None:
    """
    Close the global HTTP client.

    Should be called during application shutdown.
    """
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


# ============== Request Helpers with Retry ==============

def _backoff(attempt: int) -> float:
    return RETRY_BACKOFF_BASE * (2 ** attempt)


async def request_with_retry(
    method: str,
    url: str,
    max_retries: Optional[int] = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Make an HTTP request, retrying idempotent methods on failure.

    Retries on 5xx responses and connection/timeout errors with
    exponential backoff. Non-idempotent methods get a single attempt
    unless ``max_retries`` is given explicitly.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        max_retries: Maximum number of retry attempts
        **kwargs: Additional arguments passed to httpx request

    Returns:
        httpx.Response: The last response received

    Raises:
        httpx.TransportError: If every attempt fails to connect
    """
    method = method.upper()
    if max_retries is None:
        max_retries = MAX_RETRIES if method in IDEMPOTENT_METHODS else 0

    client = get_http_client()

    for attempt in range(max_retries + 1):
        try:
            response = await client.request(method, url, **kwargs)
        except (httpx.ConnectError, httpx.ReadTimeout, httpx.WriteTimeout) as e:
            if attempt >= max_retries:
                logger.error("%s %s failed after %d attempts: %s", method, url, attempt + 1, e)
                raise
            wait_time = _backoff(attempt)
            logger.warning("Connection error on %s %s, retrying in %.2fs: %s", method, url, wait_time, e)
            await asyncio.sleep(wait_time)
            continue

        if response.status_code >= 500 and attempt < max_retries:
            wait_time = _backoff(attempt)
            logger.warning(
                "Server error %d on %s %s, retrying in %.2fs",
                response.status_code, method, url, wait_time,
            )
            await asyncio.sleep(wait_time)
            continue

        return response

    raise httpx.HTTPError(f"{method} {url} failed after {max_retries} retries")


async def get_with_retry(url: str, **kwargs: Any) -> httpx.Response:
    """Convenience wrapper for GET requests with retry."""
    return await request_with_retry("GET", url, **kwargs)


async def post_with_retry(url: str, **kwargs: Any) -> httpx.Response:
    """Convenience wrapper for POST requests (single attempt unless told otherwise)."""
    return await request_with_retry("POST", url, **kwargs)
