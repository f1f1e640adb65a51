"""
Realtime Database Client

Thin async client for the Firebase Realtime Database REST API.

Every node is addressed as ``{FIREBASE_DATABASE_URL}/{path}.json``.
Reads and idempotent writes are retried by the shared HTTP client;
pushes (POST) are sent once.
"""

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar

import httpx
from fastapi import HTTPException, status
from pydantic import ValidationError

from app.core.config import settings
from app.core.http_client import request_with_retry
from app.models.base import Document


logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Document)


class RealtimeDatabase:
    """
    REST client bound to one database URL.

    Args:
        base_url: Database URL (defaults to settings).
        auth: Database secret or OAuth token sent as ``?auth=``.
    """

    def __init__(self, base_url: Optional[str] = None, auth: Optional[str] = None):
        self.base_url = (base_url or settings.FIREBASE_DATABASE_URL).rstrip("/")
        self.auth = settings.FIREBASE_DB_AUTH if auth is None else auth

    def url_for(self, path: str) -> str:
        """Build the REST URL for a database path."""
        return f"{self.base_url}/{path.strip('/')}.json"

    def _params(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        params = dict(extra or {})
        if self.auth:
            params["auth"] = self.auth
        return params

    async def _request(
        self,
        method: str,
        path: str,
        data: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        kwargs: Dict[str, Any] = {"params": self._params(params)}
        if data is not None:
            kwargs["json"] = data

        try:
            response = await request_with_retry(method, self.url_for(path), **kwargs)
        except httpx.HTTPError as e:
            logger.error("Realtime database %s %s failed: %s", method, path, e)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Realtime database unavailable",
            )

        if response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
            logger.error("Realtime database denied %s %s", method, path)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permission denied by realtime database rules",
            )

        if response.status_code >= 300:
            logger.error(
                "Realtime database %s %s returned %d: %s",
                method, path, response.status_code, response.text,
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Realtime database error: {response.status_code}",
            )

        return response.json()

    async def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Read a node; None when it does not exist."""
        return await self._request("GET", path, params=params)

    async def get_children_where(self, path: str, child: str, value: Any) -> Dict[str, Any]:
        """Read the children of ``path`` whose ``child`` equals ``value``."""
        data = await self.get(
            path,
            params={"orderBy": json.dumps(child), "equalTo": json.dumps(value)},
        )
        return data if isinstance(data, dict) else {}

    async def put(self, path: str, data: Any) -> Any:
        """Replace a node."""
        return await self._request("PUT", path, data=data)

    async def patch(self, path: str, data: Dict[str, Any]) -> Any:
        """Update the given keys of a node (last write wins)."""
        return await self._request("PATCH", path, data=data)

    async def push(self, path: str, data: Any) -> str:
        """Append a child with a generated key and return the key."""
        result = await self._request("POST", path, data=data)
        return result["name"]

    async def delete(self, path: str) -> None:
        """Remove a node."""
        await self._request("DELETE", path)


_database: Optional[RealtimeDatabase] = None


def get_database() -> RealtimeDatabase:
    """Get or create the shared database client."""
    global _database
    if _database is None:
        _database = RealtimeDatabase()
    return _database


def iter_children(data: Any) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """
    Yield ``(key, child)`` pairs of a collection node.

    Collections with numeric keys come back as lists with holes.
    """
    if isinstance(data, dict):
        items = data.items()
    elif isinstance(data, list):
        items = ((str(index), child) for index, child in enumerate(data))
    else:
        return
    for key, child in items:
        if isinstance(child, dict):
            yield str(key), child


def parse_documents(data: Any, model: Type[D]) -> List[D]:
    """Validate every child of a collection, skipping malformed ones."""
    documents = []
    for key, child in iter_children(data):
        try:
            documents.append(model.model_validate({**child, "id": key}))
        except ValidationError as e:
            logger.warning("Skipping malformed %s %s: %s", model.__name__, key, e)
    return documents
