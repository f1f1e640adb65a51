"""
Newsletter Service Unit Tests
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from app.services import newsletter_service


class TestSubscribe:
    """Tests for newsletter signups."""

    @pytest.mark.asyncio
    async def test_new_address_is_stored(self, mock_db):
        response = await newsletter_service.subscribe(" Reader@Example.com ", "website_footer", mock_db)

        assert response.id == "-Nnew"
        assert response.email == "reader@example.com"
        path, document = mock_db.push.call_args.args
        assert path == "newsletter_subscribers"
        assert document["email"] == "reader@example.com"
        assert document["status"] == "active"
        assert document["source"] == "website_footer"
        assert document["subscribedAt"].endswith("Z")

    @pytest.mark.asyncio
    async def test_duplicate_address_is_409(self, mock_db):
        mock_db.get_children_where = AsyncMock(return_value={"-N1": {"email": "reader@example.com"}})

        with pytest.raises(HTTPException) as exc_info:
            await newsletter_service.subscribe("reader@example.com", "website_footer", mock_db)

        assert exc_info.value.status_code == 409
        mock_db.push.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_check_uses_normalized_address(self, mock_db):
        await newsletter_service.subscribe("READER@example.com", "landing", mock_db)

        mock_db.get_children_where.assert_called_once_with(
            "newsletter_subscribers", "email", "reader@example.com",
        )
