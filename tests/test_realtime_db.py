"""
Realtime Database Client Unit Tests

Tests for URL building, error mapping and collection parsing.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import HTTPException

from app.models.course import Category
from app.services.realtime_db import RealtimeDatabase, iter_children, parse_documents


BASE_URL = "https://example-rtdb.firebaseio.com"


@pytest.fixture
def database() -> RealtimeDatabase:
    return RealtimeDatabase(base_url=BASE_URL + "/", auth="")


class TestRealtimeDatabase:
    """Tests for the REST client."""

    def test_url_for(self, database):
        assert database.url_for("/courses/") == f"{BASE_URL}/courses.json"
        assert database.url_for("userAnalytics/u1") == f"{BASE_URL}/userAnalytics/u1.json"

    def test_auth_param_added_when_configured(self):
        database = RealtimeDatabase(base_url=BASE_URL, auth="secret")

        assert database._params({"orderBy": '"userId"'}) == {"orderBy": '"userId"', "auth": "secret"}

    @pytest.mark.asyncio
    async def test_get_returns_json(self, database, mock_httpx_response):
        response = mock_httpx_response(json_data={"c1": {"title": "HTML"}})

        with patch("app.services.realtime_db.request_with_retry", AsyncMock(return_value=response)) as request:
            data = await database.get("courses")

        assert data == {"c1": {"title": "HTML"}}
        request.assert_called_once_with("GET", f"{BASE_URL}/courses.json", params={})

    @pytest.mark.asyncio
    async def test_get_children_where_quotes_query_values(self, database, mock_httpx_response):
        response = mock_httpx_response(json_data=None)

        with patch("app.services.realtime_db.request_with_retry", AsyncMock(return_value=response)) as request:
            data = await database.get_children_where("enrollments", "userId", "u1")

        assert data == {}
        assert request.call_args.kwargs["params"] == {"orderBy": '"userId"', "equalTo": '"u1"'}

    @pytest.mark.asyncio
    async def test_push_returns_generated_key(self, database, mock_httpx_response):
        response = mock_httpx_response(json_data={"name": "-Nabc"})

        with patch("app.services.realtime_db.request_with_retry", AsyncMock(return_value=response)) as request:
            key = await database.push("enrollments", {"userId": "u1"})

        assert key == "-Nabc"
        request.assert_called_once_with(
            "POST", f"{BASE_URL}/enrollments.json", params={}, json={"userId": "u1"},
        )

    @pytest.mark.asyncio
    async def test_permission_denied_maps_to_403(self, database, mock_httpx_response):
        response = mock_httpx_response(status_code=401, json_data={"error": "Permission denied"})

        with patch("app.services.realtime_db.request_with_retry", AsyncMock(return_value=response)):
            with pytest.raises(HTTPException) as exc_info:
                await database.get("users")

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_server_error_maps_to_502(self, database, mock_httpx_response):
        response = mock_httpx_response(status_code=500, text="boom")

        with patch("app.services.realtime_db.request_with_retry", AsyncMock(return_value=response)):
            with pytest.raises(HTTPException) as exc_info:
                await database.patch("userAnalytics/u1", {"a": 1})

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error_maps_to_502(self, database):
        failing = AsyncMock(side_effect=httpx.ConnectError("unreachable"))

        with patch("app.services.realtime_db.request_with_retry", failing):
            with pytest.raises(HTTPException) as exc_info:
                await database.delete("enrollments/e1")

        assert exc_info.value.status_code == 502


class TestCollectionParsing:
    """Tests for turning collection nodes into documents."""

    def test_iter_children_of_object(self):
        data = {"a": {"name": "A"}, "b": "not a document"}

        assert list(iter_children(data)) == [("a", {"name": "A"})]

    def test_iter_children_of_sparse_list(self):
        data = [None, {"name": "One"}, {"name": "Two"}]

        assert list(iter_children(data)) == [("1", {"name": "One"}), ("2", {"name": "Two"})]

    def test_iter_children_of_empty_node(self):
        assert list(iter_children(None)) == []
        assert list(iter_children("scalar")) == []

    def test_parse_documents_sets_ids(self):
        categories = parse_documents({"web": {"name": "Web"}}, Category)

        assert categories == [Category(id="web", name="Web")]

    def test_parse_documents_skips_malformed_children(self):
        from app.models.enrollment import Enrollment

        data = {
            "e1": {"userId": "u1", "courseId": "c1"},
            "e2": {"progress": 10},
        }

        enrollments = parse_documents(data, Enrollment)

        assert [e.id for e in enrollments] == ["e1"]
