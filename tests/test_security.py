"""
Security Unit Tests

Tests for Firebase ID token verification and certificate caching.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from jose import JWTError

from app.core import security
from app.core.config import settings


CERTS = {"kid-1": "-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n"}


class TestParseMaxAge:

    def test_reads_max_age(self):
        assert security.parse_max_age("public, max-age=19870, must-revalidate") == 19870

    def test_missing_max_age(self):
        assert security.parse_max_age("no-cache") is None
        assert security.parse_max_age("") is None


class TestFetchGoogleCertificates:
    """Tests for fetching and caching signing certificates."""

    @pytest.mark.asyncio
    async def test_certificates_are_cached(self, mock_httpx_response):
        response = mock_httpx_response(json_data=CERTS, headers={"cache-control": "max-age=600"})
        fetch = AsyncMock(return_value=response)

        with patch("app.core.security.get_with_retry", fetch):
            first = await security.fetch_google_certificates()
            second = await security.fetch_google_certificates()

        assert first == second == CERTS
        fetch.assert_called_once_with(security.GOOGLE_CERTS_URL)


class TestVerifyFirebaseIdToken:
    """Tests for token verification outcomes."""

    @pytest.mark.asyncio
    async def test_garbage_token_is_rejected(self):
        assert await security.verify_firebase_id_token("not-a-jwt") is None

    @pytest.mark.asyncio
    async def test_wrong_algorithm_is_rejected(self):
        with patch("app.core.security.jwt.get_unverified_header", return_value={"alg": "HS256", "kid": "kid-1"}):
            assert await security.verify_firebase_id_token("token") is None

    @pytest.mark.asyncio
    async def test_unknown_key_id_is_rejected(self):
        with patch("app.core.security.jwt.get_unverified_header", return_value={"alg": "RS256", "kid": "other"}), \
                patch("app.core.security.fetch_google_certificates", AsyncMock(return_value=CERTS)):
            assert await security.verify_firebase_id_token("token") is None

    @pytest.mark.asyncio
    async def test_certificate_fetch_failure_is_rejected(self):
        failing = AsyncMock(side_effect=httpx.ConnectError("offline"))

        with patch("app.core.security.jwt.get_unverified_header", return_value={"alg": "RS256", "kid": "kid-1"}), \
                patch("app.core.security.fetch_google_certificates", failing):
            assert await security.verify_firebase_id_token("token") is None

    @pytest.mark.asyncio
    async def test_invalid_signature_is_rejected(self):
        with patch("app.core.security.jwt.get_unverified_header", return_value={"alg": "RS256", "kid": "kid-1"}), \
                patch("app.core.security.fetch_google_certificates", AsyncMock(return_value=CERTS)), \
                patch("app.core.security.jwt.decode", side_effect=JWTError("Signature verification failed")):
            assert await security.verify_firebase_id_token("token") is None

    @pytest.mark.asyncio
    async def test_valid_token_returns_claims(self):
        claims = {"sub": "u1", "user_id": "u1", "aud": settings.FIREBASE_PROJECT_ID}

        with patch("app.core.security.jwt.get_unverified_header", return_value={"alg": "RS256", "kid": "kid-1"}), \
                patch("app.core.security.fetch_google_certificates", AsyncMock(return_value=CERTS)), \
                patch("app.core.security.jwt.decode", return_value=claims) as decode:
            assert await security.verify_firebase_id_token("token") == claims

        decode.assert_called_once_with(
            "token",
            CERTS["kid-1"],
            algorithms=["RS256"],
            audience=settings.FIREBASE_PROJECT_ID,
            issuer=settings.firebase_issuer,
        )

    @pytest.mark.asyncio
    async def test_token_without_subject_is_rejected(self):
        with patch("app.core.security.jwt.get_unverified_header", return_value={"alg": "RS256", "kid": "kid-1"}), \
                patch("app.core.security.fetch_google_certificates", AsyncMock(return_value=CERTS)), \
                patch("app.core.security.jwt.decode", return_value={"sub": ""}):
            assert await security.verify_firebase_id_token("token") is None
