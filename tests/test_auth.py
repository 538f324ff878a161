"""Unit tests for bearer credential verification."""

import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from guide_server.auth.dependencies import get_token_from_header, get_current_principal
from guide_server.auth.exceptions import InvalidTokenError, ExpiredTokenError
from guide_server.auth.verifiers import (
    JWTVerifier,
    StaticTokenVerifier,
    build_credential_verifier,
)
from guide_server.config import Settings


SECRET = "test-secret-key"
ISSUER = "https://issuer.example.com"
AUDIENCE = "guide-server"


def _token(secret: str = SECRET, **overrides) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "user123",
        "iss": ISSUER,
        "aud": AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=30)).timestamp()),
    }
    payload.update(overrides)
    payload = {key: value for key, value in payload.items() if value is not None}
    return jwt.encode(payload, secret, algorithm="HS256")


class TestStaticTokenVerifier:
    """Tests for the placeholder static token scheme."""

    def test_accepts_expected_token(self):
        principal = StaticTokenVerifier("valid-oauth-token").verify("valid-oauth-token")

        assert principal.subject == "static-token"
        assert principal.scheme == "static"

    @pytest.mark.parametrize("token", ["wrong", "", "valid-oauth-token ", "VALID-OAUTH-TOKEN"])
    def test_rejects_other_tokens(self, token):
        with pytest.raises(InvalidTokenError):
            StaticTokenVerifier("valid-oauth-token").verify(token)

    def test_empty_expected_token_refused(self):
        with pytest.raises(ValueError):
            StaticTokenVerifier("")


class TestJWTVerifier:
    """Tests for JWT verification with python-jose."""

    def _verifier(self) -> JWTVerifier:
        return JWTVerifier(SECRET, "HS256", issuer=ISSUER, audience=AUDIENCE)

    def test_valid_token(self):
        principal = self._verifier().verify(_token(email="user@example.com"))

        assert principal.subject == "user123"
        assert principal.scheme == "jwt"
        assert principal.claims["email"] == "user@example.com"

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = _token(exp=int(past.timestamp()), iat=int((past - timedelta(minutes=5)).timestamp()))

        with pytest.raises(ExpiredTokenError, match="expired"):
            self._verifier().verify(token)

    def test_invalid_signature(self):
        with pytest.raises(InvalidTokenError, match="Invalid JWT token"):
            self._verifier().verify(_token(secret="wrong_secret_key"))

    def test_malformed_token(self):
        with pytest.raises(InvalidTokenError, match="Invalid JWT token"):
            self._verifier().verify("not.a.valid.token")

    def test_wrong_audience(self):
        with pytest.raises(InvalidTokenError):
            self._verifier().verify(_token(aud="someone-else"))

    def test_wrong_issuer(self):
        with pytest.raises(InvalidTokenError):
            self._verifier().verify(_token(iss="https://evil.example.com"))

    def test_missing_audience(self):
        with pytest.raises(InvalidTokenError):
            self._verifier().verify(_token(aud=None))

    def test_missing_issuer(self):
        with pytest.raises(InvalidTokenError):
            self._verifier().verify(_token(iss=None))

    def test_audience_optional_when_not_configured(self):
        verifier = JWTVerifier(SECRET, "HS256")

        assert verifier.verify(_token(aud=None, iss=None)).subject == "user123"

    def test_missing_subject(self):
        with pytest.raises(InvalidTokenError, match="'sub'"):
            self._verifier().verify(_token(sub=None))

    def test_missing_expiry(self):
        with pytest.raises(InvalidTokenError):
            self._verifier().verify(_token(exp=None))

    def test_alg_none_refused(self):
        with pytest.raises(ValueError):
            JWTVerifier(SECRET, "none")


class TestBuildVerifier:

    def test_static_mode(self):
        verifier = build_credential_verifier(Settings(AUTH_MODE="static", AUTH_STATIC_TOKEN="abc"))

        assert isinstance(verifier, StaticTokenVerifier)
        assert verifier.verify("abc").subject == "static-token"

    def test_jwt_mode(self):
        settings = Settings(AUTH_MODE="JWT", JWT_SECRET_KEY=SECRET, JWT_ISSUER=ISSUER, JWT_AUDIENCE=AUDIENCE)

        verifier = build_credential_verifier(settings)

        assert isinstance(verifier, JWTVerifier)
        assert verifier.verify(_token()).subject == "user123"

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="AUTH_MODE"):
            build_credential_verifier(Settings(AUTH_MODE="kerberos"))


class TestDependencies:
    """Tests for the FastAPI auth dependencies called directly."""

    @pytest.mark.asyncio
    async def test_extracts_bearer_token(self):
        assert await get_token_from_header("Bearer abc123") == "abc123"
        assert await get_token_from_header("bearer abc123") == "abc123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "abc123", "Basic abc123", "Bearer", "Bearer a b"])
    async def test_rejects_bad_headers(self, header):
        with pytest.raises(InvalidTokenError):
            await get_token_from_header(header)

    @pytest.mark.asyncio
    async def test_current_principal_uses_verifier(self):
        verifier = StaticTokenVerifier("valid-oauth-token")

        principal = await get_current_principal("valid-oauth-token", verifier)

        assert principal.subject == "static-token"

        with pytest.raises(InvalidTokenError):
            await get_current_principal("nope", verifier)
