"""Pluggable bearer credential verification.

The download pipeline only depends on the ``CredentialVerifier`` protocol.
``StaticTokenVerifier`` is a placeholder comparing against one configured
value; production deployments should use ``JWTVerifier`` or another real
implementation.
"""

import hmac
from typing import Protocol

from jose import JWTError, jwt

from guide_server.config import Settings

from .exceptions import InvalidTokenError, ExpiredTokenError
from .models import Principal


class CredentialVerifier(Protocol):
    """Verifies a bearer credential and returns the caller's identity."""

    def verify(self, credential: str) -> Principal:
        ...


class StaticTokenVerifier:
    """Accepts exactly one pre-shared token (placeholder scheme)."""

    def __init__(self, expected_token: str):
        if not expected_token:
            raise ValueError("Static bearer token must not be empty")
        self._expected = expected_token.encode("utf-8")

    def verify(self, credential: str) -> Principal:
        if not hmac.compare_digest(credential.encode("utf-8"), self._expected):
            raise InvalidTokenError("Bearer token does not match the configured token")
        return Principal(subject="static-token", scheme="static")


class JWTVerifier:
    """Verifies signed JWTs with python-jose.

    Attributes:
        algorithm: Signing algorithm accepted (never ``none``).
        issuer: Required ``iss`` claim, if set.
        audience: Required ``aud`` claim, if set.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", issuer: str = "", audience: str = ""):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        if algorithm.lower() == "none":
            raise ValueError("JWT algorithm 'none' is not allowed")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    def verify(self, credential: str) -> Principal:
        """Decode and validate a JWT.

        Args:
            credential: Encoded JWT (without the ``Bearer`` prefix).

        Returns:
            Principal whose subject is the ``sub`` claim.

        Raises:
            ExpiredTokenError: If the token has expired.
            InvalidTokenError: If the token is malformed, badly signed or lacks ``sub``.
        """
        try:
            payload = jwt.decode(
                credential,
                self._secret_key,
                algorithms=[self.algorithm],
                audience=self.audience or None,
                issuer=self.issuer or None,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_aud": bool(self.audience),
                    "verify_iss": bool(self.issuer),
                    "require_exp": True,
                    "require_aud": bool(self.audience),
                    "require_iss": bool(self.issuer),
                },
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError("JWT token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"Invalid JWT token: {str(e)}") from e

        if self.audience and "aud" not in payload:
            raise InvalidTokenError("JWT token missing required 'aud' claim")
        if self.issuer and "iss" not in payload:
            raise InvalidTokenError("JWT token missing required 'iss' claim")

        subject = payload.get("sub")
        if not subject:
            raise InvalidTokenError("JWT token missing required 'sub' claim")

        return Principal(subject=str(subject), scheme="jwt", claims=payload)


def build_credential_verifier(settings: Settings) -> CredentialVerifier:
    """Pick the verifier configured by ``AUTH_MODE``.

    Raises:
        ValueError: If the mode is unknown or its settings are incomplete.
    """
    mode = settings.AUTH_MODE.lower()
    if mode == "static":
        return StaticTokenVerifier(settings.AUTH_STATIC_TOKEN)
    if mode == "jwt":
        return JWTVerifier(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
        )
    raise ValueError(f"Unknown AUTH_MODE: {settings.AUTH_MODE!r}")
