"""FastAPI dependencies for bearer authentication."""

from typing import Annotated

from fastapi import Depends, Header, Request

from .exceptions import InvalidTokenError
from .models import Principal
from .verifiers import CredentialVerifier


async def get_token_from_header(authorization: Annotated[str | None, Header()] = None) -> str:
    """Extract the bearer token from the Authorization header.

    Args:
        authorization: Authorization header value (format: 'Bearer <token>').

    Returns:
        Token string.

    Raises:
        InvalidTokenError: If header is missing or malformed.
    """
    if not authorization:
        raise InvalidTokenError("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise InvalidTokenError("Invalid Authorization header format. Expected: 'Bearer <token>'")

    return parts[1]


async def get_credential_verifier(request: Request) -> CredentialVerifier:
    """Return the verifier installed on the application by ``create_app``."""
    return request.app.state.credential_verifier


async def get_current_principal(
    token: Annotated[str, Depends(get_token_from_header)],
    verifier: Annotated[CredentialVerifier, Depends(get_credential_verifier)],
) -> Principal:
    """Verify the bearer token and return the authenticated principal.

    Raises:
        InvalidTokenError: If the verifier rejects the token.
        ExpiredTokenError: If the token has expired.
    """
    return verifier.verify(token)
