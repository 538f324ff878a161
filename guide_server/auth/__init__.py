"""Auth module initialization."""

from .exceptions import (
    AuthenticationError,
    InvalidTokenError,
    ExpiredTokenError,
)
from .models import Principal
from .verifiers import (
    CredentialVerifier,
    StaticTokenVerifier,
    JWTVerifier,
    build_credential_verifier,
)
from .dependencies import get_token_from_header, get_credential_verifier, get_current_principal

__all__ = [
    # Exceptions
    "AuthenticationError",
    "InvalidTokenError",
    "ExpiredTokenError",
    # Models
    "Principal",
    # Verifiers
    "CredentialVerifier",
    "StaticTokenVerifier",
    "JWTVerifier",
    "build_credential_verifier",
    # Dependencies
    "get_token_from_header",
    "get_credential_verifier",
    "get_current_principal",
]
