"""Custom exceptions for bearer credential verification."""

from guide_server.exceptions import GuideServerError


class AuthenticationError(GuideServerError):
    """Raised when authentication fails."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when the bearer credential is missing, malformed or rejected."""
    pass


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT credential has expired."""
    pass
