"""Base exceptions for the user guide server."""


class GuideServerError(Exception):
    """Base exception for all user guide server errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ConfigurationError(GuideServerError):
    """Raised when startup configuration is unusable.

    This is the only fatal error class: it aborts process startup.
    """

    def __init__(self, message: str):
        super().__init__(message=message, code="CONFIGURATION_ERROR")
