"""Rejection reasons raised by the filename validator and path resolver."""

from guide_server.exceptions import GuideServerError


class FileServiceError(GuideServerError):
    """Base exception for user guide pipeline rejections."""
    pass


class FilenameValidationError(FileServiceError):
    """Raised when a raw filename fails validation."""
    pass


class InvalidEncodingError(FilenameValidationError):
    """Raised when percent-decoding fails."""

    def __init__(self, detail: str = "invalid filename encoding"):
        super().__init__(message=detail, code="INVALID_ENCODING")


class ControlCharacterError(FilenameValidationError):
    """Raised when the decoded filename holds a NUL byte or control character."""

    def __init__(self, detail: str = "control character detected in filename"):
        super().__init__(message=detail, code="CONTROL_CHARACTER")


class InvalidCharactersError(FilenameValidationError):
    """Raised when the filename has characters outside ``[A-Za-z0-9._-]``."""

    def __init__(self):
        super().__init__(message="filename contains invalid characters", code="INVALID_CHARACTERS")


class FilenameTooLongError(FilenameValidationError):
    """Raised when the filename exceeds the maximum length.

    Attributes:
        length: Actual length of the decoded filename.
        max_length: Maximum allowed length.
    """

    def __init__(self, length: int, max_length: int):
        super().__init__(
            message=f"filename too long ({length} > {max_length})",
            code="TOO_LONG"
        )
        self.length = length
        self.max_length = max_length


class DangerousPatternError(FilenameValidationError):
    """Raised when the filename contains a blocked substring.

    Attributes:
        pattern: The blocked substring that matched.
    """

    def __init__(self, pattern: str):
        super().__init__(
            message=f"dangerous pattern detected in filename: {pattern}",
            code="DANGEROUS_PATTERN"
        )
        self.pattern = pattern


class InvalidAfterSanitizationError(FilenameValidationError):
    """Raised when base-name extraction leaves nothing usable."""

    def __init__(self):
        super().__init__(message="invalid filename after sanitization", code="INVALID_AFTER_SANITIZATION")


class PathResolutionError(FileServiceError):
    """Raised when a sanitized filename cannot be resolved to a servable file."""
    pass


class ExtensionNotAllowedError(PathResolutionError):
    """Raised when the file extension is not on the allow-list.

    Attributes:
        extension: The lowercased extension that was rejected.
    """

    def __init__(self, extension: str):
        super().__init__(
            message=f"file type not allowed: {extension}",
            code="EXTENSION_NOT_ALLOWED"
        )
        self.extension = extension


class HiddenFileError(PathResolutionError):
    """Raised for dotfiles without an extension."""

    def __init__(self):
        super().__init__(message="hidden files not allowed", code="HIDDEN_FILE")


class FileNotFoundInBaseError(PathResolutionError):
    """Raised when the candidate path is missing or not a regular file."""

    def __init__(self, filename: str):
        super().__init__(message=f"file not found: {filename}", code="NOT_FOUND")
        self.filename = filename


class AccessDeniedError(PathResolutionError):
    """Raised when the canonical path escapes the base directory."""

    def __init__(self, filename: str):
        super().__init__(
            message=f"file access denied: {filename} resolves outside the base directory",
            code="ACCESS_DENIED"
        )
        self.filename = filename
