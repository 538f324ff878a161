"""Files module - user guide validation, resolution and download routes."""

from .exceptions import (
    FileServiceError,
    FilenameValidationError,
    InvalidEncodingError,
    ControlCharacterError,
    InvalidCharactersError,
    FilenameTooLongError,
    DangerousPatternError,
    InvalidAfterSanitizationError,
    PathResolutionError,
    ExtensionNotAllowedError,
    HiddenFileError,
    FileNotFoundInBaseError,
    AccessDeniedError,
)
from .validator import validate_filename
from .resolver import ALLOWED_EXTENSIONS, resolve_guide_path, is_contained
from .service import FileService, UserGuideService, build_user_guide_service
from .router import router


__all__ = [
    # Exceptions
    "FileServiceError",
    "FilenameValidationError",
    "InvalidEncodingError",
    "ControlCharacterError",
    "InvalidCharactersError",
    "FilenameTooLongError",
    "DangerousPatternError",
    "InvalidAfterSanitizationError",
    "PathResolutionError",
    "ExtensionNotAllowedError",
    "HiddenFileError",
    "FileNotFoundInBaseError",
    "AccessDeniedError",
    # Pipeline
    "validate_filename",
    "ALLOWED_EXTENSIONS",
    "resolve_guide_path",
    "is_contained",
    # Service
    "FileService",
    "UserGuideService",
    "build_user_guide_service",
    # Router
    "router",
]
