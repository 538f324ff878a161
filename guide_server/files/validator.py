"""Filename validation for untrusted user guide names.

The input is decoded exactly once, then checked against a character
allow-list, a length cap, a blocklist of dangerous substrings and finally
reduced to its base name. Every step raises a ``FilenameValidationError``
subclass; the first failure wins.
"""

import os
import re
from urllib.parse import unquote_plus

from .exceptions import (
    InvalidEncodingError,
    ControlCharacterError,
    InvalidCharactersError,
    FilenameTooLongError,
    DangerousPatternError,
    InvalidAfterSanitizationError,
)


MAX_FILENAME_LENGTH = 255
FILENAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")
DANGEROUS_PATTERNS = ("..", "~/", "/", "\\", ":", "*", "?", '"', "<", ">", "|")
ALLOWED_CONTROL_CHARACTERS = frozenset({"\t", "\n", "\r"})

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_filename(raw: str) -> str:
    """Percent-decode a query-escaped filename once.

    Args:
        raw: Untrusted filename, possibly percent-encoded.

    Returns:
        The decoded string.

    Raises:
        InvalidEncodingError: On a truncated or non-hex escape, or escapes
            that do not form valid UTF-8.
    """
    if _MALFORMED_ESCAPE.search(raw):
        raise InvalidEncodingError()
    try:
        return unquote_plus(raw, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError() from e


def check_control_characters(name: str) -> None:
    if "\x00" in name:
        raise ControlCharacterError("null byte detected in filename")

    for char in name:
        if ord(char) < 32 and char not in ALLOWED_CONTROL_CHARACTERS:
            raise ControlCharacterError()


def check_character_class(name: str) -> None:
    if not FILENAME_PATTERN.fullmatch(name):
        raise InvalidCharactersError()


def check_length(name: str) -> None:
    if len(name) > MAX_FILENAME_LENGTH:
        raise FilenameTooLongError(len(name), MAX_FILENAME_LENGTH)


def check_dangerous_patterns(name: str) -> None:
    """Reject names containing any blocked substring, case-insensitively.

    Overlaps with the character allow-list on purpose: relaxing the
    allow-list must not reopen traversal.
    """
    lowered = name.lower()
    for pattern in DANGEROUS_PATTERNS:
        if pattern in lowered:
            raise DangerousPatternError(pattern)


def extract_base_name(name: str) -> str:
    base = os.path.basename(name)
    if base in ("", ".", ".."):
        raise InvalidAfterSanitizationError()
    return base


def validate_filename(raw: str) -> str:
    """Validate an untrusted filename and return the sanitized base name.

    Args:
        raw: Filename from configuration or a request.

    Returns:
        Sanitized filename safe to join with the base directory.

    Raises:
        FilenameValidationError: Subclass naming the first failed check.
    """
    decoded = decode_filename(raw)
    check_control_characters(decoded)
    check_character_class(decoded)
    check_length(decoded)
    check_dangerous_patterns(decoded)
    return extract_base_name(decoded)
