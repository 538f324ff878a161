"""Resolve a sanitized filename under the base directory and guard containment."""

import os
from pathlib import Path

from .exceptions import (
    ExtensionNotAllowedError,
    HiddenFileError,
    FileNotFoundInBaseError,
    AccessDeniedError,
)


ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt", ".md")


def file_extension(name: str) -> str:
    """Return the suffix from the final dot, or ``""`` if there is none.

    Unlike ``os.path.splitext``, a leading dot counts: ``.pdf`` has the
    extension ``.pdf``.
    """
    index = name.rfind(".")
    if index == -1:
        return ""
    return name[index:]


def is_allowed_extension(name: str) -> bool:
    return file_extension(name).lower() in ALLOWED_EXTENSIONS


def check_hidden_file(name: str) -> None:
    """Reject a dotfile whose whole name is the "extension", such as ``.pdf``."""
    if name.startswith(".") and not os.path.splitext(name)[1]:
        raise HiddenFileError()


def is_contained(candidate: str | Path, base_dir: str | Path) -> bool:
    """Check that the canonical candidate lies within the canonical base directory.

    Both paths are symlink-resolved before comparison, so a link inside the
    base directory that points elsewhere is not contained.

    Args:
        candidate: Path to check.
        base_dir: Directory the candidate must be inside.

    Returns:
        True if the candidate equals or is nested under the base directory.
    """
    real_base = os.path.realpath(base_dir)
    real_candidate = os.path.realpath(candidate)

    if real_candidate == real_base:
        return True

    prefix = real_base if real_base.endswith(os.sep) else real_base + os.sep
    return real_candidate.startswith(prefix)


def resolve_guide_path(sanitized: str, base_dir: str | Path) -> Path:
    """Turn a sanitized filename into a canonical path to a servable file.

    Args:
        sanitized: Output of ``validate_filename``.
        base_dir: Configured base directory.

    Returns:
        Canonical absolute path of the file.

    Raises:
        ExtensionNotAllowedError: Extension is not on the allow-list.
        HiddenFileError: Dotfile without an extension.
        FileNotFoundInBaseError: Missing, a directory, or a special file.
        AccessDeniedError: Canonical path escapes the base directory.
    """
    extension = file_extension(sanitized).lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ExtensionNotAllowedError(extension)

    check_hidden_file(sanitized)

    candidate = Path(base_dir) / sanitized

    # is_file() follows symlinks and is False for directories and special files
    if not candidate.is_file():
        raise FileNotFoundInBaseError(sanitized)

    if not is_contained(candidate, base_dir):
        raise AccessDeniedError(sanitized)

    return Path(os.path.realpath(candidate))
