"""Content-type and header helpers for served documents."""

from .resolver import file_extension


CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".txt": "text/plain",
    ".md": "text/markdown",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def get_content_type(filename: str) -> str:
    return CONTENT_TYPES.get(file_extension(filename).lower(), DEFAULT_CONTENT_TYPE)


def escape_for_header(value: str) -> str:
    return value.replace('"', '\\"')


def content_disposition(filename: str) -> str:
    """Build an ``attachment`` Content-Disposition value for ``filename``."""
    return f'attachment; filename="{escape_for_header(filename)}"'
