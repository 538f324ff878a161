"""User guide download service: validation and resolution of the configured file."""

from pathlib import Path
from typing import Protocol

import structlog

from guide_server.config import GuideConfig

from .exceptions import FileServiceError
from .resolver import resolve_guide_path
from .validator import validate_filename

logger = structlog.get_logger("files")


class FileService(Protocol):
    """Contract for resolving the user guide to a servable path."""

    def download_user_guide(self) -> Path:
        ...


class UserGuideService:
    """Resolves the configured user guide through the validation pipeline.

    Attributes:
        base_dir: Directory the guide must live under.
        filename: Configured (untrusted) filename of the guide.
    """

    def __init__(self, base_dir: str | Path, filename: str) -> None:
        self.base_dir = Path(base_dir)
        self.filename = filename

    def download_user_guide(self) -> Path:
        """Validate the configured filename and resolve it under the base directory.

        Returns:
            Canonical absolute path to the user guide.

        Raises:
            FileServiceError: Subclass naming the check that rejected the file.
        """
        try:
            sanitized = validate_filename(self.filename)
            return resolve_guide_path(sanitized, self.base_dir)
        except FileServiceError as e:
            logger.warning(
                "user_guide_rejected",
                reason=e.code,
                detail=e.message,
                filename=self.filename,
                base_dir=str(self.base_dir),
            )
            raise


def build_user_guide_service(config: GuideConfig) -> UserGuideService:
    return UserGuideService(base_dir=config.userguide_path, filename=config.userguide_filename)
