from pathlib import Path
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse

from guide_server.auth.dependencies import get_current_principal
from guide_server.auth.models import Principal
from guide_server.config import GuideConfig

from .exceptions import FileServiceError
from .media import content_disposition, get_content_type
from .service import FileService, build_user_guide_service

logger = structlog.get_logger("files")

router = APIRouter(tags=["files"])

PUBLIC_GUIDE_NAME = "user-guide.pdf"
NOT_AVAILABLE = "User guide not available"


def get_guide_config(request: Request) -> GuideConfig:
    return request.app.state.guide_config


def get_file_service(config: Annotated[GuideConfig, Depends(get_guide_config)]) -> FileService:
    return build_user_guide_service(config)


def get_public_guide_path(request: Request) -> Path:
    return Path(request.app.state.settings.PUBLIC_GUIDE_FILE)


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.get("/public/download")
@router.get("/download")
async def public_download(
    request: Request,
    guide_path: Annotated[Path, Depends(get_public_guide_path)],
):
    """
    Download the public user guide.
    The location is operator-configured and trusted, so no filename validation runs.
    """
    if not guide_path.is_file():
        logger.warning("public_guide_missing", path=str(guide_path), client=_client(request))
        raise HTTPException(status_code=404, detail=NOT_AVAILABLE)

    return FileResponse(
        path=guide_path,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(PUBLIC_GUIDE_NAME)},
    )


@router.get("/protected/download")
@router.get("/download/userguide")
async def protected_download(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[FileService, Depends(get_file_service)],
):
    """
    Download the configured user guide.
    Requires a verified bearer token. Any pipeline rejection is reported as 404
    so clients cannot tell which check failed.
    """
    client = _client(request)
    logger.info("user_guide_requested", client=client, subject=principal.subject)

    try:
        file_path = service.download_user_guide()
    except FileServiceError as e:
        logger.warning("user_guide_download_failed", client=client, reason=e.code)
        raise HTTPException(status_code=404, detail=NOT_AVAILABLE)

    safe_filename = file_path.name
    logger.info("user_guide_served", client=client, filename=safe_filename)

    return FileResponse(
        path=file_path,
        media_type=get_content_type(safe_filename),
        headers={"Content-Disposition": content_disposition(safe_filename)},
    )
