from contextlib import asynccontextmanager
from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .auth.exceptions import AuthenticationError
from .auth.verifiers import build_credential_verifier
from .config import GuideConfig, Settings, get_settings, load_guide_config
from .exceptions import ConfigurationError, GuideServerError
from .files.router import router as files_router
from .logging_config import configure_logging
from .middleware import SecurityHeadersMiddleware

logger = structlog.get_logger("main")

ENDPOINTS = (
    "GET /public/download - Download the public user guide",
    "GET /protected/download - Download the configured user guide (bearer token)",
    "GET /download/userguide - Alias of /protected/download",
    "GET /health - Health check",
)


def ensure_base_directory(base_dir: Path) -> None:
    """Create the user guide directory if needed.

    Raises:
        ConfigurationError: If the path is not a directory or cannot be created.
    """
    if base_dir.exists():
        if not base_dir.is_dir():
            raise ConfigurationError(f"User guide path is not a directory: {base_dir}")
        return

    try:
        base_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Failed to create userguides directory {base_dir}: {e}") from e
    logger.info("userguide_directory_created", path=str(base_dir))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the base directory must exist before any download is served
    config: GuideConfig = app.state.guide_config
    ensure_base_directory(config.userguide_path)

    logger.info(
        "server_starting",
        port=config.server_port,
        userguide_path=str(config.userguide_path),
        userguide_filename=config.userguide_filename,
        endpoints=list(ENDPOINTS),
    )

    yield

    logger.info("server_stopped")


def create_app(settings: Settings | None = None, guide_config: GuideConfig | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Environment settings (defaults to ``get_settings()``).
        guide_config: Properties-file configuration (defaults to loading
            ``settings.PROPERTIES_FILE``).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    if guide_config is None:
        guide_config = load_guide_config(settings.PROPERTIES_FILE)

    app = FastAPI(
        title=settings.APP_NAME,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.settings = settings
    app.state.guide_config = guide_config
    app.state.credential_verifier = build_credential_verifier(settings)

    app.add_middleware(SecurityHeadersMiddleware)

    @app.exception_handler(AuthenticationError)
    async def authentication_exception_handler(request: Request, exc: AuthenticationError):
        logger.warning("authentication_failed", path=request.url.path, reason=exc.message)
        return JSONResponse(
            status_code=401,
            content={"error": "UNAUTHORIZED", "message": "Unauthorized"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(GuideServerError)
    async def guide_server_exception_handler(request: Request, exc: GuideServerError):
        logger.error("request_failed", path=request.url.path, code=exc.code, reason=exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": exc.code, "message": "Internal server error"},
        )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    app.include_router(files_router)

    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount(settings.STATIC_URL_PREFIX, StaticFiles(directory=static_dir), name="static")
    else:
        logger.info("static_directory_missing", path=str(static_dir))

    return app


def main() -> None:
    settings = get_settings()

    try:
        application = create_app(settings)
    except (ConfigurationError, ValueError) as e:
        logger.critical("startup_failed", error=str(e))
        raise SystemExit(1) from e

    uvicorn.run(
        application,
        host=settings.HOST,
        port=application.state.guide_config.server_port,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
