"""structlog setup shared by the app factory and the CLI entrypoint."""

import logging

import structlog


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog processors for the process.

    Args:
        level: Minimum log level name (e.g. ``INFO``, ``DEBUG``).
        json_output: Render events as JSON lines instead of console output.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )
