import logging
import sys

import structlog
from structlog.stdlib import BoundLogger

from filespyder.settings import Settings

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def get_log_level(level: str | int | None = None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = Settings().log_level
    return LOG_LEVELS.get(str(level).lower(), logging.INFO)


def configure_logging(
    level: str | int | None = None, log_json: bool | None = None
) -> None:
    """
    Configure structlog on top of the stdlib logging machinery. Log lines go
    to `stderr` so that search results on `stdout` stay machine readable.

    Args:
        level: Log level name or number, defaults to `FILESPYDER_LOG_LEVEL`
        log_json: Render json lines, defaults to `FILESPYDER_LOG_JSON`
    """
    settings = Settings()
    log_level = get_log_level(level or settings.log_level)
    if log_json is None:
        log_json = settings.log_json

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str, *args, **kwargs) -> BoundLogger:
    return structlog.get_logger(name, *args, **kwargs)
