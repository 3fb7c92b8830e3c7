"""Logging configuration module."""

from logging import (
    CRITICAL,
    DEBUG,
    ERROR,
    INFO,
    WARNING,
    Handler,
    StreamHandler,
    getLogger,
)
from typing import cast

import structlog
from structlog import dev, processors, stdlib
from structlog.processors import JSONRenderer, TimeStamper, dict_tracebacks
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from geotrack.core.config import settings

# Names accepted by LOG_LEVEL
LOG_LEVELS: dict[str, int] = {
    "debug": DEBUG,
    "info": INFO,
    "warning": WARNING,
    "error": ERROR,
    "critical": CRITICAL,
}


def resolve_level(level: str | None) -> int:
    """Map a level name to a logging level, defaulting to INFO."""
    if not level:
        return INFO
    return LOG_LEVELS.get(level.lower(), INFO)


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        stdlib.add_logger_name,
        stdlib.add_log_level,
        stdlib.PositionalArgumentsFormatter(),
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f"),
        dict_tracebacks,
    ]


def configure_logging(testing: bool = False, level: str | None = None) -> None:
    """Configure structured logging for the package.

    Args:
        testing: Whether the package is running in test mode
        level: Optional level name overriding ``settings.LOG_LEVEL``
    """
    log_level = resolve_level(level or settings.LOG_LEVEL)
    json_logs = settings.JSON_LOGS and not testing
    shared = _shared_processors()

    structlog.configure(
        processors=[
            stdlib.filter_by_level,
            *shared,
            processors.format_exc_info,
            JSONRenderer() if json_logs else processors.KeyValueRenderer(),
        ],
        context_class=dict,
        logger_factory=stdlib.LoggerFactory(),
        wrapper_class=stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler: Handler = StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(
        stdlib.ProcessorFormatter(
            processor=JSONRenderer() if json_logs else dev.ConsoleRenderer(),
            foreign_pre_chain=shared,
        )
    )

    # geotrack records go to its own handler only, never twice via root
    for logger in (getLogger(), getLogger("geotrack")):
        logger.setLevel(log_level)
        logger.handlers = [handler]
    getLogger("geotrack").propagate = False


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name

    Returns:
        A structured logger instance.
    """
    if name:
        return cast(BoundLogger, structlog.get_logger(name))
    return cast(BoundLogger, structlog.get_logger())


def get_request_logger(request_id: str | None = None) -> BoundLogger:
    """Get a logger with geocoding request context.

    Args:
        request_id: Optional request ID to bind to logger

    Returns:
        Configured logger with request context
    """
    logger: BoundLogger = get_logger()
    if request_id:
        logger = logger.bind(request_id=request_id)
    return logger
