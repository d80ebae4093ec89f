from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog


_CONFIGURED = False

# logrus level names, as accepted by LOG_LEVEL.
_LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
}


def parse_log_level(name: str | None, default: int = logging.INFO) -> int:
    """Map a level name to a stdlib level, falling back to ``default``."""

    if not name:
        return default
    return _LEVELS.get(name.strip().lower(), default)


def configure_logging(level: int = logging.INFO, stream: IO[str] | None = None, force: bool = False) -> None:
    """Configure structlog + stdlib logging for one-JSON-object-per-line output.

    Safe to call multiple times (no-op after first call unless ``force``).
    """

    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="time"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            # Let ProcessorFormatter render JSON for stdlib log records too.
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.EventRenamer("msg"),
            structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # Keep uvicorn's own loggers consistent with our handler.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False
        logger.setLevel(level)

    # httpx logs every outbound request at INFO.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    _CONFIGURED = True


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)
