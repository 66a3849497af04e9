"""
Structured logging configuration using structlog.

Rendering follows ``settings.log_json`` when it is set, otherwise JSON lines
at INFO and above and colored console output at DEBUG. Request context
(request id, endpoint, wallet address) is merged in from contextvars.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings


_NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def resolve_json_logs(level: int, json_logs: Optional[bool] = None) -> bool:
    """Explicit argument first, then ``settings.log_json``, then the level."""
    if json_logs is not None:
        return json_logs
    if settings.log_json is not None:
        return settings.log_json
    return level != logging.DEBUG


def setup_logging(log_level: Optional[str] = None, *, json_logs: Optional[bool] = None) -> None:
    """Route structlog and stdlib logging through a single stdout handler.

    Args:
        log_level: Override log level (default: settings.log_level)
        json_logs: Force JSON (True) or console (False) rendering
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if resolve_json_logs(level, json_logs):
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
