"""
Structured logging for the extraction service.

Events are snake_case names with key/value context, e.g.
    logger.warning("backend_inference_failed", backend="sklearn", error="...")

LOG_JSON=true renders one JSON object per line for log shippers; otherwise a
console renderer is used. Every event carries the service name.
"""

import logging
import sys
from typing import Optional

import structlog

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "numba")


def _level(log_level: str) -> int:
    return getattr(logging, log_level.upper(), logging.INFO)


def _add_service(service: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        return event_dict
    return processor


def setup_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    service: Optional[str] = None
) -> None:
    """Configure structlog; events below log_level are dropped before rendering"""
    level = _level(log_level)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if service:
        processors.append(_add_service(service))

    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=False,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
