"""Structured logging configuration using structlog.

JSON lines in production, coloured console output elsewhere. Standard
library loggers (uvicorn, fastapi, python-multipart) are routed through the
same processor chain so every line carries the request id bound by the
tracing middleware.

C-CDA documents carry patient data: document text never reaches a log
line, only its length.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "ccda-validation"

# Event keys that may hold raw document text
DOCUMENT_TEXT_KEYS = ("ccda_file_contents", "document_text", "text")

QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "multipart": logging.WARNING,
}


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp the service name on every event."""
    event_dict.setdefault("app", SERVICE_NAME)
    return event_dict


def mask_document_text(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace document text fields with their length."""
    for key in DOCUMENT_TEXT_KEYS:
        value = event_dict.get(key)
        if isinstance(value, (str, bytes)):
            event_dict[key] = f"<{len(value)} chars>"
    return event_dict


def _renderer(production: bool) -> Processor:
    if production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    stream: Optional[object] = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        environment: "production" selects the JSON renderer
        stream: Output stream (defaults to stdout)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    production = environment.lower() == "production"

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context,
        mask_document_text,
    ]
    if production:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(production),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
    )
