"""Structured logging configuration using structlog.

JSON lines in production, coloured console output everywhere else. Every
event passes through redact_credentials so provider keys never reach a sink.
"""

import logging
import re
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_LOG_NAME = "menu-gateway"

REDACTED = "[REDACTED]"
# Matched against whole key names, optionally prefixed (groq_api_key, access_token)
_SECRET_KEY_PATTERN = re.compile(
    r"(?:\w+_)?(?:api[_-]?key|authorization|credentials?|secret|token)", re.IGNORECASE
)

# Loggers that would otherwise print every outbound provider request line
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["app"] = APP_LOG_NAME
    return event_dict


def redact_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask values bound under credential-looking keys (api_key, authorization, ...)."""
    for key in list(event_dict):
        if key != "event" and _SECRET_KEY_PATTERN.fullmatch(key):
            event_dict[key] = REDACTED
    return event_dict


def _shared_processors(is_production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        redact_credentials,
    ]
    if is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog on top of the standard library logging module.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment name (development, production)

    Safe to call more than once (create_app calls it per application): the
    root handler is replaced, not stacked.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"
    processors = _shared_processors(is_production)

    renderer: Processor
    if is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
