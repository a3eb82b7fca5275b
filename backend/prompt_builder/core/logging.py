"""Structured logging setup for the prompt builder backend.

structlog is bridged onto stdlib logging so uvicorn, httpx and the provider
SDKs render through the same formatter. JSON in production, colored console
output when debug is on. Every entry is stamped with the service name and the
configured LLM provider, plus the request's correlation_id when one is active.
"""

import logging
import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

from prompt_builder.core.config import SERVICE_NAME

# SDK request logs would echo prompt text at DEBUG
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "anthropic", "openai")


def add_correlation_id(logger, method, event_dict):
    """Copy the active asgi-correlation-id value into the event dict."""
    cid = correlation_id.get(None)
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def service_context(llm_provider: str | None = None):
    """Build a processor that stamps ``service`` and ``llm_provider`` on each entry.

    Values already bound by the caller are left untouched.
    """

    def add_service_context(logger, method, event_dict):
        event_dict.setdefault("service", SERVICE_NAME)
        if llm_provider:
            event_dict.setdefault("llm_provider", llm_provider)
        return event_dict

    return add_service_context


def configure_structlog(
    log_level: str = "INFO",
    json_logs: bool = True,
    llm_provider: str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Must run before the first ``structlog.get_logger()`` call is used, because
    the processor chain is cached on first use.

    Args:
        log_level: Root log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_logs: True for JSON lines, False for ConsoleRenderer
        llm_provider: Selected provider, stamped on every entry when given
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        service_context(llm_provider),
        add_correlation_id,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["default"], "level": log_level},
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
    })

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
