from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

from user_registry.config import Settings

_CONFIGURED = False


def service_context(app_name: str) -> Processor:
    """Stamp every event with the service name unless the caller set one."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def build_formatter(settings: Settings) -> tuple[list[Processor], logging.Formatter]:
    """Return the shared structlog pre-chain and the stdlib formatter rendering it.

    ``LOG_FORMAT=console`` swaps the JSON renderer for the human-readable one.
    """

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        service_context(settings.app_name),
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    return pre_chain, formatter


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib records (uvicorn included) to one stdout handler.

    No-op after the first call in a process.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    pre_chain, formatter = build_formatter(settings)
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    level = settings.log_level_number
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False
        logger.setLevel(level)

    _CONFIGURED = True
