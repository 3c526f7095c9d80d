"""
Structured logging for docs-inline.

Manifesto:
    Every run should leave a readable trail: which documents were touched,
    which sample files could not be fetched. Logging goes through structlog
    so the same events render as colored console lines for people and as
    JSON for CI log collectors.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None)
              │
              ▼
        structlog processor chain:
          1. filter_by_level
          2. merge_contextvars      (markdown_path bound per document)
          3. add_log_level / add_logger_name
          4. TimeStamper (iso, UTC)
          5. JSONRenderer or ConsoleRenderer
              │
              ▼
        stdlib logging ──► stderr

Examples:
    >>> from docs_inline.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("document_rewritten", path="docs/index.md")

Tags:
    logging, structlog, observability, docs-inline
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        add_timestamp: Include ISO timestamp in logs
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if add_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )
    logging.getLogger("docs_inline").setLevel(getattr(logging, level.upper()))
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(markdown_path="docs/index.md"):
            logger.info("reference_resolved")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args) -> None:
        structlog.contextvars.unbind_contextvars(*self._context.keys())


__all__ = [
    "configure_logging",
    "get_logger",
    "LogContext",
]
