"""
structlog setup.

The library itself only calls structlog.get_logger(); applications decide
how output looks by calling configure_structlog() once at startup (the
service-base CLI does so before generating files).
"""

from __future__ import annotations

import logging

import structlog


def configure_structlog(log_level: str = "INFO", renderer: str = "console") -> None:
    """
    Configure structlog for structured logging.

    renderer="json": JSON lines (machine-readable).
    renderer="console": colored, human-readable output.
    Unknown levels fall back to INFO.
    """
    final_renderer: structlog.types.Processor
    if renderer == "json":
        final_renderer = structlog.processors.JSONRenderer()
    else:
        final_renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            final_renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
