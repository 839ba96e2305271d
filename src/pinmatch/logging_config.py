"""Structured logging configuration."""

import logging
from typing import Union

import structlog


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_logs: bool = False,
) -> None:
    """Configure structlog processors and the stdlib root handler.

    Library code only calls ``structlog.get_logger``; applications embedding
    the engine call this once at startup.

    Args:
        level: Minimum log level (name or number)
        json_logs: Render JSON lines instead of console key-value output
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        cache_logger_on_first_use=True,
    )
