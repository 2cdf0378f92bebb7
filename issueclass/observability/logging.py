"""Structured logging configuration using structlog.

Run-scoped fields (config id, window bounds) are bound through
structlog.contextvars so every line emitted during a run carries them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


def setup_logging(level: str = "info", json_output: bool = True) -> None:
    """Configure structlog; JSON lines to stderr unless *json_output* is False."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]


@contextmanager
def run_context(config_id: int, window_start: int, window_end: int) -> Iterator[None]:
    """Bind run identifiers to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(
        config_id=config_id,
        window_start=window_start,
        window_end=window_end,
    ):
        yield
