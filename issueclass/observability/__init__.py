"""Observability: structlog logging and prometheus metrics."""

from issueclass.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
