"""Logging module with structured logging and request tracing."""

from notehub.core.logging.config import configure_logging
from notehub.core.logging.middleware import AccessLogMiddleware, RequestIdMiddleware


__all__ = [
    "AccessLogMiddleware",
    "RequestIdMiddleware",
    "configure_logging",
]
