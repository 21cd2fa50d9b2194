"""
Monitoring and observability module for the SkillSnap backend.

This package provides:
- Structured logging with PII sanitization (``app.monitoring.logging``)
- Prometheus metrics collection (``app.monitoring.prometheus``)
- Database and cache health checks (``app.monitoring.health``)

Only the logging helpers are re-exported here; import metrics and health
from their modules so that importing a logger never pulls in the database.

Usage
-----
>>> from app.monitoring import get_logger
>>> logger = get_logger(__name__)
"""

from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]
