"""
Logging helpers for request-scoped correlation.

- `request_id_var` holds the current request id for the lifetime of a request
  (set by `core.middleware.RequestIDLogMiddleware`, read by resource handlers
  when they build their `RequestContext`).
- `RequestIDFilter` copies it onto every `LogRecord` so formatters using
  `%(request_id)s` work for any logger, including ones that fire outside an
  HTTP request (management commands, shell). A dash `"-"` stands in when no
  request is active.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    """Ensure `%(request_id)s` is always present on log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Middleware passes request_id via `extra`; everyone else gets the contextvar.
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True
