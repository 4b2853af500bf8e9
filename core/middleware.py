"""
Core middleware for request safety and observability.

Components
----------
- `RequestSizeLimitMiddleware`:
    * Rejects large POST/PUT/PATCH bodies with a pre-rendered 413 JSON response
      before any view parses them (resource forms included).
    * Relies on `Content-Length`; a missing or garbled header is let through.
    * Limit comes from `MAX_REQUEST_BYTES` (default 2,000,000 bytes, 0 disables).

- `RequestIDLogMiddleware`:
    * Accepts a safe client `X-Request-ID` or generates one, exposes it as
      `request.request_id` and echoes it on the response.
    * Binds the id to `core.logging.request_id_var` for the duration of the
      request so every log line (handler denials, writes) can be correlated.
    * Emits one structured line per request on `project_tracker.request`,
      including the final status (302 for post/redirect/get, 403 for denials).
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response

from .logging import request_id_var

logger = logging.getLogger("project_tracker.request")

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._\-]{1,200}$")
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _coerce_request_id(raw: str | None) -> str:
    """Keep a safe client-provided id, otherwise mint a compact uuid4 hex."""
    if raw and _SAFE_REQUEST_ID.match(raw):
        return raw
    return uuid.uuid4().hex


def _content_length(request: HttpRequest) -> Optional[int]:
    raw = request.META.get("CONTENT_LENGTH")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class RequestSizeLimitMiddleware:
    """Answer 413 for bodies larger than `MAX_REQUEST_BYTES`."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        # Read per request so override_settings() applies in tests.
        max_bytes = int(getattr(settings, "MAX_REQUEST_BYTES", 2_000_000))
        if max_bytes > 0 and request.method.upper() in _BODY_METHODS:
            length = _content_length(request)
            if length is not None and length > max_bytes:
                return self._too_large(max_bytes)
        return self.get_response(request)

    @staticmethod
    def _too_large(max_bytes: int) -> Response:
        resp = Response(
            {
                "detail": f"Request entity too large. Max {max_bytes} bytes.",
                "code": "request_too_large",
                "max_bytes": max_bytes,
            },
            status=413,
        )
        # No view negotiated a renderer for us; render JSON up front.
        resp.accepted_renderer = JSONRenderer()
        resp.accepted_media_type = "application/json"
        resp.renderer_context = {}
        resp.render()
        return resp


class RequestIDLogMiddleware:
    """Request id propagation plus one structured log line per request."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        rid = _coerce_request_id(request.headers.get("X-Request-ID"))
        request.request_id = rid
        token = request_id_var.set(rid)

        start = time.perf_counter()
        try:
            response = self.get_response(request)
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid

        # Only read the user when auth middleware already resolved it.
        user = getattr(request, "user", None)
        user_id = getattr(user, "pk", None) if getattr(user, "is_authenticated", False) else None

        logger.info(
            "request",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.path,
                "status": getattr(response, "status_code", 0),
                "user_id": user_id,
                "duration_ms": duration_ms,
            },
        )
        return response
