from __future__ import annotations

"""
Rendered-response cache for resource handlers.

Overview
--------
- Stores the *rendered* bytes of a response (content, content type, status) in
  a Django cache backend, keyed by namespace, generation, representation, user,
  full request path and CSRF secret.
- A per-namespace **generation** counter is part of every key. Writes call
  `expire()`, which bumps the generation so every cached entry of the
  namespace becomes unreachable at once (no key scanning needed).
- Handlers consult the cache only after their guards and permission checks
  have passed; a hit skips loading and rendering, never authorization.

Notes
-----
- Responses rendered while flash messages are pending are not stored, so a
  one-off notice is never replayed to later requests.
- A timeout of 0 disables the cache entirely.
"""

import hashlib
import logging
from typing import Callable, Optional

from django.contrib import messages
from django.core.cache import caches
from django.http import HttpResponse

logger = logging.getLogger(__name__)


class ResponseCache:
    """Cache of rendered responses for one resource namespace."""

    def __init__(self, namespace: str, *, alias: str = "default", timeout: int = 300) -> None:
        self.namespace = namespace
        self.alias = alias
        self.timeout = int(timeout or 0)

    @property
    def enabled(self) -> bool:
        return self.timeout > 0

    @property
    def backend(self):
        return caches[self.alias]

    # ---- keys ------------------------------------------------------------

    def _generation_key(self) -> str:
        return f"response-cache:{self.namespace}:generation"

    def generation(self) -> int:
        return int(self.backend.get_or_set(self._generation_key(), 1, None))

    def key_for(self, request, representation: str, generation: Optional[int] = None) -> str:
        """
        Key derived from request identity: path + query, representation, user
        and CSRF secret. Pages embed a CSRF token, so a rotated secret (new
        login) must not be served a page rendered for the old one.

        The secret may be created while the page renders (`{% csrf_token %}`),
        so entries are keyed with the secret as it stands after rendering.
        """
        user = getattr(request, "user", None)
        user_id = getattr(user, "pk", None) if getattr(user, "is_authenticated", False) else "anon"
        identity = "|".join([request.get_full_path(), request.META.get("CSRF_COOKIE", "")])
        digest = hashlib.sha256(identity.encode("utf-8")).hexdigest()
        return (
            f"response-cache:{self.namespace}:{generation or self.generation()}:"
            f"{representation}:{user_id}:{digest}"
        )

    # ---- read / write ------------------------------------------------------

    def fetch(self, key: str) -> Optional[HttpResponse]:
        """Return a fresh `HttpResponse` for a cached entry, or None on a miss."""
        entry = self.backend.get(key)
        if entry is None:
            return None
        content, content_type, status = entry
        logger.debug("response cache hit namespace=%s", self.namespace)
        return HttpResponse(content, content_type=content_type, status=status)

    def store_after_render(self, request, representation: str, generation: int, response) -> None:
        """
        Arrange for `response` to be stored once it has been rendered.

        Template responses (DRF `Response` included) render after the view
        returns; plain responses are stored immediately. `generation` is the
        one seen at lookup, so a write during the build leaves the entry stale
        rather than current.
        """
        def _store(rendered):
            if rendered.status_code != 200 or _has_pending_messages(request):
                return
            key = self.key_for(request, representation, generation)
            entry = (rendered.content, rendered.get("Content-Type"), rendered.status_code)
            self.backend.set(key, entry, self.timeout)

        if hasattr(response, "add_post_render_callback"):
            response.add_post_render_callback(_store)
        else:
            _store(response)

    def get_or_build(self, request, representation: str, build: Callable[[], HttpResponse]) -> HttpResponse:
        """Serve from cache or call `build()` and cache its rendered result."""
        if not self.enabled:
            return build()
        generation = self.generation()
        cached = self.fetch(self.key_for(request, representation, generation))
        if cached is not None:
            return cached
        response = build()
        self.store_after_render(request, representation, generation, response)
        return response

    def expire(self) -> None:
        """Invalidate every entry of this namespace by bumping its generation."""
        gen_key = self._generation_key()
        try:
            self.backend.incr(gen_key)
        except ValueError:
            # Generation not initialised yet (or evicted); start past the default.
            self.backend.set(gen_key, 2, None)


def _has_pending_messages(request) -> bool:
    # len() counts loaded and queued messages without marking them as used.
    return len(messages.get_messages(request)) > 0
