from __future__ import annotations

"""
Base handler for server-rendered, permission-checked resources.

Highlights
----------
- `ResourceViewSet`:
  * Runs an ordered chain of **guards** (`before_actions`) before every action.
    Each guard is a method taking the request; raising halts the chain and the
    action never runs. Declared order is the execution order.
  * Builds an explicit per-request `RequestContext` (current user, submitted
    params, resource id, representation, request id) in the `load_client` guard.
  * Resolves the **representation** once per request from DRF content
    negotiation: `Representation.PAGE` or `Representation.FRAGMENT`.
  * Authorizes through an injected policy (`policy_class`, see
    `core.permissions.ResourcePermissions`) via `enforce_<kind>_permission()`.
  * Renders `<template_dir>/<action>.html` for pages and
    `<template_dir>/fragments/<action>.html` for fragments; pages redirect after
    successful writes, fragments never redirect.
  * Optionally caches rendered responses (`core.cache.ResponseCache`).

Error handling
--------------
- Denied checks raise DRF `PermissionDenied` -> 403 rendered with the
  access-denied template of the negotiated representation.
- Unauthenticated page requests are redirected to `settings.LOGIN_URL`;
  unauthenticated fragment requests get the 403 access-denied response.
- Lookups outside the caller's scope raise `Http404` and are left to DRF.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponse
from django.shortcuts import redirect, resolve_url
from rest_framework import exceptions, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .cache import ResponseCache
from .logging import request_id_var
from .negotiation import FragmentAwareNegotiation
from .permissions import ResourcePermissions
from .renderers import FragmentRenderer, PageRenderer

logger = logging.getLogger(__name__)


class Representation(str, enum.Enum):
    """What the client asked for: a full document or a partial update."""
    PAGE = "page"
    FRAGMENT = "fragment"

    @classmethod
    def for_renderer(cls, renderer) -> "Representation":
        if getattr(renderer, "format", None) == FragmentRenderer.format:
            return cls.FRAGMENT
        return cls.PAGE


@dataclass(frozen=True)
class RequestContext:
    """Ambient request state handed to every action explicitly."""
    user: Any
    representation: Representation
    resource_id: Optional[str] = None
    request_id: str = "-"
    request: Any = field(default=None, repr=False, compare=False)

    @property
    def params(self) -> Mapping[str, Any]:
        """Submitted attributes. The body is parsed on first access, after the guards."""
        if self.request is None:
            return {}
        return self.request.data

    @property
    def is_page(self) -> bool:
        return self.representation is Representation.PAGE

    @property
    def is_fragment(self) -> bool:
        return self.representation is Representation.FRAGMENT


class ResourceViewSet(viewsets.ViewSet):
    """
    Server-rendered ViewSet with a guard chain, explicit authorization and
    page/fragment responses.

    Subclasses set `template_dir`, `policy_class` and `before_actions`, and
    implement the actions routed to them by `core.routers.ResourceRouter`.
    """
    renderer_classes = [PageRenderer, FragmentRenderer]
    content_negotiation_class = FragmentAwareNegotiation
    # Login is enforced by the `require_login` guard so it runs in declared order.
    permission_classes = [AllowAny]
    lookup_field = "pk"
    lookup_url_kwarg: Optional[str] = None
    # HTML handlers are not part of the OpenAPI document.
    schema = None

    before_actions: tuple[str, ...] = ("load_client", "require_login")
    policy_class: type[ResourcePermissions] = ResourcePermissions
    template_dir: str = ""

    request_context: Optional[RequestContext] = None

    # ---- guard chain -----------------------------------------------------

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        for name in self.before_actions:
            getattr(self, name)(request, *args, **kwargs)

    def load_client(self, request, *args, **kwargs) -> None:
        """Identify the caller and the representation it wants."""
        lookup = self.lookup_url_kwarg or self.lookup_field
        self.request_context = RequestContext(
            user=request.user,
            representation=Representation.for_renderer(getattr(request, "accepted_renderer", None)),
            resource_id=kwargs.get(lookup),
            request_id=getattr(request, "request_id", None) or request_id_var.get(),
            request=request,
        )

    def require_login(self, request, *args, **kwargs) -> None:
        """Halt unless a user is authenticated."""
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            raise exceptions.NotAuthenticated()

    def options(self, request, *args, **kwargs):
        # DRF's metadata response has no template to render; `Allow` is added
        # by `finalize_response`.
        return HttpResponse(status=200)

    def handle_exception(self, exc):
        if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)) and self._wants_page():
            return redirect_to_login(self.request.get_full_path(), resolve_url(settings.LOGIN_URL))
        return super().handle_exception(exc)

    def _wants_page(self) -> bool:
        if self.request_context is not None:
            return self.request_context.is_page
        renderer = getattr(self.request, "accepted_renderer", None)
        return Representation.for_renderer(renderer) is Representation.PAGE

    # ---- authorization -----------------------------------------------------

    def get_policy(self) -> ResourcePermissions:
        return self.policy_class()

    def enforce_list_permission(self, resource_type) -> None:
        self._enforce("list", resource_type)

    def enforce_view_permission(self, target) -> None:
        self._enforce("view", target)

    def enforce_create_permission(self, target) -> None:
        self._enforce("create", target)

    def enforce_update_permission(self, target) -> None:
        self._enforce("update", target)

    def enforce_destroy_permission(self, target) -> None:
        self._enforce("destroy", target)

    def _enforce(self, kind: str, target) -> None:
        check = getattr(self.get_policy(), f"can_{kind}")
        user = self.request.user
        if check(user, target):
            return
        logger.warning(
            "permission denied kind=%s resource=%s user_id=%s",
            kind,
            self.basename or self.__class__.__name__,
            getattr(user, "pk", None),
        )
        raise exceptions.PermissionDenied()

    # ---- responses ---------------------------------------------------------

    def template_for(self, action: str) -> str:
        if self.request_context is not None and self.request_context.is_fragment:
            return f"{self.template_dir}/fragments/{action}.html"
        return f"{self.template_dir}/{action}.html"

    def respond(self, action: str, data: dict, *, status: int = 200) -> Response:
        """Render `action` in the negotiated representation."""
        return Response(data, status=status, template_name=self.template_for(action))

    def respond_after_write(self, action: str, data: dict, *, redirect_to: Any, notice: str = ""):
        """
        Post/redirect/get for pages; direct render for fragments.

        `redirect_to` accepts anything `django.shortcuts.redirect` does (a model
        with `get_absolute_url`, a URL name or a path). A `notice` is flashed
        for the page the redirect lands on, or handed to the fragment template.
        """
        if self.request_context is not None and self.request_context.is_page:
            if notice:
                messages.success(self.request, notice)
            return redirect(redirect_to)
        return self.respond(action, {**data, "notice": notice})

    # ---- response cache ------------------------------------------------------

    def get_response_cache(self) -> Optional[ResponseCache]:
        """
        Return the cache for this resource, or None to disable caching.

        Expiry belongs to the resource's model (see `projects.signals`), so
        writes from the admin or cascades invalidate it as well.
        """
        return None

    def cached_response(self, build: Callable[[], Any]):
        cache = self.get_response_cache()
        if cache is None:
            return build()
        return cache.get_or_build(self.request, self.request_context.representation.value, build)
