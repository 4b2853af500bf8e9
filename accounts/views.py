"""
Session endpoints for scripted clients.

Browsers sign in through Django's `LoginView` (`/accounts/login/`), which is
where project pages send anonymous visitors. Scripts that want to drive the
same project pages (including their `?format=js` fragments) use this JSON
surface to obtain and drop a session:

    GET  /api/auth/csrf/    204, CSRF cookie set, token echoed in `X-CSRFToken`
    POST /api/auth/login/   200 + account summary, or 400 `invalid_credentials`
    POST /api/auth/logout/  204, safe to repeat
    GET  /api/auth/me/      200 + account summary, or 401

Login attempts are throttled under the `auth-login` scope.
"""

from __future__ import annotations

import logging

from django.contrib.auth import authenticate, login as start_session, logout as end_session
from django.middleware.csrf import get_token
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

logger = logging.getLogger(__name__)


class AccountSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    email = serializers.EmailField(allow_blank=True)
    project_count = serializers.IntegerField()

    @classmethod
    def for_user(cls, user) -> dict:
        return cls(
            {
                "id": user.pk,
                "username": user.get_username(),
                "email": user.email or "",
                "project_count": user.projects_projects.count(),
            }
        ).data


class CredentialsSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class SessionViewSet(viewsets.ViewSet):
    """Open to anonymous callers; each action decides what it returns."""
    permission_classes = [permissions.AllowAny]
    # Set per action through @action(throttle_scope=...).
    throttle_scope: str | None = None

    @extend_schema(operation_id="auth_csrf", responses={204: OpenApiResponse(description="CSRF cookie set")})
    @action(detail=False, methods=["get"])
    def csrf(self, request):
        response = Response(status=status.HTTP_204_NO_CONTENT)
        response["X-CSRFToken"] = get_token(request)
        return response

    @extend_schema(
        operation_id="auth_login",
        request=CredentialsSerializer,
        responses={
            200: AccountSummarySerializer,
            400: OpenApiResponse(description='{"detail": "...", "code": "invalid_credentials"}'),
            429: OpenApiResponse(description="Throttled"),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        throttle_classes=[ScopedRateThrottle],
        throttle_scope="auth-login",
    )
    def login(self, request):
        credentials = CredentialsSerializer(data=request.data)
        user = None
        if credentials.is_valid():
            user = authenticate(request, **credentials.validated_data)
        if user is None or not user.is_active:
            logger.info("login rejected username=%s", request.data.get("username", ""))
            return Response(
                {"detail": _("Invalid username or password."), "code": "invalid_credentials"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        start_session(request, user)
        return Response(AccountSummarySerializer.for_user(user))

    @extend_schema(operation_id="auth_logout", request=None, responses={204: None})
    @action(detail=False, methods=["post"])
    def logout(self, request):
        end_session(request)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="auth_me",
        responses={200: AccountSummarySerializer, 401: OpenApiResponse(description="Not signed in")},
    )
    @action(detail=False, methods=["get"])
    def me(self, request):
        # SessionAuthentication has no WWW-Authenticate challenge, so DRF would
        # answer 403; scripts expect 401 for "no session".
        if not request.user.is_authenticated:
            return Response({"detail": _("Not authenticated.")}, status=status.HTTP_401_UNAUTHORIZED)
        return Response(AccountSummarySerializer.for_user(request.user))
