"""
Project URL configuration.

Surfaces
--------
- `/projects/...`: server-rendered project pages (`projects.views.ProjectViewSet`)
  mounted by `core.routers.ResourceRouter`: list, new, create, show, edit,
  update, destroy. Each answers as a page or, for `?format=js` / XHR, a fragment.
- `/accounts/login/`, `/accounts/logout/`: HTML session sign-in/out.
- `/api/auth/...`: JSON session auth (csrf, login, logout, me).
- `/api/schema/`, `/api/docs/`: OpenAPI schema & Swagger UI for the JSON API.
- `/health/`: readiness probe.
- `/admin/`: Django admin (back-office only).
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path
from django.views.generic import RedirectView

from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.routers import SimpleRouter

from accounts.views import SessionViewSet
from core.routers import ResourceRouter
from core.views import health
from projects.views import ProjectViewSet

router = ResourceRouter()
router.register(r"projects", ProjectViewSet, basename="project")

api_router = SimpleRouter()
api_router.register(r"api/auth", SessionViewSet, basename="auth")

urlpatterns = [
    path("", RedirectView.as_view(pattern_name="project-list", permanent=False)),
    path("admin/", admin.site.urls),
    path("health/", health, name="health"),

    # HTML session auth
    path("accounts/login/", auth_views.LoginView.as_view(), name="login"),
    path("accounts/logout/", auth_views.LogoutView.as_view(), name="logout"),

    # JSON session auth (auth-csrf, auth-login, auth-logout, auth-me)
    path("", include(api_router.urls)),

    # OpenAPI / Docs
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    # Resource pages
    path("", include(router.urls)),
]
