"""The rendered project list cache, shared by `ProjectViewSet` and `projects.signals`."""

from __future__ import annotations

from django.conf import settings

from core.cache import ResponseCache


def project_list_cache() -> ResponseCache | None:
    """None when `PROJECTS_INDEX_CACHE_TIMEOUT` is 0."""
    timeout = getattr(settings, "PROJECTS_INDEX_CACHE_TIMEOUT", 0)
    if not timeout:
        return None
    alias = getattr(settings, "PROJECTS_INDEX_CACHE_ALIAS", "default")
    return ResponseCache("projects", alias=alias, timeout=timeout)
