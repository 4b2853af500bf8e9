"""Authorization policy for projects (see `core.permissions.ResourcePermissions`)."""

from __future__ import annotations

from django.conf import settings

from core.permissions import ResourcePermissions


class ProjectPermissions(ResourcePermissions):
    """
    - list: any active user; additionally the model permission named by
      `PROJECTS_LIST_PERMISSION` when that setting is non-empty.
    - view/create/update/destroy: the user must own every targeted project.
    """

    def get_list_permission(self, resource_type) -> str | None:
        return getattr(settings, "PROJECTS_LIST_PERMISSION", None) or None
