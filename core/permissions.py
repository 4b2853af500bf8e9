"""
Permission policies used by resource handlers.

This module exposes:
- `is_owner`: object-level check that `obj.user_id` matches the authenticated user.
- `ResourcePermissions`: the capability interface a handler is given. It has one
  check per action kind (list/view/create/update/destroy), each taking the
  current user and either the resource *type* (list) or a target. A target is a
  single record or a collection of records.

Usage
-----
- Subclass per resource and inject into a handler:
      class ProjectViewSet(ResourceViewSet):
          policy_class = ProjectPermissions
- Handlers call the checks through `enforce_<kind>_permission()` (see
  `core.resources`), after loading or constructing the target and before any
  mutation.

Security
--------
# SECURITY: Always scope single-record lookups by `request.user` in addition to
# these checks to avoid leaking object existence through 403 vs 404.
"""

from __future__ import annotations

from typing import Any, Iterable

from django.db import models


def is_owner(user, obj) -> bool:
    """
    Return True when `obj` belongs to the authenticated `user`.

    Returns False for anonymous or unauthenticated users and for objects that
    carry no `user_id`.
    """
    owner_id = getattr(obj, "user_id", None)
    return bool(
        user and getattr(user, "is_authenticated", False) and owner_id is not None and owner_id == user.id
    )


class ResourcePermissions:
    """
    Default policy: active users may list; everything else requires ownership.

    Override individual `can_*` methods to tighten or loosen a resource. A
    subclass may also return a model permission from `get_list_permission()`
    to gate listing on Django's permission system.
    """

    def can_list(self, user, resource_type: type[models.Model]) -> bool:
        if not self.is_active(user):
            return False
        perm = self.get_list_permission(resource_type)
        return not perm or user.has_perm(perm)

    def can_view(self, user, target: Any) -> bool:
        return self.owns(user, target)

    def can_create(self, user, target: Any) -> bool:
        return self.owns(user, target)

    def can_update(self, user, target: Any) -> bool:
        return self.owns(user, target)

    def can_destroy(self, user, target: Any) -> bool:
        return self.owns(user, target)

    # ---- helpers ---------------------------------------------------------

    def get_list_permission(self, resource_type: type[models.Model]) -> str | None:
        """Model permission required to list `resource_type`; None means no extra gate."""
        return None

    @staticmethod
    def is_active(user) -> bool:
        return bool(user and getattr(user, "is_authenticated", False) and getattr(user, "is_active", False))

    def owns(self, user, target: Any) -> bool:
        """
        Ownership for a record or a collection.

        A collection passes when every record in it is owned by `user`; an
        empty collection passes for an active user.
        """
        if not self.is_active(user):
            return False
        if isinstance(target, models.Model):
            return is_owner(user, target)
        records: Iterable[Any] = target
        return all(is_owner(user, obj) for obj in records)
