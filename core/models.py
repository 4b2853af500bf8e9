from __future__ import annotations

"""
Ownership base for records that live inside a user's scope.

- `OwnedQuerySet.for_user()` is the *scoped collection* every single-record
  lookup goes through; a record outside it is not found (404), never 403.
- `OwnedQuerySet.build_for()` is the first half of build-then-save: it returns
  an unsaved instance that already carries its owner, so an authorization
  policy can inspect it before anything is written.
- `OwnedModel` adds the owner FK and audit timestamps.
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class OwnedQuerySet(models.QuerySet):
    """Scoping and construction helpers for user-owned rows."""

    def for_user(self, user):
        """Rows owned by `user`; anonymous callers get `none()`."""
        if user is None or not getattr(user, "is_authenticated", False):
            return self.none()
        return self.filter(user=user)

    def build_for(self, user, **attrs):
        """Unsaved instance owned by `user`. No query is issued."""
        return self.model(user=user, **attrs)


class OwnedModel(models.Model):
    """
    Abstract base: `user` owner FK (CASCADE) plus `created_at`/`updated_at`.

    The reverse accessor is `<app_label>_<model>s`, e.g. `user.projects_projects`.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(app_label)s_%(class)ss",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OwnedQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ("-created_at",)

    def clean(self):
        super().clean()
        if self.user_id is None:
            raise ValidationError({"user": "Owned records need an owner."})

    def is_owned_by(self, user) -> bool:
        return bool(user and getattr(user, "is_authenticated", False) and self.user_id == user.id)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} pk={self.pk} user_id={self.user_id}>"
