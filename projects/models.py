"""
Project: the single resource served by `projects.views.ProjectViewSet`.

A project belongs to exactly one user (`OwnedModel.user`). Show, edit, update
and destroy only ever reach projects inside the current user's scope
(`Project.objects.for_user(user)`); the list page deliberately shows every
project in the system.
"""

from django.db import models
from django.urls import reverse

from core.models import OwnedModel


class Project(OwnedModel):
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ["name", "-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "name"], name="uniq_project_name_per_user"),
        ]
        indexes = [
            models.Index(fields=["user", "name"], name="project_user_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def get_absolute_url(self) -> str:
        """Canonical view; create and update redirect here on success."""
        return reverse("project-detail", kwargs={"pk": self.pk})
