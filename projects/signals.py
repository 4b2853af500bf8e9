"""Project lifecycle: keep the cached project list in step with the table.

Every save or delete of a `Project` expires the list cache, whichever path
made it: the project pages, the admin, a shell, or a cascade when the owning
user is deleted. Bulk `QuerySet.update()`/`bulk_create()` send no signals and
are not covered.
"""

from __future__ import annotations

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache import project_list_cache
from .models import Project


@receiver(post_save, sender=Project, dispatch_uid="projects.cache.expire_on_save")
@receiver(post_delete, sender=Project, dispatch_uid="projects.cache.expire_on_delete")
def expire_project_list(sender, instance: Project, **kwargs):
    cache = project_list_cache()
    if cache is None:
        return
    cache.expire()
    # A reader between this write and the commit may cache the old rows; expire again once committed.
    transaction.on_commit(cache.expire)
