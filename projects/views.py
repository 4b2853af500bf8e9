"""
Project pages: the permission-checked CRUD handler for `Project`.

Every action follows the same shape:

1. Guards (`load_client`, then `require_login`) have already run.
2. Load or construct the target. Single projects are always looked up inside
   the current user's scope, so someone else's id is simply not found (404).
3. Authorize through `ProjectPermissions`. Listing is checked against the
   `Project` type *before* anything is loaded or read from the cache; every
   other action is checked against the loaded/built target *before* any write.
4. Write (create/update/destroy). The cached list is expired by
   `projects.signals` on every save or delete.
5. Respond as a page or a fragment. Successful page writes redirect
   (post/redirect/get); fragments render the outcome directly. Failed
   validation re-renders the form in both representations.

NOTE: `show` loads the user's whole project collection rather than the project
named in the URL. It is kept as-is; do not "fix" it without changing the
templates and tests that rely on it.
"""

from __future__ import annotations

import logging

from django.forms.models import model_to_dict
from django.shortcuts import get_object_or_404

from core.cache import ResponseCache
from core.resources import ResourceViewSet

from .cache import project_list_cache
from .forms import ProjectForm
from .models import Project
from .permissions import ProjectPermissions

logger = logging.getLogger(__name__)

CREATED_NOTICE = "Project was successfully created."
UPDATED_NOTICE = "Project was successfully updated."


class ProjectViewSet(ResourceViewSet):
    """Routed by `core.routers.ResourceRouter` under `/projects/`."""
    lookup_value_regex = r"\d+"
    template_dir = "projects"
    policy_class = ProjectPermissions
    before_actions = ("load_client", "require_login")

    # ---- storage ---------------------------------------------------------

    def load_all(self):
        return Project.objects.all()

    def load_scoped_collection(self):
        return Project.objects.for_user(self.request_context.user)

    def load_scoped(self, pk):
        return get_object_or_404(self.load_scoped_collection(), pk=pk)

    def build_scoped(self) -> Project:
        return Project.objects.build_for(self.request_context.user)

    def get_response_cache(self) -> ResponseCache | None:
        return project_list_cache()

    # ---- actions -----------------------------------------------------------

    def list(self, request, *args, **kwargs):
        self.enforce_list_permission(Project)
        return self.cached_response(lambda: self.respond("list", {"projects": self.load_all()}))

    def show(self, request, *args, **kwargs):
        project = self.load_scoped_collection()
        self.enforce_view_permission(project)
        return self.respond("show", {"project": project})

    def new(self, request, *args, **kwargs):
        project = self.build_scoped()
        self.enforce_create_permission(project)
        return self.respond("new", {"project": project, "form": ProjectForm(instance=project)})

    def create(self, request, *args, **kwargs):
        project = self.build_scoped()
        self.enforce_create_permission(project)

        form = ProjectForm(self.request_context.params, instance=project)
        if not form.is_valid():
            return self.respond("new", {"project": project, "form": form})

        project = form.save()
        logger.info("project created id=%s user_id=%s", project.pk, project.user_id)
        return self.respond_after_write(
            "create", {"project": project}, redirect_to=project, notice=CREATED_NOTICE
        )

    def edit(self, request, pk=None, *args, **kwargs):
        project = self.load_scoped(pk)
        self.enforce_update_permission(project)
        return self.respond("edit", {"project": project, "form": ProjectForm(instance=project)})

    def update(self, request, pk=None, *args, **kwargs):
        project = self.load_scoped(pk)
        self.enforce_update_permission(project)

        form = ProjectForm(self._update_data(project), instance=project)
        if not form.is_valid():
            return self.respond("edit", {"project": project, "form": form})

        project = form.save()
        logger.info("project updated id=%s user_id=%s", project.pk, project.user_id)
        return self.respond_after_write(
            "update", {"project": project}, redirect_to=project, notice=UPDATED_NOTICE
        )

    def destroy(self, request, pk=None, *args, **kwargs):
        project = self.load_scoped(pk)
        self.enforce_destroy_permission(project)

        project_id = project.pk
        project.delete()
        logger.info("project destroyed id=%s user_id=%s", project_id, project.user_id)
        return self.respond_after_write(
            "destroy", {"project": project, "project_id": project_id}, redirect_to="project-list"
        )

    # ---- helpers -------------------------------------------------------------

    def _update_data(self, project: Project):
        """PATCH only sends changed fields; fill the rest from the stored row."""
        params = self.request_context.params
        if self.request.method != "PATCH":
            return params
        data = model_to_dict(project, fields=ProjectForm._meta.fields)
        data.update(params.dict() if hasattr(params, "dict") else params)
        return data
