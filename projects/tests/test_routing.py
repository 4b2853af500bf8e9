"""URL names and method mapping of the project routes."""

from django.test import SimpleTestCase
from django.urls import resolve, reverse

from projects.views import ProjectViewSet


class ProjectRoutingTests(SimpleTestCase):

    def test_reverse(self):
        self.assertEqual(reverse("project-list"), "/projects/")
        self.assertEqual(reverse("project-new"), "/projects/new/")
        self.assertEqual(reverse("project-detail", kwargs={"pk": 7}), "/projects/7/")
        self.assertEqual(reverse("project-edit", kwargs={"pk": 7}), "/projects/7/edit/")
        self.assertEqual(reverse("project-destroy", kwargs={"pk": 7}), "/projects/7/destroy/")

    def _actions(self, path):
        # Newer DRF releases also map HEAD onto the GET action.
        actions = dict(resolve(path).func.actions)
        actions.pop("head", None)
        return actions

    def test_actions_per_method(self):
        self.assertEqual(self._actions("/projects/"), {"get": "list", "post": "create"})
        self.assertEqual(self._actions("/projects/new/"), {"get": "new"})
        self.assertEqual(
            self._actions("/projects/7/"),
            {"get": "show", "post": "update", "put": "update", "patch": "update", "delete": "destroy"},
        )
        self.assertEqual(self._actions("/projects/7/edit/"), {"get": "edit"})
        self.assertEqual(self._actions("/projects/7/destroy/"), {"post": "destroy"})

    def test_routes_point_at_project_handler(self):
        self.assertIs(resolve("/projects/new/").func.cls, ProjectViewSet)

    def test_new_is_not_taken_for_an_id(self):
        self.assertEqual(resolve("/projects/new/").url_name, "project-new")

    def test_root_redirects_to_list(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r["Location"], "/projects/")
