"""
Project model, form and policy tests.

- Names are unique per owner, not globally.
- `ProjectForm` strips names and rejects blanks and per-owner duplicates.
- `OwnedQuerySet.build_for` returns an unsaved, owned instance.
- `ProjectPermissions` gates listing on `PROJECTS_LIST_PERMISSION` when set.
"""

from django.contrib.auth.models import Permission
from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings

from accounts.models import User
from projects.forms import ProjectForm
from projects.models import Project
from projects.permissions import ProjectPermissions


class ProjectModelTests(TestCase):

    def setUp(self):
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.bob = User.objects.create_user(username="bob", password="pw")

    def test_name_unique_per_owner(self):
        Project.objects.create(user=self.alice, name="Apollo")
        Project.objects.create(user=self.bob, name="Apollo")
        with self.assertRaises(IntegrityError), transaction.atomic():
            Project.objects.create(user=self.alice, name="Apollo")

    def test_build_for_is_unsaved_and_owned(self):
        project = Project.objects.build_for(self.alice, name="Draft")
        self.assertIsNone(project.pk)
        self.assertEqual(project.user, self.alice)
        self.assertTrue(project.is_owned_by(self.alice))
        self.assertFalse(project.is_owned_by(self.bob))

    def test_for_user_scopes(self):
        Project.objects.create(user=self.alice, name="Apollo")
        Project.objects.create(user=self.bob, name="Vostok")
        self.assertEqual([p.name for p in Project.objects.for_user(self.alice)], ["Apollo"])

    def test_absolute_url_and_str(self):
        project = Project.objects.create(user=self.alice, name="Apollo")
        self.assertEqual(project.get_absolute_url(), f"/projects/{project.pk}/")
        self.assertEqual(str(project), "Apollo")

    def test_user_related_name(self):
        Project.objects.create(user=self.alice, name="Apollo")
        self.assertEqual(self.alice.projects_projects.count(), 1)


class ProjectFormTests(TestCase):

    def setUp(self):
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.existing = Project.objects.create(user=self.alice, name="Apollo")

    def test_strips_name(self):
        form = ProjectForm({"name": "  Gemini  ", "description": ""}, instance=Project(user=self.alice))
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data["name"], "Gemini")

    def test_blank_name_rejected(self):
        form = ProjectForm({"name": "   ", "description": ""}, instance=Project(user=self.alice))
        self.assertFalse(form.is_valid())
        self.assertIn("name", form.errors)

    def test_duplicate_for_owner_rejected(self):
        form = ProjectForm({"name": "Apollo"}, instance=Project(user=self.alice))
        self.assertFalse(form.is_valid())
        self.assertIn("You already have a project with this name.", form.errors["name"])

    def test_resaving_own_name_allowed(self):
        form = ProjectForm({"name": "Apollo", "description": "same"}, instance=self.existing)
        self.assertTrue(form.is_valid(), form.errors)


class ProjectPermissionsTests(TestCase):

    def setUp(self):
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.bob = User.objects.create_user(username="bob", password="pw")
        self.policy = ProjectPermissions()

    def test_owner_checks(self):
        mine = Project.objects.create(user=self.alice, name="Apollo")
        self.assertTrue(self.policy.can_update(self.alice, mine))
        self.assertFalse(self.policy.can_update(self.bob, mine))
        self.assertTrue(self.policy.can_create(self.alice, Project.objects.build_for(self.alice)))

    def test_collection_check(self):
        Project.objects.create(user=self.alice, name="Apollo")
        self.assertTrue(self.policy.can_view(self.alice, Project.objects.for_user(self.alice)))
        self.assertFalse(self.policy.can_view(self.bob, Project.objects.all()))

    def test_list_open_by_default(self):
        self.assertTrue(self.policy.can_list(self.alice, Project))

    @override_settings(PROJECTS_LIST_PERMISSION="projects.view_project")
    def test_list_gated_by_setting(self):
        self.assertFalse(self.policy.can_list(self.alice, Project))
        self.bob.user_permissions.add(Permission.objects.get(codename="view_project"))
        self.assertTrue(self.policy.can_list(User.objects.get(pk=self.bob.pk), Project))
