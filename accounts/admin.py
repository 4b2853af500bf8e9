"""Admin registration for the custom `User` (Django's stock `UserAdmin`)."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("username", "email", "is_staff", "is_active", "project_count")

    @admin.display(description="Projects")
    def project_count(self, obj) -> int:
        return obj.projects_projects.count()
