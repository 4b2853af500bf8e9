"""Back-office listing for projects. Staff only; bypasses the handler's policy."""

from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "user", "created_at", "updated_at")
    search_fields = ("name", "description", "user__username")
    list_filter = ("user",)
    date_hierarchy = "created_at"
