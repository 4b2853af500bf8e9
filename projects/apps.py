"""AppConfig for `projects`; `ready()` connects the cache-expiry receivers."""

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "projects"

    def ready(self) -> None:
        # Receivers use dispatch_uid, so a repeated ready() is harmless.
        from . import signals  # noqa: F401
