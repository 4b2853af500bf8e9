"""Custom user model for Project Tracker.

A custom user from day one keeps an extension point open (Django's documented
recommendation) without a disruptive swap later. It behaves exactly like the
built-in user; projects hang off it through `user.projects_projects`.
"""

from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Project owner and request principal."""
    pass
