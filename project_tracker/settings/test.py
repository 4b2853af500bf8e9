"""
Test settings (extends base).

- In-memory SQLite and local-memory cache so runs are isolated and fast.
- MD5 password hashing keeps `create_user()` cheap in fixtures.
- Request logging stays on; tests capture it with `assertLogs`.
"""

from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "project-tracker-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
