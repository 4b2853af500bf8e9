"""
Base Django settings for Project Tracker.

Layout
------
- Split settings: `base.py` (shared), `dev.py` (developer overrides), `prod.py` (hardened),
  `test.py` (fast, isolated test runs).
- `environ` is used to source configuration; a local `.env` is optional in dev.

Web stack
---------
- Django 5.x + DRF. The HTML project pages are served by a DRF ViewSet with
  template renderers (page vs. fragment picked by content negotiation).
- SessionAuthentication with CSRF (kept enabled).
- drf-spectacular documents the JSON auth API.

Caching
-------
- The project list response is cached through Django's cache framework
  (`PROJECTS_INDEX_CACHE_*`). `CACHE_URL` picks the backend; local memory by default.

Observability
-------------
- `core.middleware.RequestIDLogMiddleware` logs a single structured line per request
  (with request id, user id, duration). `RequestSizeLimitMiddleware` rejects large
  unsafe requests early with a 413 JSON error.

Security
--------
- Default cookie `SameSite=Lax`, `X_FRAME_OPTIONS=DENY`. Production hardening lives
  in `prod.py` (HSTS, SECURE_*). Keep CSRF on; do not disable.
"""

from pathlib import Path
import environ

# ---------------------------------------------------------------------
# Paths & Env
# ---------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env = environ.Env(DEBUG=(bool, False))
env_file = BASE_DIR / ".env"
if env_file.exists():
    environ.Env.read_env(str(env_file))

# ---------------------------------------------------------------------
# Core
# ---------------------------------------------------------------------
SECRET_KEY = env("SECRET_KEY", default="dev-insecure-change-me")
DEBUG = env.bool("DEBUG", False)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["127.0.0.1", "localhost"])
CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS",
    default=["http://127.0.0.1:8000", "http://localhost:8000"],
)

# ---------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------
INSTALLED_APPS = [
    # Django apps
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "rest_framework",
    "drf_spectacular",

    # Local apps
    "accounts",
    "core",
    "projects",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    # Reject large requests before parsing
    "core.middleware.RequestSizeLimitMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Observability: request-id + structured request log (one line per request)
    "core.middleware.RequestIDLogMiddleware",
]

ROOT_URLCONF = "project_tracker.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "project_tracker.wsgi.application"

# ---------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------
DATABASES = {
    "default": env.db(
        "DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
    )
}

# ---------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------
CACHES = {
    "default": env.cache("CACHE_URL", default="locmemcache://project-tracker"),
}

# ---------------------------------------------------------------------
# Password validation
# ---------------------------------------------------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# ---------------------------------------------------------------------
# Internationalization
# ---------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ---------------------------------------------------------------------
# Static
# ---------------------------------------------------------------------
STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ---------------------------------------------------------------------
# Auth model & login flow
# ---------------------------------------------------------------------
AUTH_USER_MODEL = "accounts.User"
LOGIN_URL = "login"
LOGIN_REDIRECT_URL = "project-list"
LOGOUT_REDIRECT_URL = "login"

# ---------------------------------------------------------------------
# DRF & API Schema
# ---------------------------------------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "user": env("DRF_THROTTLE_RATE_USER", default="200/min"),
        "anon": env("DRF_THROTTLE_RATE_ANON", default="50/min"),
        "auth-login": env("DRF_THROTTLE_RATE_AUTH_LOGIN", default="10/min"),
    },
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Project Tracker API",
    "DESCRIPTION": "Session authentication endpoints for Project Tracker.",
    "VERSION": "0.1.0",
    "SERVERS": [
        {"url": "http://127.0.0.1:8000", "description": "Local Dev"},
        {"url": "/", "description": "Current"},
    ],
    "OPERATION_ID_DUPLICATE_MODE": "suffix",
    "CONTACT": {"name": "Project Tracker", "email": "dev@example.com"},
    "LICENSE": {"name": "MIT"},
    "SWAGGER_UI_SETTINGS": {"persistAuthorization": True},
}

# --- Size/Limits ---------------------------------------------------------------
# Max body size for unsafe methods (bytes)
MAX_REQUEST_BYTES = env.int("MAX_REQUEST_BYTES", default=2_000_000)

# --- Projects ------------------------------------------------------------------
# Seconds a rendered project list stays cached; 0 turns the cache off.
PROJECTS_INDEX_CACHE_TIMEOUT = env.int("PROJECTS_INDEX_CACHE_TIMEOUT", default=300)
PROJECTS_INDEX_CACHE_ALIAS = env("PROJECTS_INDEX_CACHE_ALIAS", default="default")
# Optional model permission (e.g. "projects.view_project") required to list projects.
PROJECTS_LIST_PERMISSION = env("PROJECTS_LIST_PERMISSION", default=None)

# ---------------------------------------------------------------------
# Security defaults (safe baseline; prod hardening in prod.py)
# ---------------------------------------------------------------------
SESSION_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_SAMESITE = "Lax"
X_FRAME_OPTIONS = "DENY"

# ---------------------------------------------------------------------
# Logging (observability)
# ---------------------------------------------------------------------
# Structured console logging for request lines plus a plain channel for app
# loggers. The RequestIDFilter injects `request_id` even outside HTTP contexts.
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": "core.logging.RequestIDFilter"},
    },
    "formatters": {
        "structured": {
            "format": "level=%(levelname)s logger=%(name)s request_id=%(request_id)s "
                      "method=%(method)s path=%(path)s status=%(status)s user_id=%(user_id)s duration_ms=%(duration_ms)s "
                      "message=%(message)s"
        },
        "app": {
            "format": "level=%(levelname)s logger=%(name)s request_id=%(request_id)s message=%(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["request_id"],
            "formatter": "structured",
        },
        "app_console": {
            "class": "logging.StreamHandler",
            "filters": ["request_id"],
            "formatter": "app",
        },
    },
    "loggers": {
        # The middleware logs one line per request to this logger.
        "project_tracker.request": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "core": {"handlers": ["app_console"], "level": "INFO", "propagate": False},
        "projects": {"handlers": ["app_console"], "level": "INFO", "propagate": False},
        "accounts": {"handlers": ["app_console"], "level": "INFO", "propagate": False},
    },
}
