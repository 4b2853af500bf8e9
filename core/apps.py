"""AppConfig for the `core` app.

Holds shared infrastructure used by resource apps:
- the owned-model base (`models`) and permission policies (`permissions`),
- the server-rendered resource handler (`resources`) with its router,
  renderers, negotiation and response cache,
- middleware and logging helpers (request id, size limits).
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
