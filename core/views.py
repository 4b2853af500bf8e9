"""Core utility views (unauthenticated).

- `health`: readiness endpoint for load balancers and container probes. It
  checks DB connectivity and the default cache, and returns a minimal JSON
  payload. Public by design; the payload holds no per-user data.
"""

from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils.timezone import now
from django.views.decorators.cache import never_cache


@never_cache
def health(request):
    """
    Report `{"app", "time", "db", "cache"}`.

    Returns:
        200 when the database is reachable; 503 when connecting raises.
        A failing cache is reported but does not fail the probe, since the
        project list falls back to rendering uncached.
    """
    status = 200
    payload = {
        "app": "project-tracker",
        "time": now().isoformat(),
        "db": "ok",
        "cache": "ok",
    }
    try:
        connection.ensure_connection()
    except Exception as exc:
        payload["db"] = "down"
        payload["error"] = str(exc)
        status = 503

    try:
        cache.get("health-probe")
    except Exception:
        payload["cache"] = "down"
    return JsonResponse(payload, status=status)
