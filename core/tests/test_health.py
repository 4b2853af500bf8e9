"""Tests for the /health/ readiness endpoint.

Contract
--------
- 200 when the DB check passes; payload carries app name, db/cache status, time.
- 503 when the DB check raises; payload includes {"db": "down", "error": "..."}.
- A failing cache is reported but does not turn the probe red.
"""

from unittest.mock import patch

from django.test import TestCase


class HealthEndpointTests(TestCase):

    def test_health_ok(self):
        resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data.get("db"), "ok")
        self.assertEqual(data.get("cache"), "ok")
        self.assertIn("time", data)
        self.assertEqual(data.get("app"), "project-tracker")

    def test_health_db_down(self):
        with patch("django.db.connection.ensure_connection", side_effect=Exception("boom")):
            resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 503)
        data = resp.json()
        self.assertEqual(data.get("db"), "down")
        self.assertIn("error", data)

    def test_health_cache_down_still_200(self):
        with patch("core.views.cache.get", side_effect=Exception("cache gone")):
            resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json().get("cache"), "down")
