"""
Observability middleware tests (request id header + single structured log line).

What these tests verify
-----------------------
- Every response carries `X-Request-ID`:
  * a safe client-provided value is echoed unchanged,
  * an unsafe one is replaced by a uuid4 hex.
- Exactly one INFO line per request lands on `project_tracker.request`, and it
  records the final status (302 for the login redirect of an anonymous page request).
- The request id contextvar is reset once the request is over.
"""

from __future__ import annotations

from django.core.cache import cache
from django.test import TestCase

from accounts.models import User
from core.logging import request_id_var


class ObservabilityMiddlewareTests(TestCase):

    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(username="alice", password="pass12345")
        self.client.login(username="alice", password="pass12345")

    def test_response_includes_request_id_and_logs_once(self):
        with self.assertLogs("project_tracker.request", level="INFO") as cap:
            r = self.client.get("/projects/")
        self.assertEqual(r.status_code, 200, r.content)

        rid = r.headers.get("X-Request-ID")
        self.assertIsNotNone(rid)
        self.assertRegex(rid, r"^[A-Za-z0-9._\-]{1,200}$")

        self.assertEqual(len(cap.records), 1)
        record = cap.records[0]
        self.assertEqual(record.getMessage(), "request")
        self.assertEqual(record.status, 200)
        self.assertEqual(record.path, "/projects/")
        self.assertEqual(record.user_id, self.user.pk)
        self.assertEqual(record.request_id, rid)

    def test_client_provided_request_id_is_respected(self):
        r = self.client.get("/projects/", HTTP_X_REQUEST_ID="custom-123_OK")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.headers.get("X-Request-ID"), "custom-123_OK")

    def test_bad_client_request_id_is_replaced(self):
        r = self.client.get("/projects/", HTTP_X_REQUEST_ID="BAD ID")
        self.assertEqual(r.status_code, 200)
        self.assertNotEqual(r.headers.get("X-Request-ID"), "BAD ID")
        self.assertRegex(r.headers.get("X-Request-ID") or "", r"^[a-f0-9]{32}$")

    def test_redirect_status_is_logged(self):
        self.client.logout()
        with self.assertLogs("project_tracker.request", level="INFO") as cap:
            r = self.client.get("/projects/")
        self.assertEqual(r.status_code, 302)
        self.assertEqual(cap.records[0].status, 302)
        self.assertIsNone(cap.records[0].user_id)

    def test_request_id_var_is_reset_after_request(self):
        self.client.get("/projects/", HTTP_X_REQUEST_ID="scoped-id")
        self.assertEqual(request_id_var.get(), "-")
