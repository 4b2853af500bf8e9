"""
ResponseCache unit tests.

What these tests verify
-----------------------
- `get_or_build` calls the builder once per key; a second call is a hit.
- `expire()` bumps the generation so the next call rebuilds.
- Non-200 responses are never stored; timeout 0 disables caching.
- Template responses are stored only after they render.
- Keys differ per user, representation and full path (query included).
"""

from types import SimpleNamespace

from django.core.cache import cache
from django.http import HttpResponse
from django.template import engines
from django.template.response import SimpleTemplateResponse
from django.test import RequestFactory, SimpleTestCase

from core.cache import ResponseCache


class ResponseCacheTests(SimpleTestCase):

    def setUp(self):
        cache.clear()
        self.factory = RequestFactory()
        self.rc = ResponseCache("widgets", timeout=60)
        self.calls = 0

    def _request(self, path="/widgets/", user_id=None):
        request = self.factory.get(path)
        if user_id is None:
            request.user = SimpleNamespace(is_authenticated=False, pk=None)
        else:
            request.user = SimpleNamespace(is_authenticated=True, pk=user_id)
        return request

    def _build(self, status=200):
        def build():
            self.calls += 1
            return HttpResponse(f"body-{self.calls}", status=status)
        return build

    def test_second_call_is_served_from_cache(self):
        first = self.rc.get_or_build(self._request(), "page", self._build())
        second = self.rc.get_or_build(self._request(), "page", self._build())
        self.assertEqual(self.calls, 1)
        self.assertEqual(first.content, b"body-1")
        self.assertEqual(second.content, b"body-1")

    def test_expire_forces_rebuild(self):
        self.rc.get_or_build(self._request(), "page", self._build())
        self.rc.expire()
        again = self.rc.get_or_build(self._request(), "page", self._build())
        self.assertEqual(self.calls, 2)
        self.assertEqual(again.content, b"body-2")

    def test_expire_before_first_use(self):
        self.rc.expire()
        self.assertEqual(self.rc.generation(), 2)

    def test_non_200_is_not_stored(self):
        self.rc.get_or_build(self._request(), "page", self._build(status=403))
        self.rc.get_or_build(self._request(), "page", self._build(status=403))
        self.assertEqual(self.calls, 2)

    def test_disabled_when_timeout_zero(self):
        rc = ResponseCache("widgets", timeout=0)
        self.assertFalse(rc.enabled)
        rc.get_or_build(self._request(), "page", self._build())
        rc.get_or_build(self._request(), "page", self._build())
        self.assertEqual(self.calls, 2)

    def test_keys_separate_users_representations_and_queries(self):
        base = self.rc.key_for(self._request(user_id=1), "page")
        self.assertNotEqual(base, self.rc.key_for(self._request(user_id=2), "page"))
        self.assertNotEqual(base, self.rc.key_for(self._request(user_id=1), "fragment"))
        self.assertNotEqual(base, self.rc.key_for(self._request("/widgets/?page=2", user_id=1), "page"))
        self.assertEqual(base, self.rc.key_for(self._request(user_id=1), "page"))

    def test_namespaces_expire_independently(self):
        other = ResponseCache("gadgets", timeout=60)
        self.rc.get_or_build(self._request(), "page", self._build())
        other.expire()
        self.rc.get_or_build(self._request(), "page", self._build())
        self.assertEqual(self.calls, 1)

    def test_template_response_stored_after_render(self):
        template = engines["django"].from_string("hello {{ name }}")
        request = self._request()

        def build():
            self.calls += 1
            return SimpleTemplateResponse(template, {"name": "world"})

        response = self.rc.get_or_build(request, "page", build)
        key = self.rc.key_for(request, "page")
        self.assertIsNone(cache.get(key))

        response.render()
        self.assertIsNotNone(cache.get(key))

        hit = self.rc.get_or_build(self._request(), "page", build)
        self.assertEqual(hit.content, b"hello world")
        self.assertEqual(self.calls, 1)

    def test_entry_keyed_by_secret_created_during_render(self):
        request = self._request(user_id=1)
        self.assertNotIn("CSRF_COOKIE", request.META)

        def build():
            self.calls += 1
            # Rendering `{% csrf_token %}` creates the secret on a fresh session.
            request.META["CSRF_COOKIE"] = "fresh-secret"
            return HttpResponse("with-token")

        self.rc.get_or_build(request, "page", build)

        blank = self._request(user_id=1)
        self.assertIsNone(cache.get(self.rc.key_for(blank, "page")))

        follow_up = self._request(user_id=1)
        follow_up.META["CSRF_COOKIE"] = "fresh-secret"
        hit = self.rc.get_or_build(follow_up, "page", self._build())
        self.assertEqual(hit.content, b"with-token")
        self.assertEqual(self.calls, 1)
