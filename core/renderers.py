from __future__ import annotations

"""
Template renderers for server-rendered resource pages.

Purpose
-------
- A resource handler answers every action in one of two representations:
  a full **page** (document with layout, supports redirects) or a **fragment**
  (partial markup swapped into an already loaded page).
- Both are plain `TemplateHTMLRenderer`s; they differ only in the `format` DRF
  negotiates on (`?format=html` / `?format=js`) and in where error templates live.

Notes
-----
- Fragments are HTML snippets, so both renderers emit `text/html`. Clients that
  ask for a fragment through `Accept: text/javascript` or an XHR header are
  routed here by `core.negotiation.FragmentAwareNegotiation`.
- Error responses (403/404) look up `<status>.html` for pages and
  `fragments/<status>.html` (then the page template) for fragments.
"""

from rest_framework.renderers import TemplateHTMLRenderer


class PageRenderer(TemplateHTMLRenderer):
    """Full HTML document; the default when the client expresses no preference."""
    media_type = "text/html"
    format = "html"
    exception_template_names = ["%(status_code)s.html", "api_exception.html"]


class FragmentRenderer(TemplateHTMLRenderer):
    """
    Partial HTML for in-place UI updates.

    Views never redirect when this renderer was negotiated; they render the
    outcome directly so the client can decide what to do with it.
    """
    media_type = "text/html"
    format = "js"
    exception_template_names = [
        "fragments/%(status_code)s.html",
        "%(status_code)s.html",
        "api_exception.html",
    ]
