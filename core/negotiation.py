from __future__ import annotations

"""
Content negotiation that recognises fragment requests.

DRF's default negotiation already honours `?format=js`. Browsers doing
asynchronous updates usually signal themselves differently, so this class
also picks the fragment renderer when the request:
- sends `X-Requested-With: XMLHttpRequest`, or
- lists a JavaScript media type in `Accept` (what unobtrusive-JS helpers send).

An explicit `?format=` always wins over these hints.
"""

from rest_framework.negotiation import DefaultContentNegotiation

from .renderers import FragmentRenderer

_SCRIPT_MEDIA_TYPES = ("text/javascript", "application/javascript")


def wants_fragment(request) -> bool:
    """True when request headers ask for a partial response."""
    if request.headers.get("X-Requested-With", "").lower() == "xmlhttprequest":
        return True
    accept = request.headers.get("Accept", "").lower()
    return any(media_type in accept for media_type in _SCRIPT_MEDIA_TYPES)


class FragmentAwareNegotiation(DefaultContentNegotiation):
    """Default negotiation plus header hints for fragment requests."""

    def select_renderer(self, request, renderers, format_suffix=None):
        format_query_param = self.settings.URL_FORMAT_OVERRIDE
        explicit = format_suffix or request.query_params.get(format_query_param)
        if not explicit and wants_fragment(request):
            for renderer in renderers:
                if renderer.format == FragmentRenderer.format:
                    return renderer, renderer.media_type
        return super().select_renderer(request, renderers, format_suffix)
