"""Minimal scrubbing for authored tile/modal HTML.

This is *not* an HTML sanitizer. It only removes ``javascript:`` schemes and
inline ``on<event>=`` attribute bindings, leaving ``<script>`` tags, ``data:``
URIs, CSS and everything else untouched. The content comes from an internal
authoring database, and authored snippets rely on markup a stricter cleaner
would drop. Tightening this is a product decision.
"""

from __future__ import annotations

import re

_SCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
# ASCII word characters only, matching the ``\w`` the authoring tool assumes.
_EVENT_HANDLER = re.compile(r"on[A-Za-z0-9_]+\s*=", re.IGNORECASE)


def _scrub_once(html: str) -> str:
    return _EVENT_HANDLER.sub("", _SCRIPT_SCHEME.sub("", html))


def sanitize_html(html: str | None) -> str:
    """Strip ``javascript:`` tokens and ``on*=`` handlers from ``html``.

    Removal repeats until nothing changes so that tokens reassembled by an
    earlier removal (``javajavascript:script:``) are caught as well; the
    result is therefore stable under a second call.
    """

    if not html:
        return ""
    previous = None
    cleaned = html
    while cleaned != previous:
        previous = cleaned
        cleaned = _scrub_once(cleaned)
    return cleaned
