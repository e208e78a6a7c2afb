"""Endpoint mode toggle for HTTP monitors.

An HTTP endpoint is entered either as a full URL or as separate attributes
(scheme, host, port, path).  Only one mode is active at a time; switching
clears whatever the deactivated mode owned.
"""

from __future__ import annotations

from form_models import HttpValues, UrlType

ATTRIBUTE_DEFAULTS = {
    "scheme": "HTTP",
    "host": "localhost",
    "port": 9200,
    "path": "",
}

ATTRIBUTE_CLEARED = {
    "scheme": "",
    "host": "",
    "port": None,
    "path": "",
}


def switch_url_type(http: HttpValues, target: UrlType) -> HttpValues:
    """Return a copy of ``http`` with ``target`` active."""
    if http.url_type == target:
        return http.model_copy()

    if target == UrlType.attribute_url:
        update = {**ATTRIBUTE_DEFAULTS, "url": ""}
    else:
        update = dict(ATTRIBUTE_CLEARED)
    return http.model_copy(update={**update, "url_type": target})
