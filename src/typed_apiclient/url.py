"""URL construction for request envelopes.

:func:`build_url` turns a request path and optional query into an absolute
:class:`httpx.URL`:

1. ``base_path`` from the configuration is prepended to the path.
2. Paths starting with ``/`` get the configured scheme, host and port.
   Fully-qualified URLs keep their own scheme, host and port.
3. A query mapping replaces the URL's query string. ``None`` values are
   dropped, everything else is rendered with :func:`str`.

Anything that cannot be parsed, or that does not end up absolute, raises
:class:`~typed_apiclient.exceptions.MalformedURLError`.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from typed_apiclient.exceptions import MalformedURLError
from typed_apiclient.models import Configuration


def build_url(
    path: str,
    query: Optional[Mapping[str, Any]],
    configuration: Configuration,
) -> httpx.URL:
    """Build the absolute URL for *path* and *query*.

    Args:
        path: Absolute path (``/user``) or fully-qualified URL.
        query: Optional query parameters; ``None`` values are omitted.
        configuration: Supplies host, port, scheme and base path.

    Returns:
        The absolute :class:`httpx.URL`.

    Raises:
        MalformedURLError: If the URL cannot be parsed or rebuilt.
    """
    if configuration.base_path:
        path = f"{configuration.base_path}{path}"

    try:
        url = httpx.URL(path)
    except httpx.InvalidURL as exc:
        raise MalformedURLError(f"Malformed URL {path!r}: {exc}", url=path) from exc

    try:
        if path.startswith("/"):
            components: dict[str, Any] = {
                "scheme": "http" if configuration.is_insecure else "https",
                "host": configuration.host,
            }
            if configuration.port is not None:
                components["port"] = configuration.port
            url = url.copy_with(**components)

        if query is not None:
            url = url.copy_with(params=query_params(query))
    except httpx.InvalidURL as exc:
        raise MalformedURLError(f"Malformed URL {path!r}: {exc}", url=path) from exc

    if not url.is_absolute_url:
        raise MalformedURLError(f"URL {str(url)!r} is not absolute", url=str(url))
    return url


def query_params(query: Mapping[str, Any]) -> dict[str, str]:
    """Drop ``None`` entries and stringify the rest, keeping insertion order."""
    return {key: str(value) for key, value in query.items() if value is not None}
