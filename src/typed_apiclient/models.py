"""Pydantic models for client configuration.

The models fall into two groups:

**Wire vocabulary** -- :class:`HTTPMethod`, the verbs a
:class:`~typed_apiclient.request.Request` can carry.

**Configuration models** -- :class:`SessionConfig` (transport settings)
and :class:`Configuration` (everything an
:class:`~typed_apiclient.client.APIClient` is built from). Both are frozen:
once a client is constructed its configuration cannot change, which is what
lets one client serve many concurrent calls without locking.

Configuration can be persisted as JSON via :mod:`typed_apiclient.config`;
callable and object fields (``decoder``, ``encoder``, ``delegate``,
``session.transport``) are runtime-only and are never written out.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from typed_apiclient.delegate import APIClientDelegate


class HTTPMethod(str, enum.Enum):
    """HTTP methods a request envelope can use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    TRACE = "TRACE"


class SessionConfig(BaseModel):
    """Settings for the underlying :class:`httpx.AsyncClient` session."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every request"
    )
    transport: Optional[httpx.AsyncBaseTransport] = Field(
        default=None,
        exclude=True,
        description="Custom httpx transport (e.g. httpx.MockTransport in tests)",
    )


class Configuration(BaseModel):
    """Immutable configuration owned by an :class:`~typed_apiclient.client.APIClient`.

    Relative request paths (those starting with ``/``) are resolved against
    ``host``, ``port`` and the scheme implied by ``is_insecure``.
    ``base_path``, when set, is prepended to every request path before the
    URL is parsed.

    Example::

        Configuration(
            host="api.github.com",
            base_path="/v3",
            session=SessionConfig(timeout=10),
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    host: str = Field(min_length=1, description="Host used for relative paths")
    base_path: Optional[str] = Field(
        default=None, description="Prefix prepended to every request path"
    )
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    is_insecure: bool = Field(default=False, description="Use http instead of https")
    session: SessionConfig = Field(default_factory=SessionConfig)
    # Runtime-only overrides
    decoder: Optional[Callable[[bytes, Any], Any]] = Field(default=None, exclude=True)
    encoder: Optional[Callable[[Any], bytes]] = Field(default=None, exclude=True)
    delegate: Optional[APIClientDelegate] = Field(default=None, exclude=True)
