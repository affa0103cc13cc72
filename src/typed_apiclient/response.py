"""Response envelope pairing a value with its request/response provenance.

The client first produces a ``Response[bytes]`` for every successful
attempt. Typed results are obtained by mapping that envelope through a
decode function with :meth:`Response.map`, which replaces ``value`` and
keeps ``data``, ``request``, ``response`` and ``status_code`` untouched.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

import httpx

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Response(Generic[T]):
    """Result of a successful call.

    Attributes:
        value: The decoded value (raw bytes for data calls, ``None`` for
            Void calls).
        data: The raw response body, always populated.
        request: The exact :class:`httpx.Request` that was sent, including
            headers added by the delegate.
        response: The :class:`httpx.Response` (status, headers).
        status_code: Convenience copy of ``response.status_code``.
    """

    value: T
    data: bytes = dataclasses.field(repr=False)
    request: httpx.Request
    response: httpx.Response = dataclasses.field(repr=False)
    status_code: int

    @property
    def headers(self) -> httpx.Headers:
        """Response headers."""
        return self.response.headers

    def map(self, transform: Callable[[T], U]) -> Response[U]:
        """Return a copy of this envelope with ``value`` replaced by ``transform(value)``."""
        return dataclasses.replace(self, value=transform(self.value))  # type: ignore[return-value]
