"""Asynchronous API client -- builds, sends, validates and decodes requests.

This module provides :class:`APIClient`, which wraps
:class:`httpx.AsyncClient` and drives every call through the same pipeline:

1. **Build** -- the :class:`~typed_apiclient.request.Request` envelope is
   turned into an :class:`httpx.Request` (URL from
   :func:`~typed_apiclient.url.build_url`, ``Accept: application/json``, and
   a JSON body with ``Content-Type: application/json`` when present).
   Malformed URLs and unencodable bodies fail here and are never retried.
2. **Send** -- the delegate's ``will_send_request`` mutates a fresh copy of
   the request, the transport sends it, and statuses outside ``[200, 300)``
   are turned into the delegate's invalid-response error.
3. **Retry** -- if the first attempt fails, the delegate's ``should_retry``
   is awaited once. ``True`` sends the request exactly one more time; the
   outcome of that attempt is final.
4. **Decode** -- the raw ``Response[bytes]`` is mapped through the
   serializer (or left alone for raw and Void calls).

The client holds no per-call state. Configuration, serializer and delegate
are read-only after construction and the httpx session is safe for
concurrent use, so one client can serve many tasks at once. Cancelling a
caller's task cancels the in-flight transport call or retry decision and
the call fails with :class:`asyncio.CancelledError`.

Example::

    async with APIClient.from_host("api.github.com") as client:
        user = await client.value(Request.get("/user", response_type=User))
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

import httpx

from typed_apiclient.delegate import APIClientDelegate, DefaultAPIClientDelegate
from typed_apiclient.models import Configuration, SessionConfig
from typed_apiclient.output import get_output
from typed_apiclient.request import Request
from typed_apiclient.response import Response
from typed_apiclient.serializer import Serializer
from typed_apiclient.url import build_url

T = TypeVar("T")


class APIClient:
    """Typed asynchronous HTTP client.

    Args:
        configuration: Host, scheme, port, base path, session settings,
            serializer overrides and delegate. Frozen for the lifetime of
            the client.

    Example::

        config = Configuration(host="api.github.com", delegate=MyDelegate())
        async with APIClient(config) as client:
            response = await client.send(Request.get("/user", response_type=User))
            print(response.status_code, response.value.login)
    """

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration
        session = configuration.session
        self._session = httpx.AsyncClient(
            timeout=session.timeout,
            verify=session.verify_ssl,
            follow_redirects=session.follow_redirects,
            headers=session.headers,
            transport=session.transport,
        )
        self._delegate: APIClientDelegate = configuration.delegate or DefaultAPIClientDelegate()
        self._serializer = Serializer(decoder=configuration.decoder, encoder=configuration.encoder)

    @classmethod
    def from_host(
        cls,
        host: str,
        session: Optional[SessionConfig] = None,
        delegate: Optional[APIClientDelegate] = None,
    ) -> APIClient:
        """Create a client for *host* with default settings.

        Args:
            host: Host used for requests with relative paths.
            session: Transport settings. Defaults to :class:`SessionConfig`.
            delegate: Delegate customising requests, retries and errors.
        """
        configuration = Configuration(
            host=host,
            session=session or SessionConfig(),
            delegate=delegate,
        )
        return cls(configuration)

    @property
    def configuration(self) -> Configuration:
        """The client's immutable configuration."""
        return self._configuration

    @property
    def delegate(self) -> APIClientDelegate:
        """The delegate in use (the default one when none was configured)."""
        return self._delegate

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> APIClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx session."""
        await self._session.aclose()

    # ------------------------------------------------------------------ #
    # Public entry points
    # ------------------------------------------------------------------ #

    async def value(self, request: Request[T]) -> T:
        """Send *request* and return only the decoded value."""
        response = await self.send(request)
        return response.value

    async def send(self, request: Request[T]) -> Response[T]:
        """Send *request* and return the decoded value in a :class:`Response`.

        ``request.response_type`` selects the decoding: ``None`` is a Void
        call (no decoding, ``value`` is ``None``), ``bytes`` returns the raw
        payload, anything else goes through the serializer.

        Raises:
            MalformedURLError: The URL could not be built.
            EncodeError: The body could not be serialised.
            DecodeError: A 2xx body could not be decoded.
            httpx.TransportError: Network failure (after the retry decision).
            Exception: Whatever the delegate maps an invalid response to.
        """
        return await self._send(request, self._decoder_for(request.response_type))

    async def data(self, request: Request[Any]) -> Response[bytes]:
        """Send *request* and return the raw response body without decoding."""
        http_request = self._make_request(request)
        return await self._send_with_retry(http_request)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _send(self, request: Request[Any], decode: Callable[[bytes], Any]) -> Response[Any]:
        response = await self.data(request)
        value = decode(response.value)
        return response.map(lambda _: value)

    def _decoder_for(self, response_type: Any) -> Callable[[bytes], Any]:
        """Pick the decode step for a response type."""
        if response_type is None:
            return _void
        if response_type is bytes:
            return _identity
        return lambda data: self._serializer.decode(data, response_type)

    async def _send_with_retry(self, request: httpx.Request) -> Response[bytes]:
        """Send *request*, retrying once if the delegate asks for it.

        Only exceptions from the first attempt reach ``should_retry``.
        ``asyncio.CancelledError`` is not an ``Exception`` and propagates
        immediately.
        """
        try:
            return await self._actually_send(request)
        except Exception as exc:
            if not await self._delegate.should_retry(self, exc):
                raise
            get_output().debug(f"Retrying {request.method} {request.url} after: {exc!r}")
        return await self._actually_send(request)

    async def _actually_send(self, request: httpx.Request) -> Response[bytes]:
        """Run one physical attempt: delegate mutation, transport, validation."""
        request = _copy_request(request)
        mutated = self._delegate.will_send_request(self, request)
        if mutated is not None:
            request = mutated

        get_output().debug(f"{request.method} {request.url}")
        response = await self._session.send(request)
        data = response.content
        get_output().debug(f"HTTP {response.status_code} {request.method} {request.url}")

        self._validate(response, data)
        return Response(
            value=data,
            data=data,
            request=request,
            response=response,
            status_code=response.status_code,
        )

    def _make_request(self, request: Request[Any]) -> httpx.Request:
        """Build the transport request: URL, default headers and JSON body."""
        url = build_url(request.path, request.query, self._configuration)
        headers = {"Accept": "application/json"}
        content: Optional[bytes] = None
        if request.body is not None:
            content = request.body.encode(self._serializer)
            headers["Content-Type"] = "application/json"
        return self._session.build_request(
            request.method.value,
            url,
            headers=headers,
            content=content,
        )

    def _validate(self, response: httpx.Response, data: bytes) -> None:
        """Raise the delegate's error for statuses outside ``[200, 300)``."""
        if not 200 <= response.status_code < 300:
            raise self._delegate.did_receive_invalid_response(self, response, data)


def _copy_request(request: httpx.Request) -> httpx.Request:
    """Copy *request* so each attempt starts from the unmutated original."""
    return httpx.Request(
        request.method,
        request.url,
        headers=request.headers.copy(),
        content=request.content or None,
        extensions=dict(request.extensions),
    )


def _identity(data: bytes) -> bytes:
    return data


def _void(data: bytes) -> None:
    return None
