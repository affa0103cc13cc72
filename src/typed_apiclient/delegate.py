"""Delegate hooks that customise how an :class:`~typed_apiclient.client.APIClient` behaves.

A delegate exposes three independent hooks, each with a safe default, so a
subclass overrides only what it needs:

* :meth:`APIClientDelegate.will_send_request` -- mutate the outgoing
  :class:`httpx.Request` (auth headers, tracing ids). Called once per
  physical attempt, so twice when a retry happens.
* :meth:`APIClientDelegate.should_retry` -- decide, possibly after awaiting
  a credential refresh, whether a failed first attempt is retried once.
* :meth:`APIClientDelegate.did_receive_invalid_response` -- turn a non-2xx
  response into the exception raised to the caller.

Example::

    class BearerDelegate(APIClientDelegate):
        def __init__(self, token: str) -> None:
            self.token = token

        def will_send_request(self, client, request):
            request.headers["Authorization"] = f"Bearer {self.token}"
            return request
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from typed_apiclient.exceptions import UnacceptableStatusCodeError

if TYPE_CHECKING:
    from typed_apiclient.client import APIClient


class APIClientDelegate:
    """Base class for client delegates.

    All hooks have default implementations: requests go out unchanged,
    failures are never retried, and invalid responses raise
    :class:`~typed_apiclient.exceptions.UnacceptableStatusCodeError`.

    A single delegate instance is shared by every concurrent call on a
    client, so hooks must not rely on per-call state stored on ``self``.
    """

    def will_send_request(self, client: APIClient, request: httpx.Request) -> httpx.Request:
        """Called right before *request* is handed to the transport.

        Args:
            client: The client sending the request.
            request: A fresh copy of the built request for this attempt.
                Headers may be mutated in place.

        Returns:
            The request to send. Returning ``None`` keeps *request*.
        """
        return request

    async def should_retry(self, client: APIClient, error: Exception) -> bool:
        """Decide whether a failed first attempt is retried.

        Consulted exactly once per call, only after the first attempt fails
        with a transport error or an invalid-response error. A second
        attempt is never retried again.

        Args:
            client: The client that made the request.
            error: The exception raised by the first attempt.

        Returns:
            ``True`` to send the request one more time.
        """
        return False

    def did_receive_invalid_response(
        self,
        client: APIClient,
        response: httpx.Response,
        data: bytes,
    ) -> Exception:
        """Build the exception raised for a status code outside ``[200, 300)``.

        Args:
            client: The client that received the response.
            response: The full response (status, headers).
            data: The raw response body.

        Returns:
            The exception the call fails with (subject to the retry decision).
        """
        return UnacceptableStatusCodeError(response.status_code)


class DefaultAPIClientDelegate(APIClientDelegate):
    """Delegate used when a :class:`~typed_apiclient.models.Configuration` has none."""
