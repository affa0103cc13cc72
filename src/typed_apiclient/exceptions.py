"""Exception hierarchy for typed_apiclient.

All errors raised by the client itself inherit from :class:`APIClientError`.
Errors produced elsewhere are surfaced unchanged: network failures arrive as
:class:`httpx.TransportError` subclasses, cancellation as
:class:`asyncio.CancelledError`, and non-2xx responses as whatever
:meth:`~typed_apiclient.delegate.APIClientDelegate.did_receive_invalid_response`
returns.

Subclass hierarchy::

    APIClientError
    +-- MalformedURLError            (terminal, never retried)
    +-- EncodeError                  (terminal, never retried)
    +-- DecodeError                  (terminal, never retried)
    +-- UnacceptableStatusCodeError  (default invalid-response error)
    +-- ConfigError                  (bad configuration file or env values)
"""

from __future__ import annotations

from typing import Any, Optional


class APIClientError(Exception):
    """Base exception for all typed_apiclient errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)


class MalformedURLError(APIClientError):
    """Raised when a path and query cannot be turned into an absolute URL."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class EncodeError(APIClientError):
    """Raised when a request body cannot be serialised to JSON."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class DecodeError(APIClientError):
    """Raised when response bytes cannot be decoded into the expected type.

    Attributes:
        data: The offending response payload.
        type_: The type the payload was being decoded into.
    """

    def __init__(self, message: str, data: bytes = b"", type_: Any = None):
        super().__init__(message)
        self.data = data
        self.type_ = type_


class UnacceptableStatusCodeError(APIClientError):
    """Raised by the default delegate for status codes outside ``[200, 300)``."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"Unacceptable status code: {status_code}")
        self.status_code = status_code


class ConfigError(APIClientError):
    """Raised for configuration problems (missing file, invalid JSON, bad values)."""
