"""typed_apiclient -- a typed, asynchronous HTTP client built on httpx.

Callers describe a call with a :class:`~typed_apiclient.request.Request`
envelope (method, path, query, body and the expected response type) and
hand it to an :class:`~typed_apiclient.client.APIClient`, which builds the
URL, sends the request, validates the status code and decodes the body.
An :class:`~typed_apiclient.delegate.APIClientDelegate` customises header
injection, the single retry decision, and the error raised for non-2xx
responses.

Typical usage::

    from typed_apiclient import APIClient, Request

    async with APIClient.from_host("api.github.com") as client:
        user = await client.value(Request.get("/user", response_type=User))

Modules:
    client: The :class:`APIClient` orchestrator.
    request: Request envelope and type-erased body.
    response: Response envelope.
    delegate: Delegate hooks with default behaviour.
    url: URL construction from paths, queries and configuration.
    serializer: JSON encoding/decoding backed by pydantic.
    models: Pydantic configuration models and :class:`HTTPMethod`.
    config: Loading configuration from JSON files and environment variables.
    exceptions: Exception hierarchy.
    output: stderr diagnostics.
"""

from typed_apiclient.client import APIClient
from typed_apiclient.delegate import APIClientDelegate, DefaultAPIClientDelegate
from typed_apiclient.exceptions import (
    APIClientError,
    ConfigError,
    DecodeError,
    EncodeError,
    MalformedURLError,
    UnacceptableStatusCodeError,
)
from typed_apiclient.models import Configuration, HTTPMethod, SessionConfig
from typed_apiclient.request import AnyEncodable, Request
from typed_apiclient.response import Response
from typed_apiclient.serializer import Serializer

__version__ = "0.1.0"

__all__ = [
    "APIClient",
    "APIClientDelegate",
    "APIClientError",
    "AnyEncodable",
    "ConfigError",
    "Configuration",
    "DecodeError",
    "DefaultAPIClientDelegate",
    "EncodeError",
    "HTTPMethod",
    "MalformedURLError",
    "Request",
    "Response",
    "Serializer",
    "SessionConfig",
    "UnacceptableStatusCodeError",
]
