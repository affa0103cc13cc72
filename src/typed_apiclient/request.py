"""Request envelopes describing one logical API call.

A :class:`Request` is immutable and carries everything the client needs to
perform a call: the HTTP method, the path (relative ``/x`` or a
fully-qualified URL), optional query parameters, an optional JSON body, and
the type the response should be decoded into.

Requests are created through the class-method constructors, which is the
only way a body gets attached, and only for methods that accept one::

    Request.get("/users/kean", response_type=User)
    Request.get("/search/users", query={"q": "kean", "page": None})
    Request.post("/user/emails", body=["kean@example.com"])   # Void response
    Request.get("/user/avatar", response_type=bytes)          # raw payload

``response_type=None`` marks a Void call: the client validates the status
code and returns no value.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, Mapping, Optional, TypeVar

from typed_apiclient.models import HTTPMethod

if TYPE_CHECKING:
    from typed_apiclient.serializer import Serializer

T = TypeVar("T")

BODY_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})


@dataclass(frozen=True)
class AnyEncodable:
    """A request body boxed together with the type it is encoded as.

    Keeps :class:`Request` independent of the body's type: the envelope
    only ever asks the box to encode itself.

    Attributes:
        value: The body value.
        type_: Static type used for encoding; ``None`` means ``type(value)``.
    """

    value: Any
    type_: Any = None

    def encode(self, serializer: Serializer) -> bytes:
        """Encode the boxed value with *serializer*."""
        return serializer.encode(self.value, self.type_)


@dataclass(frozen=True)
class Request(Generic[T]):
    """Immutable description of one API call whose response decodes to ``T``.

    Attributes:
        method: HTTP method.
        path: Path starting with ``/`` (resolved against the client's host)
            or a fully-qualified URL used as-is.
        query: Query parameters. ``None`` values are left out of the URL.
        body: JSON body, only present for POST, PUT and PATCH.
        response_type: Type the response body decodes into. ``bytes``
            returns the raw payload; ``None`` performs no decoding.
        id: Unique identifier, informational only.
    """

    method: HTTPMethod
    path: str
    query: Optional[Mapping[str, Any]] = None
    body: Optional[AnyEncodable] = field(default=None, repr=False)
    response_type: Any = None
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False)

    def __post_init__(self) -> None:
        method = HTTPMethod(self.method)
        object.__setattr__(self, "method", method)
        if self.body is not None and method not in BODY_METHODS:
            raise ValueError(f"{method.value} requests cannot carry a body")
        if self.query is not None:
            object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    # ------------------------------------------------------------------ #
    # Methods without a body
    # ------------------------------------------------------------------ #

    @classmethod
    def get(
        cls,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        response_type: Any = None,
    ) -> Request[Any]:
        """Create a GET request."""
        return cls(HTTPMethod.GET, path, query=query, response_type=response_type)

    @classmethod
    def delete(
        cls,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        response_type: Any = None,
    ) -> Request[Any]:
        """Create a DELETE request."""
        return cls(HTTPMethod.DELETE, path, query=query, response_type=response_type)

    @classmethod
    def options(
        cls,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        response_type: Any = None,
    ) -> Request[Any]:
        """Create an OPTIONS request."""
        return cls(HTTPMethod.OPTIONS, path, query=query, response_type=response_type)

    @classmethod
    def head(
        cls,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        response_type: Any = None,
    ) -> Request[Any]:
        """Create a HEAD request."""
        return cls(HTTPMethod.HEAD, path, query=query, response_type=response_type)

    @classmethod
    def trace(
        cls,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        response_type: Any = None,
    ) -> Request[Any]:
        """Create a TRACE request."""
        return cls(HTTPMethod.TRACE, path, query=query, response_type=response_type)

    # ------------------------------------------------------------------ #
    # Methods with a body
    # ------------------------------------------------------------------ #

    @classmethod
    def post(
        cls,
        path: str,
        body: Any,
        response_type: Any = None,
        body_type: Any = None,
    ) -> Request[Any]:
        """Create a POST request with a JSON body.

        Args:
            path: Request path or URL.
            body: Any value the serializer can encode.
            response_type: Type to decode the response into.
            body_type: Static type to encode *body* as, when ``type(body)``
                is not precise enough (e.g. ``list[Email]``).
        """
        return cls(
            HTTPMethod.POST, path, body=AnyEncodable(body, body_type), response_type=response_type
        )

    @classmethod
    def put(
        cls,
        path: str,
        body: Any,
        response_type: Any = None,
        body_type: Any = None,
    ) -> Request[Any]:
        """Create a PUT request with a JSON body."""
        return cls(
            HTTPMethod.PUT, path, body=AnyEncodable(body, body_type), response_type=response_type
        )

    @classmethod
    def patch(
        cls,
        path: str,
        body: Any,
        response_type: Any = None,
        body_type: Any = None,
    ) -> Request[Any]:
        """Create a PATCH request with a JSON body."""
        return cls(
            HTTPMethod.PATCH, path, body=AnyEncodable(body, body_type), response_type=response_type
        )
