"""JSON serialisation for request bodies and response payloads.

By default values are encoded and decoded with pydantic's
:class:`~pydantic.TypeAdapter`, so any type pydantic understands works as a
body or a response type: ``BaseModel`` subclasses, dataclasses, ``TypedDict``,
``list[Model]``, plain ``dict``/``list`` and so on. Dates and datetimes use
ISO-8601 text in both directions.

Custom ``encoder``/``decoder`` callables from the
:class:`~typed_apiclient.models.Configuration` replace the pydantic path
entirely.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional

from pydantic import TypeAdapter

from typed_apiclient.exceptions import DecodeError, EncodeError


@functools.lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


class Serializer:
    """Encodes values to JSON bytes and decodes JSON bytes to typed values.

    A serializer holds no mutable state and can be shared freely between
    concurrent calls.

    Args:
        decoder: Optional ``decoder(data, type_)`` replacing pydantic decoding.
        encoder: Optional ``encoder(value)`` replacing pydantic encoding.
    """

    def __init__(
        self,
        decoder: Optional[Callable[[bytes, Any], Any]] = None,
        encoder: Optional[Callable[[Any], bytes]] = None,
    ) -> None:
        self._decoder = decoder
        self._encoder = encoder

    def encode(self, value: Any, type_: Any = None) -> bytes:
        """Serialise *value* to JSON bytes.

        Args:
            value: The value to encode.
            type_: Static type to encode *value* as. Defaults to ``type(value)``.

        Raises:
            EncodeError: If the value cannot be serialised.
        """
        try:
            if self._encoder is not None:
                return self._encoder(value)
            return _adapter(type_ if type_ is not None else type(value)).dump_json(value)
        except Exception as exc:
            raise EncodeError(f"Failed to encode {type(value).__name__}: {exc}", value=value) from exc

    def decode(self, data: bytes, type_: Any) -> Any:
        """Parse JSON *data* into an instance of *type_*.

        Raises:
            DecodeError: If *data* is not valid JSON or does not match *type_*.
                The error carries the offending bytes.
        """
        try:
            if self._decoder is not None:
                return self._decoder(data, type_)
            return _adapter(type_).validate_json(data)
        except Exception as exc:
            raise DecodeError(
                f"Failed to decode response as {_type_name(type_)}: {exc}",
                data=data,
                type_=type_,
            ) from exc


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)
