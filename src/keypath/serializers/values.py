"""ValueCodec: payload values to and from JSON-compatible data, via pydantic.

Every declared type is carried in a generic envelope model, ``{"value": T}``.
Plain dataclasses nested in the envelope have no pydantic config of their
own, so they take the envelope's: decoding is strict (no ``"5"`` for an
``int``, no ``1`` for a ``bool``), records reject unknown fields, and
``bytes`` travel as base64 text.

Decoding always goes through pydantic's JSON mode.  In Python mode a strict
dataclass field only accepts an existing instance, never a dict.
"""

from __future__ import annotations

import json
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError

from keypath._types import type_name
from keypath.errors import DecodeError, TypeMismatch

__all__ = ["ValueCodec"]

V = TypeVar("V")


class _Envelope(BaseModel, Generic[V]):
    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    value: V


class ValueCodec:
    """Encodes and decodes payload values by their declared type ids.

    Example::

        codec = ValueCodec()
        codec.encode(Nested("x", [1.0]), Nested)
        # {"my_string": "x", "my_vector": [1.0]}
        codec.decode({"my_string": "x", "my_vector": [1.0]}, Nested)
        # Nested(my_string="x", my_vector=[1.0])

    Envelope models are parametrised on demand; pydantic caches each
    parametrisation, so repeated calls for one type reuse its schema.
    """

    def encode(self, value: Any, type_id: Any) -> Any:
        """Return JSON-compatible data for ``value`` declared as ``type_id``.

        Raises:
            TypeMismatch: If ``type_id`` has no JSON form, or ``value`` cannot
                be serialized as it.
        """
        envelope = _envelope(type_id, TypeMismatch)
        try:
            dumped = envelope.model_construct(value=value).model_dump(mode="json")
        except PydanticSerializationError as exc:
            msg = (
                f"cannot encode {type(value).__name__} as {type_name(type_id)}: "
                f"{exc}"
            )
            raise TypeMismatch(msg) from exc
        return dumped["value"]

    def decode(self, data: Any, type_id: Any) -> Any:
        """Rebuild a value of ``type_id`` from JSON-compatible ``data``.

        Raises:
            DecodeError: If ``data`` does not fit ``type_id``, or ``type_id``
                has no JSON form.
        """
        envelope = _envelope(type_id, DecodeError)
        try:
            text = json.dumps({"value": data})
        except (TypeError, ValueError) as exc:
            msg = f"expected {type_name(type_id)}, got non-JSON data {data!r}"
            raise DecodeError(msg) from exc
        try:
            return envelope.model_validate_json(text).value
        except ValidationError as exc:
            msg = f"expected {type_name(type_id)}: {_summarise(exc)}"
            raise DecodeError(msg) from exc


def _envelope(
    type_id: Any, error: type[TypeMismatch] | type[DecodeError]
) -> type[_Envelope[Any]]:
    try:
        return _Envelope[type_id]
    except PydanticSchemaGenerationError as exc:
        msg = f"{type_name(type_id)} has no JSON form: {exc}"
        raise error(msg) from exc


def _summarise(exc: ValidationError) -> str:
    """One ``$.where: message`` entry per validation error, ``$`` being the value."""
    parts = []
    for error in exc.errors(include_url=False):
        where = "$" + "".join(
            f"[{loc}]" if isinstance(loc, int) else f".{loc}"
            for loc in error["loc"][1:]
        )
        parts.append(f"{where}: {error['msg']}")
    return "; ".join(parts)
