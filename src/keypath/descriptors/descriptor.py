"""StructuralDescriptor dataclass and ShapeKind StrEnum.

A descriptor declares the addressable shape of one type: the ordered fields
of a record, the element type of a sequence, or the value type of a
string-keyed mapping.  Scalars have none of these.  Descriptors are consulted
only while a KeyPath is being built; resolution never looks at them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from keypath._types import SCALAR_TYPES, NoneType, type_name

__all__ = ["ShapeKind", "StructuralDescriptor"]


class ShapeKind(StrEnum):
    """The four shapes a described type can have.

    - RECORD   -> "record"   : named fields, addressed with field hops
    - SEQUENCE -> "sequence" : homogeneous list, addressed with index hops
    - MAPPING  -> "mapping"  : ``dict[str, V]``, addressed with key hops
    - SCALAR   -> "scalar"   : a leaf; no further hops are possible
    """

    RECORD = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    SCALAR = auto()


@dataclass(frozen=True, slots=True)
class StructuralDescriptor:
    """Declared shape of a single type.

    Attributes:
        type_id:      The type being described.
        fields:       Ordered ``(name, declared_type)`` pairs.  Accepts any
                      mapping or iterable of pairs; stored as a tuple.
        element_type: Declared element type when ``type_id`` is a sequence,
                      otherwise None.
        value_type:   Declared value type when ``type_id`` is a string-keyed
                      mapping, otherwise None.
    """

    type_id: Any
    fields: tuple[tuple[str, Any], ...] = ()
    element_type: Any = None
    value_type: Any = None

    def __post_init__(self) -> None:
        raw: Iterable[tuple[str, Any]] = (
            self.fields.items() if isinstance(self.fields, Mapping) else self.fields
        )
        # A bare None annotation means NoneType, as in typing.get_type_hints.
        pairs = tuple(
            (str(name), NoneType if declared is None else declared)
            for name, declared in raw
        )
        object.__setattr__(self, "fields", pairs)

        seen: set[str] = set()
        for name, _ in pairs:
            if name in seen:
                msg = (
                    f"duplicate field {name!r} in descriptor for "
                    f"{type_name(self.type_id)}"
                )
                raise ValueError(msg)
            seen.add(name)

        shapes = (pairs, self.element_type, self.value_type)
        if sum(1 for shape in shapes if shape) > 1:
            msg = (
                f"descriptor for {type_name(self.type_id)} must declare only one "
                "of fields, an element type or a value type"
            )
            raise ValueError(msg)

    @property
    def kind(self) -> ShapeKind:
        if self.element_type is not None:
            return ShapeKind.SEQUENCE
        if self.value_type is not None:
            return ShapeKind.MAPPING
        if self.fields:
            return ShapeKind.RECORD
        # a registered record may have no fields at all
        if self.type_id in SCALAR_TYPES or self.type_id is Any:
            return ShapeKind.SCALAR
        return ShapeKind.RECORD

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def field_type(self, name: str) -> Any | None:
        """Declared type of field ``name``, or None when the field is absent."""
        for field_name, declared in self.fields:
            if field_name == name:
                return declared
        return None
