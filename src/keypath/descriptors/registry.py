"""DescriptorRegistry: the table of structural descriptors consulted by PathBuilder.

Registration is explicit.  Record types are added either field-by-field with
``register`` or read off a dataclass with ``register_dataclass``; scalars,
``list[E]`` and ``dict[str, V]`` aliases and ``T | None`` optionals are
described implicitly and never need registering.

Example::

    registry = DescriptorRegistry()

    @registry.register_dataclass
    @dataclass
    class Nested:
        my_string: str
        my_vector: list[float]

    registry.describe(Nested).field_type("my_vector")   # list[float]
    registry.describe(list[Nested]).element_type        # Nested
    registry.describe(dict[str, Nested]).value_type     # Nested
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import typing
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from keypath._types import (
    SCALAR_TYPES,
    mapping_value,
    sequence_element,
    type_name,
    unwrap_optional,
)
from keypath.descriptors.descriptor import StructuralDescriptor
from keypath.errors import UnregisteredType

__all__ = ["DescriptorRegistry"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class DescriptorRegistry:
    """Mutable table from type id to StructuralDescriptor.

    Registration is append-only: a type may be registered again only with an
    identical descriptor.  This keeps every KeyPath built against the
    registry valid for the registry's whole lifetime, which is what lets
    ``PathBuilder`` memoise successful constructions.

    Reads and writes are guarded by a lock so a registry can be populated
    from one thread while another builds paths.
    """

    def __init__(self) -> None:
        self._descriptors: dict[Any, StructuralDescriptor] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        type_id: Any,
        fields: Mapping[str, Any] | Iterable[tuple[str, Any]],
    ) -> StructuralDescriptor:
        """Register a record type with explicitly declared fields.

        Args:
            type_id: The record type.
            fields:  Field name -> declared type id, in declaration order.

        Returns:
            The stored descriptor.

        Raises:
            ValueError: If ``type_id`` is a scalar, ``list`` or ``dict`` alias, or is
                already registered with a different shape.
        """
        inner, optional = unwrap_optional(type_id)
        if (
            optional
            or inner in SCALAR_TYPES
            or sequence_element(inner) is not None
            or mapping_value(inner) is not None
        ):
            msg = f"{type_name(type_id)} is implicit and cannot be registered"
            raise ValueError(msg)
        return self._store(StructuralDescriptor(type_id=type_id, fields=fields))

    def register_dataclass(
        self, cls: T, *, localns: Mapping[str, Any] | None = None
    ) -> T:
        """Register a dataclass and every dataclass reachable from its fields.

        Field types are read with ``typing.get_type_hints`` so postponed
        annotations (``from __future__ import annotations``) resolve against
        the defining module.  Pass ``localns`` for classes defined inside a
        function.

        Returns ``cls`` unchanged, so this also works as a class decorator.

        Raises:
            TypeError: If ``cls`` is not a dataclass type.
        """
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            msg = f"register_dataclass expects a dataclass type, got {cls!r}"
            raise TypeError(msg)

        with self._lock:
            if cls in self._descriptors:
                return cls
            hints = typing.get_type_hints(cls, localns=dict(localns or {}))
            fields = [(f.name, hints[f.name]) for f in dataclasses.fields(cls)]
            # Store before recursing so self-referential dataclasses terminate.
            self._store(StructuralDescriptor(type_id=cls, fields=fields))
            for _, declared in fields:
                for nested in _dataclasses_in(declared):
                    self.register_dataclass(nested, localns=localns)
        return cls

    def _store(self, descriptor: StructuralDescriptor) -> StructuralDescriptor:
        with self._lock:
            existing = self._descriptors.get(descriptor.type_id)
            if existing is not None:
                if existing != descriptor:
                    msg = (
                        f"{type_name(descriptor.type_id)} is already registered "
                        "with a different shape"
                    )
                    raise ValueError(msg)
                return existing
            self._descriptors[descriptor.type_id] = descriptor
        logger.debug(
            "registered %s with fields %s",
            type_name(descriptor.type_id),
            list(descriptor.field_names),
        )
        return descriptor

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def describe(self, type_id: Any) -> StructuralDescriptor:
        """Return the descriptor for ``type_id``.

        ``T | None`` is described as ``T``.  Scalars, ``list[E]`` and
        ``dict[str, V]`` get an implicit descriptor.

        Raises:
            UnregisteredType: If ``type_id`` is a record type that was never
                registered, or is not addressable at all.
        """
        inner, _ = unwrap_optional(type_id)

        if inner in SCALAR_TYPES or inner is Any:
            return StructuralDescriptor(type_id=inner)

        element = sequence_element(inner)
        if element is not None:
            return StructuralDescriptor(type_id=inner, element_type=element)

        value = mapping_value(inner)
        if value is not None:
            return StructuralDescriptor(type_id=inner, value_type=value)

        with self._lock:
            descriptor = self._descriptors.get(inner)
        if descriptor is None:
            raise UnregisteredType(type_id)
        return descriptor

    def __contains__(self, type_id: object) -> bool:
        with self._lock:
            return type_id in self._descriptors

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)

    def registered_types(self) -> list[Any]:
        """Explicitly registered record types, in registration order."""
        with self._lock:
            return list(self._descriptors)


def _dataclasses_in(type_id: Any) -> list[type]:
    """Dataclass types mentioned by ``type_id`` through optionals and containers."""
    inner, _ = unwrap_optional(type_id)
    element = sequence_element(inner)
    if element is not None:
        return _dataclasses_in(element)
    value = mapping_value(inner)
    if value is not None:
        return _dataclasses_in(value)
    if isinstance(inner, type) and dataclasses.is_dataclass(inner):
        return [inner]
    return []
