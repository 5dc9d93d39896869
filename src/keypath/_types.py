"""Helpers for inspecting type ids (plain classes and ``typing`` aliases).

A type id is whatever appears in an annotation: ``int``, ``Nested``,
``list[Nested]``, ``dict[str, Nested]``, ``Nested | None``.  These helpers
hide the differences between ``types.UnionType`` and ``typing.Union`` and
between generic aliases and plain classes.
"""

from __future__ import annotations

import types
import typing
from typing import Any

NoneType = type(None)

SCALAR_TYPES: frozenset[type] = frozenset({int, float, str, bool, bytes, NoneType})


def type_name(type_id: Any) -> str:
    """Readable name for a type id, without module prefixes."""
    origin = typing.get_origin(type_id)
    if origin is typing.Union or origin is types.UnionType:
        return " | ".join(type_name(arg) for arg in typing.get_args(type_id))
    if origin is not None:
        args = ", ".join(type_name(arg) for arg in typing.get_args(type_id))
        return f"{type_name(origin)}[{args}]"
    if type_id is NoneType:
        return "None"
    if isinstance(type_id, type):
        return type_id.__qualname__
    return repr(type_id)


def unwrap_optional(type_id: Any) -> tuple[Any, bool]:
    """Split ``T | None`` into ``(T, True)``; anything else is ``(type_id, False)``.

    Unions of more than one non-None member are returned unchanged: they are
    not addressable.
    """
    origin = typing.get_origin(type_id)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(type_id) if arg is not NoneType]
        if len(members) == 1 and len(typing.get_args(type_id)) == 2:
            return members[0], True
    return type_id, False


def sequence_element(type_id: Any) -> Any | None:
    """Element type of ``list[E]``, or None for anything that is not a list alias."""
    if typing.get_origin(type_id) is list:
        args = typing.get_args(type_id)
        return args[0] if args else Any
    return None


def mapping_value(type_id: Any) -> Any | None:
    """Value type of ``dict[str, V]``, or None for anything else.

    Only string-keyed dicts are addressable; ``dict[int, V]`` is not.
    """
    if typing.get_origin(type_id) is dict:
        args = typing.get_args(type_id)
        if not args:
            return Any
        if args[0] is str:
            return args[1]
    return None


def runtime_class(type_id: Any) -> type | None:
    """The class an instance of ``type_id`` is expected to be, if there is one."""
    inner, _ = unwrap_optional(type_id)
    origin = typing.get_origin(inner)
    if origin is not None:
        return origin if isinstance(origin, type) else None
    return inner if isinstance(inner, type) else None
