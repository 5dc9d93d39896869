"""Runtime conformance of values to declared type ids.

Used to raise ``TypeMismatch`` before anything is written.  The check is
shallow for records (``isinstance``) and element-wise for lists and dicts.
"""

from __future__ import annotations

from typing import Any

from keypath._types import (
    NoneType,
    mapping_value,
    runtime_class,
    sequence_element,
    unwrap_optional,
)

__all__ = ["conforms"]


def conforms(value: Any, type_id: Any) -> bool:
    """Return True if ``value`` may be stored where ``type_id`` is declared.

    Rules:
        - ``Any`` accepts everything.
        - ``T | None`` accepts None or anything ``T`` accepts.
        - bool is checked before int: ``True`` is NOT an ``int`` here, even
          though ``isinstance(True, int)`` holds in Python.
        - ``float`` accepts ``int`` (the usual numeric promotion).
        - ``list[E]`` requires a list whose every element conforms to ``E``.
        - ``dict[str, V]`` requires a dict with str keys and conforming values.
        - Any other class is an ``isinstance`` check.
    """
    if type_id is Any:
        return True

    inner, optional = unwrap_optional(type_id)
    if optional:
        return value is None or conforms(value, inner)

    if inner is NoneType:
        return value is None
    # bool subclasses int
    if isinstance(value, bool):
        return inner is bool
    if inner is float:
        return isinstance(value, (int, float))

    element = sequence_element(inner)
    if element is not None:
        if not isinstance(value, list):
            return False
        return all(conforms(item, element) for item in value)

    value_type = mapping_value(inner)
    if value_type is not None:
        if not isinstance(value, dict):
            return False
        return all(
            isinstance(key, str) and conforms(item, value_type)
            for key, item in value.items()
        )

    cls = runtime_class(inner)
    if cls is None:
        return False
    return isinstance(value, cls)
