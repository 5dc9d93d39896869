"""Exception hierarchy for key path construction, resolution and application.

Two families matter to callers:

- ``PathError`` is raised while *building* a KeyPath.  No KeyPath value is
  produced, so nothing downstream can ever operate on an ill-formed path.
- ``ResolutionError`` is raised while *walking* a concrete root.  Only the
  single operation is aborted; the root is left exactly as it was.

``TypeMismatch`` and ``DecodeError`` sit beside them and also subclass the
matching builtin (``TypeError`` / ``ValueError``) so generic handlers work.
"""

from __future__ import annotations

from typing import Any

from keypath._types import type_name

__all__ = [
    "DecodeError",
    "IndexOutOfBounds",
    "KeyPathError",
    "MissingKey",
    "MissingValue",
    "NotASequence",
    "PathError",
    "PathSyntaxError",
    "ResolutionError",
    "SpliceOutOfBounds",
    "TypeMismatch",
    "UnknownField",
    "UnregisteredType",
]


class KeyPathError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Construction time
# ---------------------------------------------------------------------------


class PathError(KeyPathError):
    """A hop sequence could not be validated against the root type."""


class UnknownField(PathError):
    def __init__(self, type_id: Any, field: str) -> None:
        self.type_id = type_id
        self.field = field
        super().__init__(f"type {type_name(type_id)} has no field {field!r}")


class NotASequence(PathError):
    def __init__(self, type_id: Any, position: int) -> None:
        self.type_id = type_id
        self.position = position
        super().__init__(
            f"cannot index [{position}] into non-sequence type {type_name(type_id)}"
        )


class UnregisteredType(PathError):
    def __init__(self, type_id: Any) -> None:
        self.type_id = type_id
        super().__init__(f"no structural descriptor for type {type_name(type_id)}")


class PathSyntaxError(PathError):
    def __init__(self, text: str, offset: int, reason: str) -> None:
        self.text = text
        self.offset = offset
        super().__init__(f"{reason} at offset {offset} in key path {text!r}")


# ---------------------------------------------------------------------------
# Resolution / mutation time
# ---------------------------------------------------------------------------


class ResolutionError(KeyPathError):
    """A validated path could not be followed on a concrete root."""


class IndexOutOfBounds(ResolutionError, IndexError):
    def __init__(self, position: int, length: int) -> None:
        self.position = position
        self.length = length
        super().__init__(
            f"index {position} out of bounds for sequence of length {length}"
        )


class SpliceOutOfBounds(ResolutionError, IndexError):
    def __init__(self, start: int, delete_count: int, length: int) -> None:
        self.start = start
        self.delete_count = delete_count
        self.length = length
        super().__init__(
            f"splice start={start} delete_count={delete_count} "
            f"out of bounds for sequence of length {length}"
        )


class MissingValue(ResolutionError):
    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"cannot traverse None at {location}")


class MissingKey(ResolutionError, LookupError):
    def __init__(self, key: str, location: str) -> None:
        self.key = key
        self.location = location
        super().__init__(f"no entry {key!r} in dict at {location}")


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class TypeMismatch(KeyPathError, TypeError):
    """A value, root or path does not agree with a declared type."""


class DecodeError(KeyPathError, ValueError):
    """Serialized change data is malformed or does not fit the declared types."""
