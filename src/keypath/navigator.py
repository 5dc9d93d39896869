"""Navigator: read-only resolution of a KeyPath against a concrete root.

Resolution walks the path's segments from the root:

- Field: attribute access on the current record (item access when the
  record is a Mapping, e.g. a registered TypedDict);
- Index: bounds check against the real list length, then element access;
- Key: lookup in the current dict; an absent key raises ``MissingKey``.

It is all-or-nothing (an error means no value) and never touches the root,
so concurrent resolutions on an unmutated root are safe.  The returned value
is the object stored in the root, not a copy.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from keypath._types import type_name
from keypath.errors import IndexOutOfBounds, MissingKey, MissingValue, TypeMismatch
from keypath.path.keypath import KeyPath
from keypath.path.segments import Field, Index, Key, PathSegment

__all__ = ["resolve", "resolve_parent", "step"]


def resolve(root: Any, path: KeyPath) -> Any:
    """Return the value ``path`` addresses inside ``root``.

    Args:
        root: A value of ``path.root_type``.
        path: A validated KeyPath.

    Returns:
        The addressed value itself (``root`` for the identity path).

    Raises:
        IndexOutOfBounds: If an index hop is past the end of its list.
        MissingKey:       If a key hop names an entry the dict lacks.
        MissingValue:     If an optional value on the way is None.
        TypeMismatch:     If ``root`` does not have the declared shape.
    """
    return _walk(root, path, len(path.segments))


def resolve_parent(root: Any, path: KeyPath) -> Any:
    """Return the container holding the value ``path`` addresses.

    For a one-hop path this is ``root``.  The identity path has no parent.

    Raises:
        ValueError: For the identity path.
        ResolutionError / TypeMismatch: As for ``resolve``.
    """
    if path.is_identity:
        msg = "the identity path has no parent container"
        raise ValueError(msg)
    return _walk(root, path, len(path.segments) - 1)


def step(current: Any, segment: PathSegment, path: KeyPath, depth: int) -> Any:
    """Take one hop from ``current``.

    ``depth`` is the position of ``segment`` in ``path``, used for error
    messages.
    """
    if current is None:
        raise MissingValue(str(path.prefix(depth)))

    if isinstance(segment, Field):
        if isinstance(current, Mapping):
            if segment.name not in current:
                raise _shape_error(current, path, depth)
            return current[segment.name]
        try:
            return getattr(current, segment.name)
        except AttributeError:
            raise _shape_error(current, path, depth) from None

    if isinstance(segment, Index):
        if not _is_sequence(current):
            raise _shape_error(current, path, depth)
        if segment.position >= len(current):
            raise IndexOutOfBounds(segment.position, len(current))
        return current[segment.position]

    if isinstance(segment, Key):
        if not isinstance(current, Mapping):
            raise _shape_error(current, path, depth)
        if segment.name not in current:
            raise MissingKey(segment.name, str(path.prefix(depth)))
        return current[segment.name]

    msg = f"unsupported path segment {segment!r}"
    raise TypeError(msg)


def _walk(root: Any, path: KeyPath, length: int) -> Any:
    current = root
    for depth, segment in enumerate(path.segments[:length]):
        current = step(current, segment, path, depth)
    return current


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _shape_error(current: Any, path: KeyPath, depth: int) -> TypeMismatch:
    segment = path.segments[depth]
    declared = path.prefix(depth).target_type
    msg = (
        f"value at {path.prefix(depth)} is a {type(current).__name__}, "
        f"which does not match declared {type_name(declared)} "
        f"(cannot take hop {segment})"
    )
    return TypeMismatch(msg)
