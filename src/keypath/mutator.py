"""Mutator: in-place writes through a KeyPath.

Both operations resolve everything they need and check every bound before
the single write that performs the edit.  If they raise, the root is
exactly as it was.

An update whose final hop is a dict key inserts the entry when it is absent;
every earlier key must already be present.

The identity path addresses the root itself.  Python cannot rebind the
caller's variable, so both functions return the root to keep using: the
same object for in-place edits, the new value for an identity update.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping, MutableSequence
from typing import Any

from keypath._types import type_name
from keypath.errors import (
    IndexOutOfBounds,
    MissingValue,
    SpliceOutOfBounds,
    TypeMismatch,
)
from keypath.navigator import resolve, resolve_parent
from keypath.path.keypath import KeyPath
from keypath.path.segments import Field, Index, Key

__all__ = ["apply_splice", "apply_update"]


def apply_update(root: Any, path: KeyPath, value: Any) -> Any:
    """Replace the value ``path`` addresses inside ``root`` with ``value``.

    Args:
        root:  A mutable value of ``path.root_type``.
        path:  A validated KeyPath.
        value: The replacement.  Stored as-is (no copy).

    Returns:
        ``root`` after the in-place write, or ``value`` for the identity path.

    Raises:
        IndexOutOfBounds: If the final or any intermediate index is past the
            end of its list.
        MissingKey:       If an intermediate dict key is absent.
        MissingValue:     If an optional value on the way is None.
        TypeMismatch:     If the root does not have the declared shape, or the
            container to write into is immutable.
    """
    if path.is_identity:
        return value

    parent = resolve_parent(root, path)
    container_path = path.prefix(len(path.segments) - 1)
    declared = container_path.target_type
    if parent is None:
        raise MissingValue(str(container_path))

    last = path.segments[-1]
    if isinstance(last, Field):
        _set_field(parent, last.name, value, path, declared)
    elif isinstance(last, Index):
        if not _is_mutable_sequence(parent):
            raise _not_writable(parent, path, declared)
        if last.position >= len(parent):
            raise IndexOutOfBounds(last.position, len(parent))
        parent[last.position] = value
    elif isinstance(last, Key):
        if not isinstance(parent, MutableMapping):
            raise _not_writable(parent, path, declared)
        parent[last.name] = value
    return root


def apply_splice(
    root: Any,
    path: KeyPath,
    inserted: Iterable[Any],
    start: int,
    delete_count: int,
) -> Any:
    """Replace ``delete_count`` elements from ``start`` in the list at ``path``.

    The elements in ``[start, start + delete_count)`` are removed and
    ``inserted`` is placed at ``start``, keeping the order of both the
    retained elements and ``inserted``.  The new length is
    ``len - delete_count + len(inserted)``.

    - ``delete_count == 0``: pure insertion.
    - empty ``inserted``: pure removal.
    - both: a no-op that still checks the bounds.

    Bounds are checked against the list's current runtime length.

    Returns:
        ``root``, edited in place.

    Raises:
        SpliceOutOfBounds: Unless ``0 <= start <= len`` and
            ``0 <= delete_count <= len - start``.
        IndexOutOfBounds / MissingKey / MissingValue: While resolving ``path``.
        TypeMismatch: If the value at ``path`` is not a mutable list.
    """
    target = resolve(root, path)
    if target is None:
        raise MissingValue(str(path))
    if not _is_mutable_sequence(target):
        raise _not_writable(target, path, path.target_type)

    length = len(target)
    if not (0 <= start <= length and 0 <= delete_count <= length - start):
        raise SpliceOutOfBounds(start, delete_count, length)

    # Materialise first so a failing iterable cannot leave a half-done edit.
    items = list(inserted)
    target[start : start + delete_count] = items
    return root


def _set_field(
    record: Any, name: str, value: Any, path: KeyPath, declared: Any
) -> None:
    if isinstance(record, MutableMapping):
        if name not in record:
            raise _not_writable(record, path, declared)
        record[name] = value
        return
    if not hasattr(record, name):
        raise _not_writable(record, path, declared)
    try:
        setattr(record, name, value)
    except AttributeError as exc:
        # frozen dataclasses raise FrozenInstanceError, an AttributeError
        msg = f"cannot write {path}: {type(record).__name__} is immutable"
        raise TypeMismatch(msg) from exc


def _is_mutable_sequence(value: Any) -> bool:
    return isinstance(value, MutableSequence) and not isinstance(value, bytearray)


def _not_writable(container: Any, path: KeyPath, declared: Any) -> TypeMismatch:
    msg = (
        f"cannot write {path}: found {type(container).__name__} where "
        f"{type_name(declared)} is declared"
    )
    return TypeMismatch(msg)
