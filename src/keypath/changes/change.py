"""Change variants: serializable descriptions of a single edit.

- ``Update(path, value)``: replace the value at ``path`` with ``value``.
- ``Splice(path, inserted, start, delete_count)``: replace the sub-range
  ``[start, start + delete_count)`` of the list at ``path`` with ``inserted``.

A Change is decoupled from applying it, so changes can be logged, sent
elsewhere, batched and replayed.  Payloads are checked against the path's
declared target type when the Change is created; a Change whose payload
does not fit its path cannot be constructed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from keypath._types import sequence_element, type_name, unwrap_optional
from keypath.descriptors.conformance import conforms
from keypath.errors import TypeMismatch
from keypath.path.keypath import KeyPath

__all__ = ["Change", "ChangeKind", "Splice", "Update"]


class ChangeKind(StrEnum):
    """Tag of a Change, also used as the ``type`` key on the wire."""

    UPDATE = auto()
    SPLICE = auto()


@dataclass(frozen=True, slots=True)
class Update:
    """Replace the value at ``path`` with ``value``.

    Attributes:
        path:  Where to write.  May be the identity path.
        value: The new value; must conform to ``path.target_type``.

    Raises:
        TypeMismatch: On construction, if ``value`` does not fit the path.
    """

    path: KeyPath
    value: Any

    def __post_init__(self) -> None:
        if not conforms(self.value, self.path.target_type):
            msg = (
                f"update value {self.value!r} does not match "
                f"{type_name(self.path.target_type)} at {self.path}"
            )
            raise TypeMismatch(msg)

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.UPDATE

    def rebase(self, base: KeyPath) -> Update:
        """Re-anchor this change below ``base`` (``base.target_type`` == our root)."""
        return Update(base.appending(self.path), self.value)


@dataclass(frozen=True, slots=True)
class Splice:
    """Replace ``delete_count`` elements at ``start`` of the list at ``path``.

    Attributes:
        path:         Path to a ``list[E]``.
        inserted:     Elements to insert, each conforming to ``E``.  Any
                      iterable is accepted; it is stored as a tuple.
        start:        First position to replace, >= 0.
        delete_count: Number of elements to remove, >= 0.

    Bounds against the list's actual length are only known when applying.

    Raises:
        TypeMismatch: If ``path`` does not end at a list, or an inserted
            element does not fit the element type.
        ValueError:   If ``start`` or ``delete_count`` is negative.
    """

    path: KeyPath
    inserted: tuple[Any, ...]
    start: int = 0
    delete_count: int = 0

    def __post_init__(self) -> None:
        element = self.element_type
        if element is None:
            msg = (
                f"cannot splice {self.path}: "
                f"{type_name(self.path.target_type)} is not a list type"
            )
            raise TypeMismatch(msg)

        inserted = tuple(_as_iterable(self.inserted))
        object.__setattr__(self, "inserted", inserted)
        for position, item in enumerate(inserted):
            if not conforms(item, element):
                msg = (
                    f"inserted element {position} ({item!r}) does not match "
                    f"{type_name(element)} at {self.path}"
                )
                raise TypeMismatch(msg)

        for name in ("start", "delete_count"):
            number = getattr(self, name)
            if isinstance(number, bool) or not isinstance(number, int):
                msg = f"{name} must be an int, got {number!r}"
                raise TypeError(msg)
            if number < 0:
                msg = f"{name} must be >= 0, got {number}"
                raise ValueError(msg)

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.SPLICE

    @property
    def element_type(self) -> Any | None:
        """Declared element type of the target list, or None if it is not a list."""
        return sequence_element(unwrap_optional(self.path.target_type)[0])

    def rebase(self, base: KeyPath) -> Splice:
        """Re-anchor this change below ``base`` (``base.target_type`` == our root)."""
        return Splice(
            base.appending(self.path), self.inserted, self.start, self.delete_count
        )


# Closed sum of change kinds.
Change = Update | Splice


def _as_iterable(value: Any) -> Iterable[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        msg = f"inserted must be an iterable of elements, got {value!r}"
        raise TypeError(msg)
    return value
