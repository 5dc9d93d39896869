"""KeyPath: a validated, immutable address inside values of one root type.

A KeyPath is only ever produced by ``PathBuilder`` (or derived from another
KeyPath by ``appending``/``parent``, which preserve validity).  Constructing
one directly raises ``TypeError``, so an ill-formed path never exists as a
value.  The same KeyPath can be reused against any number of roots and
shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from keypath._types import type_name, unwrap_optional
from keypath.errors import TypeMismatch
from keypath.path.segments import Field, PathSegment

__all__ = ["KeyPath"]

# Handed to KeyPath() by code that has validated the segments.
_VALIDATED = object()


@dataclass(frozen=True, slots=True)
class KeyPath:
    """Path from ``root_type`` to a nested value of ``target_type``.

    Attributes:
        root_type:   The declared type of the value the path starts from.
        segments:    Ordered hops.  Empty for the identity path.
        target_type: Declared type at the end of the path; ``root_type`` for
                     the identity path.
    """

    root_type: Any
    segments: tuple[PathSegment, ...]
    target_type: Any
    _token: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._token is not _VALIDATED:
            msg = "KeyPath values are created by PathBuilder, not constructed directly"
            raise TypeError(msg)
        object.__setattr__(self, "_token", None)

    @classmethod
    def _trusted(
        cls, root_type: Any, segments: tuple[PathSegment, ...], target_type: Any
    ) -> KeyPath:
        return cls(root_type, segments, target_type, _VALIDATED)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_identity(self) -> bool:
        return not self.segments

    @property
    def last(self) -> PathSegment | None:
        return self.segments[-1] if self.segments else None

    @property
    def parent(self) -> KeyPath | None:
        """This path without its final hop, or None for the identity path."""
        if not self.segments:
            return None
        return self.prefix(len(self.segments) - 1)

    def prefix(self, length: int) -> KeyPath:
        """The path made of the first ``length`` segments."""
        if not 0 <= length <= len(self.segments):
            msg = f"prefix length must be in [0, {len(self.segments)}], got {length}"
            raise ValueError(msg)
        segments = self.segments[:length]
        target = segments[-1].declared_type if segments else self.root_type
        return KeyPath._trusted(self.root_type, segments, target)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        # .my_vector_of_nested[0].my_string
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, Field):
                parts.append(f".{segment}")
            else:
                parts.append(str(segment))
        return "".join(parts) or "."

    def describe(self) -> str:
        """``str(self)`` qualified with the declared root and target types."""
        return f"{type_name(self.root_type)}:{self} -> {type_name(self.target_type)}"

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def appending(self, other: KeyPath) -> KeyPath:
        """Return ``self`` followed by ``other``.

        Raises:
            TypeMismatch: If ``other`` is not rooted at this path's target type.
        """
        if not _same_type(other.root_type, self.target_type):
            msg = (
                f"cannot append a path rooted at {type_name(other.root_type)} "
                f"to a path ending at {type_name(self.target_type)}"
            )
            raise TypeMismatch(msg)
        return KeyPath._trusted(
            self.root_type, self.segments + other.segments, other.target_type
        )

    def prepending(self, base: KeyPath) -> KeyPath:
        """Return ``base`` followed by ``self``."""
        return base.appending(self)

    def is_subpath_of(self, other: KeyPath) -> bool:
        """True when ``other`` addresses something strictly inside ``self``.

        Equal paths are not subpaths of each other.
        """
        if not _same_type(self.root_type, other.root_type):
            return False
        if len(other.segments) <= len(self.segments):
            return False
        return other.segments[: len(self.segments)] == self.segments

    def to_wire(self) -> list[dict[str, Any]]:
        """Segments as plain dicts, e.g. ``[{"type": "field", "key": "a"}]``."""
        return [segment.to_wire() for segment in self.segments]


def _same_type(a: Any, b: Any) -> bool:
    return a == b or unwrap_optional(a)[0] == unwrap_optional(b)[0]
