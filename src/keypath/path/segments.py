"""PathSegment variants: one hop through a field, a list element or a dict key.

Each segment records the declared type of the value reached by taking it.
That type is fixed when the path is built; resolution trusts it and only
checks runtime bounds.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = ["Field", "Index", "Key", "PathSegment", "SegmentKind"]


class SegmentKind(StrEnum):
    """Tag of a path segment, also used as the ``type`` key on the wire.

    - FIELD -> "field"     : named record field
    - INDEX -> "index"     : position in a homogeneous list
    - KEY   -> "stringKey" : entry of a ``dict[str, V]``
    """

    FIELD = auto()
    INDEX = auto()
    KEY = "stringKey"


@dataclass(frozen=True, slots=True)
class Field:
    """Hop to the record field ``name``; reaches a value of ``declared_type``."""

    name: str
    declared_type: Any

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.FIELD

    def to_wire(self) -> dict[str, Any]:
        return {"type": str(SegmentKind.FIELD), "key": self.name}

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Index:
    """Hop to element ``position`` of a list; reaches a value of ``declared_type``."""

    position: int
    declared_type: Any

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            msg = f"index position must be an int, got {self.position!r}"
            raise TypeError(msg)
        if self.position < 0:
            msg = f"index position must be >= 0, got {self.position}"
            raise ValueError(msg)

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.INDEX

    def to_wire(self) -> dict[str, Any]:
        return {"type": str(SegmentKind.INDEX), "key": self.position}

    def __str__(self) -> str:
        return f"[{self.position}]"


@dataclass(frozen=True, slots=True)
class Key:
    """Hop to the entry ``name`` of a dict; reaches a value of ``declared_type``.

    Unlike a field, the entry need not exist: an update whose final hop is a
    key inserts it.
    """

    name: str
    declared_type: Any

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            msg = f"dict key must be a str, got {self.name!r}"
            raise TypeError(msg)

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.KEY

    def to_wire(self) -> dict[str, Any]:
        return {"type": str(SegmentKind.KEY), "key": self.name}

    def __str__(self) -> str:
        return f"[{json.dumps(self.name)}]"


# Closed sum of segment kinds.
PathSegment = Field | Index | Key
