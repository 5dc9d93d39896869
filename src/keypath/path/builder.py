"""PathBuilder: validated construction of KeyPaths from raw hops.

A raw hop is a ``str`` (field name or dict key) or a non-negative ``int``
(sequence index).  The builder walks a type cursor from the root type
through the registry's descriptors, one hop at a time:

- str hop on a record: the descriptor must declare that field
  (``UnknownField``), and the cursor moves to the field's declared type;
- str hop on a ``dict[str, V]``: a key hop; the cursor moves to ``V``.  The
  key itself is not checked; that happens against the real dict;
- int hop: the current type must be a sequence (``NotASequence``), and the
  cursor moves to its element type.  The index value itself is not
  range-checked; that happens against the real list at resolution time.

A hop taken from a type with no descriptor at all, such as ``"year"`` after
a field declared as ``datetime.date``, raises ``UnregisteredType``.

Construction is pure: the same root type and hops always give the same
KeyPath or the same error.  Successful results are memoised in a per-builder
LRU cache; failures are never cached.

A compact text syntax is accepted too::

    builder.parse(Test, "my_vector_of_nested[0].my_vector[2]")
    builder.parse(Test, 'labels["build id"]')
    builder.parse(Test, ".")        # identity
"""

from __future__ import annotations

import json
import logging
import re
import threading
from collections.abc import Iterable, Sequence
from typing import Any

from cachetools import LRUCache

from keypath.config import KeyPathConfig
from keypath.descriptors.registry import DescriptorRegistry
from keypath.errors import (
    NotASequence,
    PathError,
    PathSyntaxError,
    UnknownField,
)
from keypath.path.keypath import KeyPath
from keypath.path.segments import Field, Index, Key, PathSegment, SegmentKind

__all__ = ["Hop", "PathBuilder", "parse_hops"]

logger = logging.getLogger(__name__)

Hop = str | int

_FIELD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_INDEX_RE = re.compile(r"\[\s*(\d+)\s*\]")
_KEY_RE = re.compile(r'\[\s*("(?:[^"\\]|\\.)*")\s*\]')


class PathBuilder:
    """Builds KeyPaths against the descriptors of one registry.

    Example::

        builder = PathBuilder(registry)
        path = builder.build(Test, ["my_vector", 2])
        str(path)            # ".my_vector[2]"
        path.target_type     # int
    """

    def __init__(
        self,
        registry: DescriptorRegistry,
        config: KeyPathConfig | None = None,
    ) -> None:
        """Initialise the builder.

        Args:
            registry: Descriptor table used to validate every hop.
            config:   Infrastructure settings.  Only ``max_cache_size`` is
                read here.  Defaults to ``KeyPathConfig()``.
        """
        self._registry = registry
        self._config: KeyPathConfig = config if config is not None else KeyPathConfig()
        self._cache: LRUCache[tuple[Any, tuple[Hop, ...]], KeyPath] | None = (
            LRUCache(maxsize=self._config.max_cache_size)
            if self._config.max_cache_size > 0
            else None
        )
        self._lock = threading.Lock()

    @property
    def registry(self) -> DescriptorRegistry:
        return self._registry

    @property
    def cache_size(self) -> int:
        """Number of KeyPaths currently memoised."""
        if self._cache is None:
            return 0
        with self._lock:
            return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def build(self, root_type: Any, hops: Iterable[Hop] = ()) -> KeyPath:
        """Validate ``hops`` against ``root_type`` and return the KeyPath.

        Args:
            root_type: Declared type of the values the path will be applied to.
            hops:      Field names or dict keys (``str``) and indices (``int``),
                in order.

        Returns:
            The validated, immutable KeyPath.

        Raises:
            UnregisteredType: If a hop is taken from a type with no descriptor,
                e.g. a hop past a field of an unregistered class.
            UnknownField:     If a field hop names a field the current type lacks.
            NotASequence:     If an index hop is applied to a non-sequence type.
            TypeError:        If a hop is neither ``str`` nor ``int``.
            ValueError:       If an index hop is negative.
        """
        hops = tuple(hops)
        for hop in hops:
            # bool subclasses int, and True == 1 as a cache key.
            if isinstance(hop, bool) or not isinstance(hop, (str, int)):
                msg = f"key path hop must be str or int, got {hop!r}"
                raise TypeError(msg)
        key = (root_type, hops)

        if self._cache is not None:
            with self._lock:
                cached = self._cache.get(key)
            if cached is not None:
                return cached

        path = self._validate(root_type, hops)

        if self._cache is not None:
            with self._lock:
                self._cache[key] = path
        logger.debug("built key path %s", path.describe())
        return path

    def extend(self, path: KeyPath, *hops: Hop) -> KeyPath:
        """Return ``path`` followed by ``hops``, validating only the new hops."""
        suffix = self.build(path.target_type, hops)
        return path.appending(suffix)

    def field(self, path: KeyPath, name: str) -> KeyPath:
        """Return ``path`` extended by the field (or dict key) hop ``name``."""
        return self.extend(path, name)

    def at(self, path: KeyPath, position: int) -> KeyPath:
        """Return ``path`` extended by the index hop ``position``."""
        return self.extend(path, position)

    def parse(self, root_type: Any, text: str) -> KeyPath:
        """Build a KeyPath from its text form, e.g. ``"items[0].name"``.

        A leading ``.`` is optional.  ``""`` and ``"."`` are the identity path.

        Raises:
            PathSyntaxError: If ``text`` is not a well-formed path.
            PathError:       Any construction error raised by ``build``.
        """
        return self.build(root_type, parse_hops(text))

    def from_wire(self, root_type: Any, segments: Sequence[Any]) -> KeyPath:
        """Rebuild a KeyPath from ``KeyPath.to_wire()`` output, re-validating it.

        Each segment's ``type`` must agree with the hop the types call for:
        ``field`` on a record, ``stringKey`` on a dict, ``index`` on a list.

        Raises:
            PathError: If the segment list is malformed or does not validate.
        """
        hops: list[Hop] = []
        kinds: list[SegmentKind] = []
        for position, raw in enumerate(segments):
            if not isinstance(raw, dict):
                msg = f"segment {position} must be an object, got {raw!r}"
                raise PathError(msg)
            kind = raw.get("type")
            key = raw.get("key")
            if kind in (SegmentKind.FIELD, SegmentKind.KEY) and isinstance(key, str):
                hops.append(key)
            elif (
                kind == SegmentKind.INDEX
                and isinstance(key, int)
                and not isinstance(key, bool)
                and key >= 0
            ):
                hops.append(key)
            else:
                msg = f"segment {position} is not a valid path segment: {raw!r}"
                raise PathError(msg)
            kinds.append(SegmentKind(kind))

        path = self.build(root_type, hops)
        pairs = zip(path.segments, kinds, strict=True)
        for position, (segment, kind) in enumerate(pairs):
            if segment.kind is not kind:
                msg = (
                    f"segment {position} is a {kind} hop, but "
                    f"{path.prefix(position)} takes a {segment.kind} hop"
                )
                raise PathError(msg)
        return path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _validate(self, root_type: Any, hops: tuple[Hop, ...]) -> KeyPath:
        # Fail early on an unknown root, even for the identity path.
        self._registry.describe(root_type)

        cursor: Any = root_type
        segments: list[PathSegment] = []
        for hop in hops:
            segment: PathSegment
            if isinstance(hop, str):
                segment = self._name_hop(cursor, hop)
            else:
                segment = self._index_hop(cursor, hop)
            segments.append(segment)
            cursor = segment.declared_type

        return KeyPath._trusted(root_type, tuple(segments), cursor)

    def _name_hop(self, cursor: Any, name: str) -> Field | Key:
        descriptor = self._registry.describe(cursor)
        if descriptor.value_type is not None:
            return Key(name, descriptor.value_type)
        declared = descriptor.field_type(name)
        if declared is None:
            raise UnknownField(cursor, name)
        return Field(name, declared)

    def _index_hop(self, cursor: Any, position: int) -> Index:
        descriptor = self._registry.describe(cursor)
        if descriptor.element_type is None:
            raise NotASequence(cursor, position)
        # Index validates position >= 0
        return Index(position, descriptor.element_type)


def parse_hops(text: str) -> list[Hop]:
    """Split the text form of a key path into raw hops.

    ``'a.b[0][1].c["x y"]'`` -> ``["a", "b", 0, 1, "c", "x y"]``

    Bracketed keys are JSON string literals, so any dict key can be written.

    Raises:
        PathSyntaxError: On empty field names, unbalanced brackets,
            non-numeric indices, malformed keys or stray characters.
    """
    hops: list[Hop] = []
    end = len(text.rstrip())
    pos = len(text) - len(text.lstrip())
    if text[pos:end] == ".":
        return hops
    expect_field = True
    if pos < end and text[pos] == ".":
        pos += 1

    while pos < end:
        char = text[pos]
        if char == "[":
            match = _INDEX_RE.match(text, pos)
            if match is not None:
                hops.append(int(match.group(1)))
            else:
                match = _KEY_RE.match(text, pos)
                if match is None:
                    reason = 'expected [<non-negative integer>] or ["<key>"]'
                    raise PathSyntaxError(text, pos, reason)
                hops.append(_key_literal(text, pos, match.group(1)))
            pos = match.end()
            expect_field = False
        elif char == ".":
            if expect_field:
                raise PathSyntaxError(text, pos, "empty field name")
            pos += 1
            expect_field = True
            if pos >= end:
                raise PathSyntaxError(text, pos, "path ends with '.'")
        else:
            if not expect_field:
                raise PathSyntaxError(text, pos, "expected '.' or '['")
            match = _FIELD_RE.match(text, pos)
            if match is None:
                raise PathSyntaxError(text, pos, "expected a field name")
            hops.append(match.group(0))
            pos = match.end()
            expect_field = False
    return hops


def _key_literal(text: str, pos: int, literal: str) -> str:
    try:
        return str(json.loads(literal))
    except ValueError:
        raise PathSyntaxError(text, pos, "malformed key literal") from None
