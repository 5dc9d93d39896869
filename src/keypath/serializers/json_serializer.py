"""JsonChangeSerializer: Changes to and from JSON text.

The wire shape is a tagged object::

    {"type": "update", "keyPath": [{"type": "field", "key": "my_vector"},
                                   {"type": "index", "key": 2}],
     "value": 5}

    {"type": "splice", "keyPath": [{"type": "field", "key": "my_vector"}],
     "value": [7, 8], "start": 0, "replace": 1}

``replace`` is the splice's delete count.  The key path is rebuilt through
``PathBuilder.from_wire`` and therefore fully re-validated on decode.  Values
are encoded and strictly decoded by ``ValueCodec`` from their declared types.

This serializer satisfies the ChangeSerializer Protocol structurally.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from keypath._types import sequence_element, type_name, unwrap_optional
from keypath.changes.change import Change, ChangeKind, Splice, Update
from keypath.config import KeyPathConfig
from keypath.descriptors.registry import DescriptorRegistry
from keypath.errors import DecodeError, PathError, TypeMismatch
from keypath.path.builder import PathBuilder
from keypath.path.keypath import KeyPath
from keypath.serializers.values import ValueCodec

__all__ = ["JsonChangeSerializer"]


class JsonChangeSerializer:
    """Serializes Changes as JSON using the types declared in a registry.

    Example::

        serializer = JsonChangeSerializer(registry)
        text = serializer.dumps(Update(path, 5))
        change = serializer.loads(text, Test)    # == Update(path, 5)
    """

    def __init__(
        self,
        registry: DescriptorRegistry,
        builder: PathBuilder | None = None,
        config: KeyPathConfig | None = None,
    ) -> None:
        """Initialise the serializer.

        Args:
            registry: Descriptors used to re-validate decoded key paths.
            builder:  Builder over ``registry`` for decoded key paths.  A fresh
                ``PathBuilder(registry, config)`` when None.
            config:   Only used to create the default builder.
        """
        if builder is None:
            builder = PathBuilder(registry, config)
        self._builder = builder
        self._codec = ValueCodec()

    # ------------------------------------------------------------------
    # ChangeSerializer Protocol surface
    # ------------------------------------------------------------------

    def dumps(self, change: Change) -> str:
        """Return the JSON text of ``change``."""
        return json.dumps(self.to_patch(change))

    def loads(self, data: str | bytes, root_type: Any) -> Change:
        """Decode JSON text produced by ``dumps`` into a Change rooted at ``root_type``.

        Raises:
            DecodeError: If the text is not valid JSON, is not a change
                object, or its key path or payload does not fit ``root_type``.
        """
        try:
            patch = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            msg = f"invalid change JSON: {exc}"
            raise DecodeError(msg) from exc
        return self.from_patch(patch, root_type)

    # ------------------------------------------------------------------
    # Plain-data form
    # ------------------------------------------------------------------

    def to_patch(self, change: Change) -> dict[str, Any]:
        """Return ``change`` as a JSON-compatible dict."""
        if isinstance(change, Update):
            return {
                "type": str(ChangeKind.UPDATE),
                "keyPath": change.path.to_wire(),
                "value": self._codec.encode(change.value, change.path.target_type),
            }
        if isinstance(change, Splice):
            return {
                "type": str(ChangeKind.SPLICE),
                "keyPath": change.path.to_wire(),
                "value": self._codec.encode(
                    list(change.inserted), list[change.element_type]
                ),
                "start": change.start,
                "replace": change.delete_count,
            }
        msg = f"expected Update or Splice, got {type(change).__name__}"
        raise TypeError(msg)

    def from_patch(self, patch: Any, root_type: Any) -> Change:
        """Rebuild a Change from the dict form produced by ``to_patch``."""
        if not isinstance(patch, Mapping):
            msg = f"change must be a JSON object, got {type(patch).__name__}"
            raise DecodeError(msg)

        kind = patch.get("type")
        if kind not in (ChangeKind.UPDATE, ChangeKind.SPLICE):
            msg = f"unknown change type {kind!r}"
            raise DecodeError(msg)

        raw_path = patch.get("keyPath")
        if not isinstance(raw_path, list):
            msg = f"keyPath must be a list, got {raw_path!r}"
            raise DecodeError(msg)
        try:
            path = self._builder.from_wire(root_type, raw_path)
        except PathError as exc:
            msg = f"invalid keyPath: {exc}"
            raise DecodeError(msg) from exc

        if "value" not in patch:
            msg = f"{kind} change is missing 'value'"
            raise DecodeError(msg)

        try:
            if kind == ChangeKind.UPDATE:
                value = self._codec.decode(patch["value"], path.target_type)
                return Update(path, value)

            start = _count(patch, "start")
            replace = _count(patch, "replace")
            raw_items = patch["value"]
            if not isinstance(raw_items, list):
                msg = f"splice value must be a list, got {raw_items!r}"
                raise DecodeError(msg)
            element = _splice_element(path)
            items = self._codec.decode(raw_items, list[element])
            return Splice(path, items, start, replace)
        except TypeMismatch as exc:
            raise DecodeError(str(exc)) from exc


def _count(patch: Mapping[str, Any], key: str) -> int:
    value = patch.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"splice {key} must be a non-negative integer, got {value!r}"
        raise DecodeError(msg)
    return value


def _splice_element(path: KeyPath) -> Any:
    element = sequence_element(unwrap_optional(path.target_type)[0])
    if element is None:
        msg = f"cannot splice {path}: {type_name(path.target_type)} is not a list type"
        raise DecodeError(msg)
    return element
