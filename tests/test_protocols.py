"""Tests for ChangeSerializer Protocol conformance.

Verifies that:
- User-defined classes with conformant ``dumps``/``loads`` satisfy the Protocol.
- Classes missing either method do not satisfy it.
- JsonChangeSerializer satisfies the Protocol structurally without inheritance.
"""

from __future__ import annotations

import pickle
from typing import Any

from keypath import Change, ChangeSerializer, DescriptorRegistry, JsonChangeSerializer


class _PickleSerializer:
    """Minimal user-defined serializer conforming to ChangeSerializer."""

    def dumps(self, change: Change) -> bytes:
        return pickle.dumps(change)

    def loads(self, data: bytes, root_type: Any) -> Change:
        return pickle.loads(data)  # type: ignore[no-any-return]


class _DumpsOnly:
    """Class with no loads method; should NOT satisfy the Protocol."""

    def dumps(self, change: Change) -> str:
        return repr(change)


class _WrongNames:
    """Class with wrong method names; should NOT satisfy the Protocol."""

    def encode(self, change: Change) -> str:
        return repr(change)

    def decode(self, data: str, root_type: Any) -> Change:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Positive conformance tests
# ---------------------------------------------------------------------------


def test_user_defined_serializer_passes_isinstance() -> None:
    assert isinstance(_PickleSerializer(), ChangeSerializer) is True


def test_json_serializer_satisfies_protocol() -> None:
    serializer = JsonChangeSerializer(DescriptorRegistry())
    assert isinstance(serializer, ChangeSerializer) is True


def test_json_serializer_does_not_inherit() -> None:
    assert ChangeSerializer not in JsonChangeSerializer.__mro__


# ---------------------------------------------------------------------------
# Negative conformance tests
# ---------------------------------------------------------------------------


def test_missing_loads_fails_isinstance() -> None:
    assert isinstance(_DumpsOnly(), ChangeSerializer) is False


def test_wrong_method_names_fail_isinstance() -> None:
    assert isinstance(_WrongNames(), ChangeSerializer) is False


def test_plain_object_fails_isinstance() -> None:
    assert isinstance(object(), ChangeSerializer) is False
