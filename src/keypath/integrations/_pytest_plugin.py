"""pytest plugin for keypath.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from keypath import (
    Change,
    DescriptorRegistry,
    JsonChangeSerializer,
    apply,
    default_registry,
)


@pytest.fixture(scope="session")
def assert_change_roundtrip() -> Any:
    """Fixture that returns a callable asserting a Change survives serialization.

    The fixture is session-scoped because the returned callable is stateless
    (it creates a fresh JsonChangeSerializer per call).

    Usage in tests::

        def test_rename(assert_change_roundtrip):
            change = Update(keypath(Test, "my_vector", 2), 5)
            assert_change_roundtrip(change, root=make_test())

    Returns:
        A callable ``_assert(change, root=None, registry=None) -> Change``
        that raises ``AssertionError`` when the decoded change differs from
        ``change``, or (when ``root`` is given) when applying the decoded
        change to a deep copy of ``root`` gives a different result than
        applying the original.  The decoded change is returned.
    """

    def _assert(
        change: Change,
        root: Any = None,
        registry: DescriptorRegistry | None = None,
    ) -> Change:
        """Serialize, deserialize and compare ``change``.

        Args:
            change:   The change under test.
            root:     Optional root to apply both changes to (deep-copied;
                      never mutated).
            registry: Descriptor table.  Defaults to ``default_registry``.

        Raises:
            AssertionError: With the wire text and both changes when they
                differ, or both resulting roots when their application differs.
        """
        serializer = JsonChangeSerializer(
            registry if registry is not None else default_registry
        )
        wire = serializer.dumps(change)
        decoded = serializer.loads(wire, change.path.root_type)
        if decoded != change:
            raise AssertionError(
                f"change did not survive serialization\n"
                f"  wire:     {wire}\n"
                f"  original: {change!r}\n"
                f"  decoded:  {decoded!r}"
            )

        if root is not None:
            expected = apply(copy.deepcopy(root), change)
            actual = apply(copy.deepcopy(root), decoded)
            if actual != expected:
                raise AssertionError(
                    f"decoded change applied differently\n"
                    f"  wire:     {wire}\n"
                    f"  expected: {expected!r}\n"
                    f"  actual:   {actual!r}"
                )
        return decoded

    return _assert
