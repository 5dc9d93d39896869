"""Public API functions for keypath.

This module provides the user-facing functions: ``keypath`` and
``parse_keypath`` for construction, ``apply`` and ``apply_all`` for changes,
and the ``navigable`` decorator that registers dataclasses.

Without an explicit ``registry`` every function uses ``default_registry``
and a shared ``PathBuilder`` over it, so successful path constructions are
memoised across calls.  Passing a ``registry`` or ``config`` creates a fresh
builder for that call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar, overload

from keypath.changes.applier import ChangeApplier
from keypath.changes.change import Change
from keypath.config import KeyPathConfig
from keypath.descriptors.registry import DescriptorRegistry
from keypath.path.builder import Hop, PathBuilder
from keypath.path.keypath import KeyPath

__all__ = [
    "apply",
    "apply_all",
    "default_registry",
    "keypath",
    "navigable",
    "parse_keypath",
]

T = TypeVar("T", bound=type)

default_registry = DescriptorRegistry()
_default_builder = PathBuilder(default_registry)


def _builder(
    registry: DescriptorRegistry | None, config: KeyPathConfig | None
) -> PathBuilder:
    if registry is None and config is None:
        return _default_builder
    return PathBuilder(registry if registry is not None else default_registry, config)


@overload
def navigable(cls: T, *, registry: DescriptorRegistry | None = None) -> T: ...


@overload
def navigable(
    cls: None = None, *, registry: DescriptorRegistry | None = None
) -> Callable[[T], T]: ...


def navigable(
    cls: T | None = None, *, registry: DescriptorRegistry | None = None
) -> T | Callable[[T], T]:
    """Class decorator registering a dataclass (and its nested dataclasses).

    Usage::

        @navigable
        @dataclass
        class Test:
            my_scalar: int
            my_vector: list[int]

        @navigable(registry=my_registry)
        @dataclass
        class Other: ...
    """
    target = registry if registry is not None else default_registry

    def decorate(klass: T) -> T:
        return target.register_dataclass(klass)

    if cls is None:
        return decorate
    return decorate(cls)


def keypath(
    root_type: Any,
    *hops: Hop,
    registry: DescriptorRegistry | None = None,
    config: KeyPathConfig | None = None,
) -> KeyPath:
    """Build a validated KeyPath from field names and indices.

    Args:
        root_type: Declared type of the roots the path will address.
        *hops:     ``str`` field names and ``int`` indices, in order.  No hops
                   gives the identity path.
        registry:  Descriptor table.  Defaults to ``default_registry``.
        config:    Builder settings.  Defaults to ``KeyPathConfig()``.

    Returns:
        The validated KeyPath, e.g. ``keypath(Test, "my_vector", 2)``.

    Raises:
        PathError: If any hop does not fit the declared shape.
    """
    return _builder(registry, config).build(root_type, hops)


def parse_keypath(
    root_type: Any,
    text: str,
    registry: DescriptorRegistry | None = None,
    config: KeyPathConfig | None = None,
) -> KeyPath:
    """Build a validated KeyPath from its text form, e.g. ``"items[0].name"``.

    Raises:
        PathSyntaxError: If ``text`` is malformed.
        PathError:       If any hop does not fit the declared shape.
    """
    return _builder(registry, config).parse(root_type, text)


def apply(root: Any, change: Change, config: KeyPathConfig | None = None) -> Any:
    """Apply one change to ``root`` and return the root to keep using.

    The returned value is ``root`` itself unless the change updates the
    identity path, in which case it is the new value.
    """
    return ChangeApplier(config=config).apply(root, change)


def apply_all(
    root: Any, changes: Iterable[Change], config: KeyPathConfig | None = None
) -> Any:
    """Apply ``changes`` in order and return the final root.

    Stops at (and re-raises) the first failure; earlier changes stay applied.
    """
    return ChangeApplier(config=config).apply_all(root, changes)
