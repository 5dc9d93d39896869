"""Shared fixtures: sample dataclass models, a populated registry and a builder.

Models are exposed through the ``models`` fixture rather than imported, so
test modules in subdirectories need no package structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import SimpleNamespace
from typing import Any

import pytest

from keypath import DescriptorRegistry, PathBuilder

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclass
class Nested:
    my_string: str
    my_vector: list[float] = field(default_factory=list)


@dataclass
class Root:
    my_scalar: int
    my_vector: list[int]
    my_nested: Nested
    my_vector_of_nested: list[Nested] = field(default_factory=list)
    my_optional: Nested | None = None


@dataclass
class Matrix:
    rows: list[list[int]]
    label: str = ""


@dataclass
class TreeNode:
    name: str
    children: list[TreeNode] = field(default_factory=list)


@dataclass(frozen=True)
class Frozen:
    value: int


@dataclass
class Holder:
    frozen: Frozen
    payload: bytes = b""
    flag: bool = False
    ratio: float = 0.0


@dataclass
class Catalog:
    labels: dict[str, str] = field(default_factory=dict)
    entries: dict[str, Nested] = field(default_factory=dict)
    created: date | None = None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def models() -> SimpleNamespace:
    """The sample model classes."""
    return SimpleNamespace(
        Nested=Nested,
        Root=Root,
        Matrix=Matrix,
        TreeNode=TreeNode,
        Frozen=Frozen,
        Holder=Holder,
        Catalog=Catalog,
    )


@pytest.fixture
def registry() -> DescriptorRegistry:
    """A fresh registry with every sample model registered."""
    reg = DescriptorRegistry()
    for cls in (Root, Matrix, TreeNode, Holder, Catalog):
        reg.register_dataclass(cls)
    return reg


@pytest.fixture
def builder(registry: DescriptorRegistry) -> PathBuilder:
    """A PathBuilder over the sample registry."""
    return PathBuilder(registry)


@pytest.fixture
def make_root() -> Any:
    """Factory for the README-style sample root."""

    def _make() -> Root:
        return Root(
            my_scalar=1,
            my_vector=[2, 3, 4],
            my_nested=Nested(my_string="Hello", my_vector=[]),
            my_vector_of_nested=[],
        )

    return _make


@pytest.fixture
def root(make_root: Any) -> Root:
    """A fresh sample root: {my_scalar: 1, my_vector: [2, 3, 4], ...}."""
    return make_root()  # type: ignore[no-any-return]
