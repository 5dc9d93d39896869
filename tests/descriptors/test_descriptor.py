"""Tests for StructuralDescriptor frozen dataclass and ShapeKind StrEnum.

Covers:
- ShapeKind members and string values
- fields accepted as a mapping or as pairs, stored as an ordered tuple
- duplicate field names and mixed shapes are rejected
- kind derivation (record / sequence / mapping / scalar)
- field_type lookup
- immutability
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass
from types import SimpleNamespace

import pytest

from keypath.descriptors import ShapeKind, StructuralDescriptor

# ---------------------------------------------------------------------------
# ShapeKind
# ---------------------------------------------------------------------------


class TestShapeKind:
    def test_has_exactly_four_members(self) -> None:
        assert len(list(ShapeKind)) == 4

    def test_values(self) -> None:
        assert ShapeKind.RECORD == "record"
        assert ShapeKind.SEQUENCE == "sequence"
        assert ShapeKind.MAPPING == "mapping"
        assert ShapeKind.SCALAR == "scalar"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_fields_from_mapping_keep_order(self, models: SimpleNamespace) -> None:
        descriptor = StructuralDescriptor(
            type_id=models.Nested, fields={"my_string": str, "my_vector": list[float]}
        )
        assert descriptor.fields == (("my_string", str), ("my_vector", list[float]))

    def test_fields_from_pairs(self, models: SimpleNamespace) -> None:
        descriptor = StructuralDescriptor(
            type_id=models.Nested, fields=[("my_string", str)]
        )
        assert descriptor.field_names == ("my_string",)

    def test_none_annotation_becomes_none_type(self) -> None:
        descriptor = StructuralDescriptor(type_id=object, fields={"nothing": None})
        assert descriptor.field_type("nothing") is type(None)

    def test_duplicate_field_rejected(self, models: SimpleNamespace) -> None:
        with pytest.raises(ValueError, match="duplicate field 'a'"):
            StructuralDescriptor(type_id=models.Nested, fields=[("a", int), ("a", str)])

    def test_record_and_sequence_rejected(self) -> None:
        with pytest.raises(ValueError, match="only one of fields"):
            StructuralDescriptor(type_id=list, fields={"a": int}, element_type=int)

    def test_sequence_and_mapping_rejected(self) -> None:
        with pytest.raises(ValueError, match="only one of fields"):
            StructuralDescriptor(type_id=dict, element_type=int, value_type=int)

    def test_frozen(self, models: SimpleNamespace) -> None:
        descriptor = StructuralDescriptor(type_id=models.Nested, fields={"a": int})
        with pytest.raises(FrozenInstanceError):
            descriptor.element_type = int  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Derived properties
# ---------------------------------------------------------------------------


class TestKind:
    def test_record(self, models: SimpleNamespace) -> None:
        descriptor = StructuralDescriptor(type_id=models.Nested, fields={"a": int})
        assert descriptor.kind is ShapeKind.RECORD

    def test_sequence(self) -> None:
        descriptor = StructuralDescriptor(type_id=list[int], element_type=int)
        assert descriptor.kind is ShapeKind.SEQUENCE

    def test_mapping(self) -> None:
        descriptor = StructuralDescriptor(type_id=dict[str, int], value_type=int)
        assert descriptor.kind is ShapeKind.MAPPING

    def test_scalar(self) -> None:
        assert StructuralDescriptor(type_id=int).kind is ShapeKind.SCALAR

    def test_record_without_fields(self) -> None:
        @dataclass
        class Marker:
            pass

        assert StructuralDescriptor(type_id=Marker).kind is ShapeKind.RECORD


class TestFieldLookup:
    def test_present_field(self, models: SimpleNamespace) -> None:
        descriptor = StructuralDescriptor(type_id=models.Nested, fields={"a": int})
        assert descriptor.field_type("a") is int

    def test_absent_field_is_none(self, models: SimpleNamespace) -> None:
        descriptor = StructuralDescriptor(type_id=models.Nested, fields={"a": int})
        assert descriptor.field_type("b") is None

