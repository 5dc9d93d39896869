"""Tests for conforms(): runtime values against declared type ids."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from keypath.descriptors import conforms


class TestScalars:
    @pytest.mark.parametrize(
        ("value", "type_id"),
        [(1, int), (1.5, float), (2, float), ("x", str), (b"x", bytes), (True, bool)],
    )
    def test_accepts(self, value: Any, type_id: Any) -> None:
        assert conforms(value, type_id)

    @pytest.mark.parametrize(
        ("value", "type_id"),
        [("1", int), (1.5, int), (1, str), (None, int), (b"x", str)],
    )
    def test_rejects(self, value: Any, type_id: Any) -> None:
        assert not conforms(value, type_id)

    def test_bool_is_not_an_int(self) -> None:
        # isinstance(True, int) is True in Python; a declared int must not take it
        assert not conforms(True, int)
        assert not conforms(False, float)

    def test_none_type(self) -> None:
        assert conforms(None, type(None))
        assert not conforms(0, type(None))

    def test_any_accepts_everything(self) -> None:
        assert conforms(object(), Any)


class TestContainers:
    def test_list_elements_checked(self) -> None:
        assert conforms([1, 2], list[int])
        assert not conforms([1, "2"], list[int])
        assert not conforms((1, 2), list[int])

    def test_empty_list(self) -> None:
        assert conforms([], list[str])

    def test_nested_lists(self) -> None:
        assert conforms([[1], []], list[list[int]])
        assert not conforms([1], list[list[int]])

    def test_dict_values_checked(self) -> None:
        assert conforms({"a": 1, "b": 2}, dict[str, int])
        assert conforms({}, dict[str, int])
        assert not conforms({"a": "1"}, dict[str, int])
        assert not conforms([("a", 1)], dict[str, int])

    def test_dict_keys_must_be_strings(self) -> None:
        assert not conforms({1: 1}, dict[str, int])

    def test_dict_of_lists(self) -> None:
        assert conforms({"a": [1], "b": []}, dict[str, list[int]])
        assert not conforms({"a": [1.5]}, dict[str, list[int]])


class TestRecordsAndOptionals:
    def test_record_isinstance(self, models: SimpleNamespace) -> None:
        assert conforms(models.Nested("a"), models.Nested)
        assert not conforms(models.Frozen(1), models.Nested)

    def test_optional(self, models: SimpleNamespace) -> None:
        assert conforms(None, models.Nested | None)
        assert conforms(models.Nested("a"), models.Nested | None)
        assert not conforms(3, models.Nested | None)
