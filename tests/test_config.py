"""Tests for the KeyPathConfig frozen dataclass.

Covers:
- Default values (max_cache_size=256, validate_payloads=True, copy_payloads=True)
- Immutability (FrozenInstanceError on assignment)
- Validation: max_cache_size must be a non-negative int
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from keypath import KeyPathConfig


class TestDefaults:
    def test_max_cache_size(self) -> None:
        assert KeyPathConfig().max_cache_size == 256

    def test_validate_payloads(self) -> None:
        assert KeyPathConfig().validate_payloads is True

    def test_copy_payloads(self) -> None:
        assert KeyPathConfig().copy_payloads is True

    def test_equal_configs(self) -> None:
        assert KeyPathConfig() == KeyPathConfig()
        assert hash(KeyPathConfig()) == hash(KeyPathConfig())


class TestImmutability:
    def test_frozen(self) -> None:
        config = KeyPathConfig()
        with pytest.raises(FrozenInstanceError):
            config.max_cache_size = 1  # type: ignore[misc]


class TestValidation:
    def test_zero_cache_allowed(self) -> None:
        assert KeyPathConfig(max_cache_size=0).max_cache_size == 0

    def test_negative_cache_size(self) -> None:
        with pytest.raises(ValueError, match="max_cache_size must be >= 0"):
            KeyPathConfig(max_cache_size=-1)

    @pytest.mark.parametrize("size", [1.5, "10", True, None])
    def test_non_int_cache_size(self, size: object) -> None:
        with pytest.raises(TypeError, match="max_cache_size must be an int"):
            KeyPathConfig(max_cache_size=size)  # type: ignore[arg-type]
