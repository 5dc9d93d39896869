"""Integration tests for the public API surface.

All imports are from the top-level ``keypath`` package, never from internal
submodules.  Covers the ``navigable`` decorator, ``keypath`` /
``parse_keypath`` construction, ``apply`` / ``apply_all``, and a serialized
round trip through the default registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from keypath import (
    DescriptorRegistry,
    IndexOutOfBounds,
    JsonChangeSerializer,
    KeyPathConfig,
    PathSyntaxError,
    Splice,
    UnknownField,
    UnregisteredType,
    Update,
    apply,
    apply_all,
    default_registry,
    keypath,
    navigable,
    parse_keypath,
    resolve,
)


@navigable
@dataclass
class Section:
    title: str
    lines: list[str] = field(default_factory=list)


@navigable
@dataclass
class Document:
    version: int
    tags: list[str]
    sections: list[Section] = field(default_factory=list)
    summary: Section | None = None
    metadata: dict[str, str] = field(default_factory=dict)


def make_document() -> Document:
    return Document(
        version=1,
        tags=["draft"],
        sections=[Section("Intro", ["Hello"]), Section("Body")],
    )


class TestNavigable:
    def test_registers_in_default_registry(self) -> None:
        assert Document in default_registry
        assert Section in default_registry

    def test_returns_class_unchanged(self) -> None:
        assert Document(1, []).version == 1

    def test_custom_registry(self) -> None:
        registry = DescriptorRegistry()

        @navigable(registry=registry)
        @dataclass
        class Local:
            value: int

        assert Local in registry
        assert Local not in default_registry
        path = keypath(Local, "value", registry=registry)
        assert path.target_type is int


class TestConstruction:
    def test_keypath(self) -> None:
        path = keypath(Document, "sections", 1, "title")
        assert str(path) == ".sections[1].title"
        assert path.root_type is Document
        assert path.target_type is str

    def test_identity(self) -> None:
        path = keypath(Document)
        assert path.is_identity
        assert path == parse_keypath(Document, ".")

    def test_memoised(self) -> None:
        assert keypath(Document, "tags", 0) is keypath(Document, "tags", 0)

    def test_parse_keypath(self) -> None:
        assert parse_keypath(Document, "sections[0].lines[2]") == keypath(
            Document, "sections", 0, "lines", 2
        )

    def test_unknown_field(self) -> None:
        with pytest.raises(UnknownField):
            keypath(Document, "sectoins")

    def test_syntax_error(self) -> None:
        with pytest.raises(PathSyntaxError):
            parse_keypath(Document, "sections[")

    def test_unregistered_root(self) -> None:
        @dataclass
        class Stray:
            value: int

        with pytest.raises(UnregisteredType):
            keypath(Stray, "value")

    def test_config_gives_fresh_builder(self) -> None:
        config = KeyPathConfig(max_cache_size=0)
        first = keypath(Document, "version", config=config)
        second = keypath(Document, "version", config=config)
        assert first == second
        assert first is not second


class TestApply:
    def test_update(self) -> None:
        document = make_document()
        result = apply(document, Update(keypath(Document, "version"), 2))
        assert result is document
        assert document.version == 2

    def test_splice_then_resolve(self) -> None:
        document = make_document()
        path = keypath(Document, "sections", 0, "lines")
        apply(document, Splice(path, ["World"], start=1))
        assert resolve(document, path) == ["Hello", "World"]

    def test_apply_all(self) -> None:
        document = make_document()
        changes = [
            Update(keypath(Document, "summary"), Section("TL;DR")),
            Update(parse_keypath(Document, "summary.title"), "Summary"),
            Splice(keypath(Document, "sections"), [], start=0, delete_count=1),
        ]
        result = apply_all(document, changes)
        assert result.summary == Section("Summary")
        assert [s.title for s in result.sections] == ["Body"]

    def test_failure_is_atomic(self) -> None:
        document = make_document()
        with pytest.raises(IndexOutOfBounds):
            apply(document, Update(keypath(Document, "tags", 5), "x"))
        assert document == make_document()

    def test_dict_entry(self) -> None:
        document = make_document()
        path = keypath(Document, "metadata", "owner")
        apply(document, Update(path, "docs-team"))
        assert resolve(document, path) == "docs-team"
        assert str(path) == '.metadata["owner"]'

    def test_no_copy_config(self) -> None:
        document = make_document()
        section = Section("Shared")
        change = Update(keypath(Document, "sections", 0), section)
        apply(document, change, config=KeyPathConfig(copy_payloads=False))
        assert document.sections[0] is section


class TestSerializedReplay:
    def test_changes_replayed_from_json(self) -> None:
        serializer = JsonChangeSerializer(default_registry)
        changes = [
            Update(keypath(Document, "tags", 0), "final"),
            Splice(keypath(Document, "sections"), [Section("Outro", ["Bye"])], 2),
            Update(parse_keypath(Document, 'metadata["reviewed by"]'), "ops"),
        ]
        wire = [serializer.dumps(change) for change in changes]

        local = apply_all(make_document(), changes)
        remote = apply_all(
            make_document(), [serializer.loads(text, Document) for text in wire]
        )
        assert remote == local
        assert remote.sections[-1] == Section("Outro", ["Bye"])
        assert remote.metadata == {"reviewed by": "ops"}
