"""keypath - validated key paths and changes for nested dataclass structures."""

from __future__ import annotations

import logging

from keypath.api import (
    apply,
    apply_all,
    default_registry,
    keypath,
    navigable,
    parse_keypath,
)
from keypath.changes import Change, ChangeApplier, ChangeKind, Splice, Update
from keypath.config import KeyPathConfig
from keypath.descriptors import DescriptorRegistry, ShapeKind, StructuralDescriptor
from keypath.errors import (
    DecodeError,
    IndexOutOfBounds,
    KeyPathError,
    MissingKey,
    MissingValue,
    NotASequence,
    PathError,
    PathSyntaxError,
    ResolutionError,
    SpliceOutOfBounds,
    TypeMismatch,
    UnknownField,
    UnregisteredType,
)
from keypath.mutator import apply_splice, apply_update
from keypath.navigator import resolve
from keypath.path import Field, Index, Key, KeyPath, PathBuilder, SegmentKind
from keypath.protocols import ChangeSerializer
from keypath.serializers import JsonChangeSerializer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "Change",
    "ChangeApplier",
    "ChangeKind",
    "ChangeSerializer",
    "DecodeError",
    "DescriptorRegistry",
    "Field",
    "Index",
    "IndexOutOfBounds",
    "JsonChangeSerializer",
    "Key",
    "KeyPath",
    "KeyPathConfig",
    "KeyPathError",
    "MissingKey",
    "MissingValue",
    "NotASequence",
    "PathBuilder",
    "PathError",
    "PathSyntaxError",
    "ResolutionError",
    "SegmentKind",
    "ShapeKind",
    "Splice",
    "SpliceOutOfBounds",
    "StructuralDescriptor",
    "TypeMismatch",
    "UnknownField",
    "UnregisteredType",
    "Update",
    "apply",
    "apply_all",
    "apply_splice",
    "apply_update",
    "default_registry",
    "keypath",
    "navigable",
    "parse_keypath",
    "resolve",
]
