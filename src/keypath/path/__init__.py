"""Path subpackage: segments, KeyPath and its validated construction.

Re-exports the public API for the path module:
- Field / Index / Key: the three PathSegment variants
- SegmentKind: StrEnum tag of a segment ("field" / "index" / "stringKey")
- KeyPath: immutable, validated address of a nested value
- PathBuilder: builds KeyPaths from raw hops or text against a DescriptorRegistry
"""

from keypath.path.builder import Hop, PathBuilder, parse_hops
from keypath.path.keypath import KeyPath
from keypath.path.segments import Field, Index, Key, PathSegment, SegmentKind

__all__ = [
    "Field",
    "Hop",
    "Index",
    "Key",
    "KeyPath",
    "PathBuilder",
    "PathSegment",
    "SegmentKind",
    "parse_hops",
]
