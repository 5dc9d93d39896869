"""Descriptors subpackage: declared shapes of addressable types.

Re-exports the public API for the descriptors module:
- StructuralDescriptor: frozen dataclass describing one type's fields or element type
- ShapeKind: StrEnum of the four shapes (RECORD, SEQUENCE, MAPPING, SCALAR)
- DescriptorRegistry: table of descriptors consulted during path construction
- conforms: runtime check of a value against a declared type id
"""

from keypath.descriptors.conformance import conforms
from keypath.descriptors.descriptor import ShapeKind, StructuralDescriptor
from keypath.descriptors.registry import DescriptorRegistry

__all__ = ["DescriptorRegistry", "ShapeKind", "StructuralDescriptor", "conforms"]
