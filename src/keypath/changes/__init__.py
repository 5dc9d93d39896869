"""Changes subpackage: edit descriptions and their application.

Re-exports the public API for the changes module:
- Update / Splice: the two Change variants
- Change: union alias of both variants
- ChangeKind: StrEnum tag of a change ("update" / "splice")
- ChangeApplier: applies changes to roots via the Mutator
"""

from keypath.changes.applier import ChangeApplier
from keypath.changes.change import Change, ChangeKind, Splice, Update

__all__ = ["Change", "ChangeApplier", "ChangeKind", "Splice", "Update"]
