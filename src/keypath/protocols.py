"""ChangeSerializer Protocol: the extension point for carrying Changes across processes.

Defines the structural interface every serializer must satisfy.  Users can
plug in their own wire format without inheriting from any base class: any
class with conformant ``dumps`` and ``loads`` methods passes ``isinstance``
checks.

Example::

    from keypath.protocols import ChangeSerializer

    class PickleSerializer:
        def dumps(self, change: Change) -> bytes:
            return pickle.dumps(change)

        def loads(self, data: bytes, root_type: Any) -> Change:
            return pickle.loads(data)

    assert isinstance(PickleSerializer(), ChangeSerializer)  # structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from keypath.changes.change import Change


@runtime_checkable
class ChangeSerializer(Protocol):
    """Structural protocol for Change serializers.

    ``loads`` receives the root type the decoded change must be anchored at,
    because the wire form does not carry Python types.  Implementations must
    re-validate the key path on decode so that no ill-formed KeyPath is ever
    produced from untrusted input.
    """

    def dumps(self, change: Change) -> str | bytes: ...

    def loads(self, data: str | bytes, root_type: Any) -> Change: ...
