"""ChangeApplier: drives the Mutator to perform a Change on a root value.

A change either fully applies or leaves the root unchanged.  Type agreement
between the change and the root is guaranteed when the Change is built;
here it is only re-affirmed with a cheap ``isinstance`` check on the root
(and, when configured, a re-check of the payload), never by re-validating
the path.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from keypath._types import runtime_class, type_name
from keypath.changes.change import Change, Splice, Update
from keypath.config import KeyPathConfig
from keypath.descriptors.conformance import conforms
from keypath.errors import TypeMismatch
from keypath.mutator import apply_splice, apply_update

__all__ = ["ChangeApplier"]

logger = logging.getLogger(__name__)


class ChangeApplier:
    """Applies Update and Splice changes to mutable roots.

    Example::

        applier = ChangeApplier()
        root = applier.apply(root, Update(path, 5))

    Always use the returned root: it is the same object unless the change
    targets the identity path.
    """

    def __init__(self, config: KeyPathConfig | None = None) -> None:
        """Initialise the applier.

        Args:
            config: ``validate_payloads`` and ``copy_payloads`` are read here.
                Defaults to ``KeyPathConfig()``.
        """
        self._config: KeyPathConfig = config if config is not None else KeyPathConfig()

    @property
    def config(self) -> KeyPathConfig:
        return self._config

    def apply(self, root: Any, change: Change) -> Any:
        """Apply ``change`` to ``root`` and return the root to keep using.

        Raises:
            TypeMismatch:      If ``root`` is not an instance of the change's
                root type, or the payload no longer fits the target type.
            ResolutionError:   Any error from resolving or splicing; ``root``
                is left unchanged.
        """
        self._check_root(root, change)
        if self._config.validate_payloads:
            self._check_payload(change)

        logger.debug("applying %s at %s", change.kind, change.path.describe())

        if isinstance(change, Update):
            return apply_update(root, change.path, self._payload(change.value))
        if isinstance(change, Splice):
            items = self._payload(list(change.inserted))
            return apply_splice(
                root, change.path, items, change.start, change.delete_count
            )
        msg = f"expected Update or Splice, got {type(change).__name__}"
        raise TypeError(msg)

    def apply_all(self, root: Any, changes: Iterable[Change]) -> Any:
        """Apply ``changes`` in order and return the final root.

        Stops at the first failing change and re-raises its error.  Changes
        before it remain applied; the failing one left the root untouched.
        """
        for change in changes:
            root = self.apply(root, change)
        return root

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _payload(self, value: Any) -> Any:
        return copy.deepcopy(value) if self._config.copy_payloads else value

    @staticmethod
    def _check_root(root: Any, change: Change) -> None:
        root_type = change.path.root_type
        cls = runtime_class(root_type)
        if cls is not None and not isinstance(root, cls):
            msg = (
                f"{change.kind} change is rooted at {type_name(root_type)}, "
                f"but was applied to a {type(root).__name__}"
            )
            raise TypeMismatch(msg)

    @staticmethod
    def _check_payload(change: Change) -> None:
        path = change.path
        if isinstance(change, Update):
            if not conforms(change.value, path.target_type):
                msg = (
                    f"update value {change.value!r} no longer matches "
                    f"{type_name(path.target_type)} at {path}"
                )
                raise TypeMismatch(msg)
        elif isinstance(change, Splice):
            element = change.element_type
            for item in change.inserted:
                if not conforms(item, element):
                    msg = (
                        f"inserted element {item!r} no longer matches "
                        f"{type_name(element)} at {path}"
                    )
                    raise TypeMismatch(msg)
