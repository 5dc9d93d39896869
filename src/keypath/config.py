"""KeyPathConfig: immutable knobs shared by the builder, applier and api.

KeyPathConfig is a frozen (immutable) dataclass.  It governs infrastructure
behaviour only; it never changes which paths are valid or what a change
means.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["KeyPathConfig"]


@dataclass(frozen=True, slots=True)
class KeyPathConfig:
    """Immutable configuration for path construction and change application.

    Attributes:
        max_cache_size: Number of validated KeyPaths each ``PathBuilder``
            memoises (LRU).  ``0`` disables memoisation.  Must be >= 0.
        validate_payloads: When True, ``ChangeApplier`` re-checks the change
            payload against the path's target type before mutating.  The
            check already runs when the change is constructed; this repeats it
            for changes whose payload objects were mutated afterwards.
        copy_payloads: When True, payload values are deep-copied on apply so
            the same Change can be applied to many roots without those roots
            sharing mutable sub-objects.
    """

    max_cache_size: int = 256
    validate_payloads: bool = True
    copy_payloads: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_cache_size, bool) or not isinstance(
            self.max_cache_size, int
        ):
            msg = f"max_cache_size must be an int, got {self.max_cache_size!r}"
            raise TypeError(msg)
        if self.max_cache_size < 0:
            msg = f"max_cache_size must be >= 0, got {self.max_cache_size}"
            raise ValueError(msg)
