"""Integrations subpackage for keypath.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via the pytest11 entry point), providing
  the ``assert_change_roundtrip`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
