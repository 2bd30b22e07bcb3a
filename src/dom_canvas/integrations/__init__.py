"""Integrations subpackage for dom-canvas.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``recording_surface`` and ``assert_valid_snapshot`` fixtures
"""

from __future__ import annotations

__all__: list[str] = []
