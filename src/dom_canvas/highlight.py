"""HighlightSlot: single-slot lease on a live node's background style.

The live source tree is read-only except for this side channel.  The slot
holds at most one node; taking a new node first restores the previous one to
the background value it had before it was highlighted.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

__all__ = ["HighlightSlot"]

BACKGROUND_KEY = "background-color"

_UNSET = object()


class HighlightSlot:
    """Holds the currently highlighted live node and its saved background.

    Nodes are expected to expose a mutable ``style`` mapping.  Nodes without
    one are skipped (the slot stays empty) rather than rejected.

    Args:
        color: Background value applied to the held node.
    """

    def __init__(self, color: str) -> None:
        self._color = color
        self._node: Any = None
        self._saved: Any = _UNSET

    @property
    def current(self) -> Any:
        """The node currently holding the highlight, or None."""
        return self._node

    def apply(self, node: Any) -> bool:
        """Move the highlight to ``node``.

        Returns:
            True when ``node`` now holds the highlight.
        """
        if node is self._node and node is not None:
            return True
        self.release()

        style = _style_of(node)
        if style is None:
            return False
        self._saved = style.get(BACKGROUND_KEY, _UNSET)
        style[BACKGROUND_KEY] = self._color
        self._node = node
        return True

    def release(self) -> None:
        """Restore the held node's prior background and empty the slot."""
        if self._node is None:
            return
        style = _style_of(self._node)
        if style is not None:
            if self._saved is _UNSET:
                style.pop(BACKGROUND_KEY, None)
            else:
                style[BACKGROUND_KEY] = self._saved
        self._node = None
        self._saved = _UNSET


def _style_of(node: Any) -> MutableMapping[str, str] | None:
    style = getattr(node, "style", None)
    if isinstance(style, MutableMapping):
        return style
    return None
