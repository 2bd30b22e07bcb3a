"""MutationBridge: wires a live tree's change notifications to a controller.

The controller only exposes ``on_structural_change()``; deciding when to
subscribe and unsubscribe is the bridge's job.  The observed target must
offer ``observe(callback) -> unsubscribe`` (``dom_canvas.document.Document``
does), covering child-list changes anywhere in its subtree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dom_canvas.controller import InteractionController

__all__ = ["MutationBridge"]

logger = logging.getLogger(__name__)


class MutationBridge:
    """Subscribes ``controller.on_structural_change`` to ``target``.

    Usable as a context manager::

        with MutationBridge(document, view):
            document.body.append_child(Element("div"))   # view rebuilds
    """

    def __init__(self, target: Any, controller: InteractionController) -> None:
        self._target = target
        self._controller = controller
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def connected(self) -> bool:
        return self._unsubscribe is not None

    def connect(self) -> None:
        """Start forwarding notifications.  No-op when already connected."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self._target.observe(self._controller.on_structural_change)
        logger.debug("Observing %r", self._target)

    def disconnect(self) -> None:
        """Stop forwarding notifications.  No-op when not connected."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        logger.debug("Stopped observing %r", self._target)

    def __enter__(self) -> MutationBridge:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()
