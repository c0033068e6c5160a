"""Mixin that ties Node watches and projections to a widget's lifetime."""

from __future__ import annotations

from typing import Any, Callable

from novaticket.model.node import Callback, ListNode, Node
from novaticket.sync import TicketProjection


class NodeWatcherMixin:
    """Mixin for screens and widgets that follow model changes.

    Subclasses should:
    - Call ``_init_watcher()`` in ``__init__``
    - Use ``self.node_watch(node, key, callback)`` instead of ``node.watch(...)``
    - Use ``self.follow(projection)`` to attach a projection
    - Skip writing ``on_unmount`` -- the mixin handles cleanup
    """

    def _init_watcher(self) -> None:
        self._unwatches: list[Callable[[], None]] = []
        self._projections: list[TicketProjection] = []

    def node_watch(self, node: Node | ListNode, key: str, callback: Callback) -> None:
        """Register a watch that is removed on unmount."""

        def guarded(source_node: Any, key: str, old: Any, new: Any) -> None:
            if self._watch_live():
                callback(source_node, key, old, new)

        self._unwatches.append(node.watch(key, guarded))

    def _watch_live(self) -> bool:
        """Whether watch callbacks should run now."""
        return self.is_attached

    def follow(self, projection: TicketProjection) -> TicketProjection:
        """Attach projection now and detach it on unmount."""
        projection.attach()
        self._projections.append(projection)
        return projection

    def on_unmount(self) -> None:
        for unwatch in self._unwatches:
            unwatch()
        self._unwatches.clear()
        for projection in self._projections:
            projection.detach()
        self._projections.clear()
