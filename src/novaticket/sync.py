"""Change broadcasting and reload-on-signal projections.

Mutations persist first, then SyncBroadcaster.notify() signals:
  1. in-process: a topic bump on the broadcaster's signal Node
  2. cross-context: a StorageEvent announced to every other context
Projections reload the whole collection from storage on either signal.
Other processes sharing a directory partition see writes via StoragePoller.
"""

import asyncio
import logging
from typing import Callable

from novaticket.constants import SESSION_KEY, TICKETS_KEY, TOPIC_SESSION, TOPIC_TICKETS
from novaticket.model.node import ListNode, Node
from novaticket.model.store import TicketStore
from novaticket.model.ticket import Ticket
from novaticket.storage import StorageContext, StorageEvent

logger = logging.getLogger(__name__)

KEY_TOPICS = {
    TICKETS_KEY: TOPIC_TICKETS,
    SESSION_KEY: TOPIC_SESSION,
}


class SyncBroadcaster:
    """Typed pub/sub for one storage context.

    Subscribers receive only the topic name; they are expected to re-read
    storage rather than trust any payload.
    """

    def __init__(self, context: StorageContext) -> None:
        self.context = context
        self.signals = Node()

    def subscribe(self, topic: str, callback: Callable[[str], None]) -> Callable[[], None]:
        """Call callback(topic) on each in-process publish. Returns an unsubscribe callable."""
        return self.signals.watch(topic, lambda node, key, old, new: callback(key))

    def publish(self, topic: str) -> None:
        """Signal topic to every in-process subscriber."""
        setattr(self.signals, topic, (getattr(self.signals, topic) or 0) + 1)

    def notify(self, key: str, old_value: str | None, new_value: str | None) -> None:
        """Broadcast a persisted change of key, in-process then cross-context."""
        self.publish(KEY_TOPICS.get(key, key))
        self.context.announce(key, old_value, new_value)


class TicketProjection:
    """A view's read-only copy of the ticket collection.

    ``tickets`` is a ListNode of ticket Nodes keyed by id; it is updated in
    place on every reload so widgets watching it stay attached. Watch
    ``state.revision`` to hear about each reload once.
    """

    def __init__(self, store: TicketStore, broadcaster: SyncBroadcaster) -> None:
        self.store = store
        self.broadcaster = broadcaster
        self.tickets = ListNode()
        self.state = Node(revision=0)
        self.reloads = 0
        self._unsubscribes: list[Callable[[], None]] = []

    def attach(self) -> None:
        """Load the collection and start following changes."""
        self.reload()
        if self._unsubscribes:
            return
        self._unsubscribes = [
            self.broadcaster.subscribe(TOPIC_TICKETS, self._on_signal),
            self.broadcaster.context.add_listener(self._on_storage_event),
        ]

    def detach(self) -> None:
        """Stop following changes."""
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes.clear()

    def _on_signal(self, topic: str) -> None:
        self.reload()

    def _on_storage_event(self, event: StorageEvent) -> None:
        if event.key == TICKETS_KEY:
            self.reload()

    def reload(self) -> None:
        """Replace the projection with the collection as stored now."""
        fresh = ListNode()
        for ticket in self.store.load():
            fresh[ticket.id] = ticket.to_dict()
        self.tickets.update(fresh)
        self.reloads += 1
        self.state.revision = self.reloads

    def snapshot(self) -> list[Ticket]:
        """The projection as Ticket values, in collection order."""
        return [Ticket(**node.to_dict()) for node in self.tickets]


class StoragePoller:
    """Detects writes made to a shared partition by other processes.

    Each detected change is dispatched to the context's listeners as if
    another context had announced it.
    """

    def __init__(self, context: StorageContext, keys: tuple[str, ...] = (TICKETS_KEY, SESSION_KEY)) -> None:
        self.context = context
        self.keys = keys
        for key in keys:
            context.changed(key)

    def collect(self) -> list[StorageEvent]:
        """Check every watched key. Safe to run off the event loop."""
        events = []
        for key in self.keys:
            event = self.context.changed(key)
            if event is not None:
                events.append(event)
        return events

    def poll(self) -> int:
        """Collect and dispatch changes. Returns how many were found."""
        events = self.collect()
        for event in events:
            self.context.dispatch(event)
        return len(events)


async def run_poll_cycle(poller: StoragePoller) -> int:
    """Run one poll with storage reads off the event loop.

    Dispatch happens back on the loop so listeners can touch widgets.
    """
    try:
        events = await asyncio.to_thread(poller.collect)
        for event in events:
            logger.debug("external change to %s", event.key)
            poller.context.dispatch(event)
        return len(events)
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("storage poll failed")
        return 0
