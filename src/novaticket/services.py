"""The per-view service bundle: one storage context and everything on it."""

from __future__ import annotations

from dataclasses import dataclass

from novaticket.ids import IdAllocator
from novaticket.model.session import SessionGate, UserRegistry
from novaticket.model.store import TicketStore
from novaticket.storage import StorageContext, StoragePartition
from novaticket.sync import SyncBroadcaster, TicketProjection


@dataclass
class Services:
    """What a view needs, passed in rather than reached for globally."""

    context: StorageContext
    broadcaster: SyncBroadcaster
    store: TicketStore
    gate: SessionGate
    users: UserRegistry

    @classmethod
    def open(cls, partition: StoragePartition) -> Services:
        """Open a new context on partition and wire the services to it."""
        context = partition.open_context()
        broadcaster = SyncBroadcaster(context)
        ids = IdAllocator()
        gate = SessionGate(context, broadcaster)
        return cls(
            context=context,
            broadcaster=broadcaster,
            store=TicketStore(context, broadcaster, ids=ids),
            gate=gate,
            users=UserRegistry(context, gate),
        )

    def projection(self) -> TicketProjection:
        """A fresh, unattached projection of this context's tickets."""
        return TicketProjection(self.store, self.broadcaster)

    def close(self) -> None:
        self.context.close()
