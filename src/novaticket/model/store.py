"""Ticket collection: load, mutate, persist and broadcast."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from novaticket.constants import SEED_TICKETS, STATUS_FILTER_ALL, TICKETS_KEY
from novaticket.ids import IdAllocator
from novaticket.model.ticket import (
    Ticket,
    TicketDraft,
    decode_tickets,
    encode_tickets,
    today,
    validate_draft,
)
from novaticket.storage import StorageContext, StorageCorrupt, StorageWriteFailed

if TYPE_CHECKING:
    from novaticket.sync import SyncBroadcaster

logger = logging.getLogger(__name__)

NOT_FOUND = "Ticket not found"


@dataclass
class Outcome:
    """Result of a mutation.

    errors holds per-field validation messages; error holds a failure
    that is not tied to a field (missing ticket, storage write failed).
    """

    ticket: Ticket | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.errors and self.error is None


def matches(ticket: Ticket, filter_text: str = "", status_filter: str = STATUS_FILTER_ALL) -> bool:
    """True if ticket passes the status filter and contains filter_text."""
    if status_filter != STATUS_FILTER_ALL and ticket.status != status_filter:
        return False
    if not filter_text:
        return True
    needle = filter_text.lower()
    return needle in ticket.title.lower() or needle in (ticket.description or "").lower()


class TicketStore:
    """The ticket collection for one storage context.

    Every mutation rewrites the whole collection under TICKETS_KEY and only
    then notifies the broadcaster. The in-memory collection never moves past
    the last snapshot that was written successfully.
    """

    def __init__(
        self,
        context: StorageContext,
        broadcaster: SyncBroadcaster | None = None,
        ids: IdAllocator | None = None,
        clock: Callable[[], str] = today,
    ) -> None:
        self.context = context
        self.broadcaster = broadcaster
        self._ids = ids or IdAllocator()
        self._today = clock
        self._tickets: list[Ticket] | None = None
        self._raw: str | None = None

    @property
    def tickets(self) -> list[Ticket]:
        """The in-memory collection, loading it on first access."""
        if self._tickets is None:
            self.load()
        return list(self._tickets)

    def load(self) -> list[Ticket]:
        """Read the collection from storage, seeding it if absent or corrupt."""
        raw = self.context.get_item(TICKETS_KEY)
        if raw is None:
            tickets = self._seed()
        else:
            try:
                tickets = decode_tickets(raw)
                self._raw = raw
            except StorageCorrupt as e:
                logger.warning("stored tickets are corrupt, resetting to sample tickets: %s", e)
                tickets = self._seed()
        self._tickets = tickets
        self._ids.observe(t.id for t in tickets)
        return list(tickets)

    def _seed(self) -> list[Ticket]:
        created = self._today()
        tickets = [
            Ticket(
                id=self._ids.allocate(),
                title=sample["title"],
                description=sample["description"],
                status=sample["status"],
                priority=sample["priority"],
                created=created,
            )
            for sample in SEED_TICKETS
        ]
        text = encode_tickets(tickets)
        try:
            self.context.set_item(TICKETS_KEY, text)
            self._raw = text
        except StorageWriteFailed as e:
            logger.error("could not save sample tickets: %s", e)
        return tickets

    def _commit(self, tickets: list[Ticket]) -> str | None:
        """Persist tickets, then broadcast. Returns an error message on failure."""
        text = encode_tickets(tickets)
        try:
            self.context.set_item(TICKETS_KEY, text)
        except StorageWriteFailed as e:
            logger.error("could not save tickets: %s", e)
            return f"Could not save tickets: {e}"
        old, self._raw = self._raw, text
        self._tickets = tickets
        if self.broadcaster is not None:
            self.broadcaster.notify(TICKETS_KEY, old, text)
        return None

    def _index(self, ticket_id: int) -> int | None:
        for i, ticket in enumerate(self.tickets):
            if ticket.id == ticket_id:
                return i
        return None

    def get(self, ticket_id: int) -> Ticket | None:
        """Find a ticket by id."""
        i = self._index(ticket_id)
        return None if i is None else self._tickets[i]

    def create(self, draft: TicketDraft) -> Outcome:
        """Validate draft and add it as a new ticket at the front."""
        current = self.tickets
        normalized, errors = validate_draft(draft)
        if errors:
            return Outcome(errors=errors)
        ticket = Ticket(
            id=self._ids.allocate(),
            title=normalized.title,
            description=normalized.description,
            status=normalized.status,
            priority=normalized.priority,
            created=self._today(),
        )
        error = self._commit([ticket, *current])
        if error:
            return Outcome(error=error)
        logger.info("created ticket %s: %s", ticket.id, ticket.title)
        return Outcome(ticket=ticket)

    def update(self, ticket_id: int, draft: TicketDraft) -> Outcome:
        """Replace the editable fields of an existing ticket."""
        i = self._index(ticket_id)
        if i is None:
            return Outcome(error=NOT_FOUND)
        normalized, errors = validate_draft(draft)
        if errors:
            return Outcome(errors=errors)
        tickets = self.tickets
        ticket = tickets[i].with_draft(normalized)
        tickets[i] = ticket
        error = self._commit(tickets)
        if error:
            return Outcome(error=error)
        logger.info("updated ticket %s", ticket.id)
        return Outcome(ticket=ticket)

    def delete(self, ticket_id: int) -> Outcome:
        """Remove a ticket. An unknown id is ignored with a warning."""
        i = self._index(ticket_id)
        if i is None:
            logger.warning("delete of unknown ticket %s ignored", ticket_id)
            return Outcome()
        tickets = self.tickets
        removed = tickets.pop(i)
        error = self._commit(tickets)
        if error:
            return Outcome(error=error)
        logger.info("deleted ticket %s", removed.id)
        return Outcome(ticket=removed)

    def query(self, filter_text: str = "", status_filter: str = STATUS_FILTER_ALL) -> list[Ticket]:
        """Tickets matching the search text and status, in collection order."""
        return [t for t in self.tickets if matches(t, filter_text, status_filter)]
