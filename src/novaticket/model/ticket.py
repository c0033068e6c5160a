"""Ticket records, drafts, validation and the JSON collection format."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from datetime import date

from novaticket.constants import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    DESCRIPTION_MAX,
    PRIORITIES,
    STATUSES,
    TITLE_MAX,
    TITLE_MIN,
)
from novaticket.storage import StorageCorrupt

FIELDS = ("id", "title", "description", "status", "priority", "created")


@dataclass(frozen=True)
class Ticket:
    """One persisted support ticket."""

    id: int
    title: str
    description: str
    status: str
    priority: str
    created: str

    def to_dict(self) -> dict:
        return asdict(self)

    def with_draft(self, draft: TicketDraft) -> Ticket:
        """Copy with the mutable fields taken from draft; id and created are kept."""
        return replace(
            self,
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
        )


@dataclass(frozen=True)
class TicketDraft:
    """User-supplied ticket fields, before validation."""

    title: str = ""
    description: str = ""
    status: str = DEFAULT_STATUS
    priority: str = DEFAULT_PRIORITY

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> TicketDraft:
        return cls(
            title=ticket.title,
            description=ticket.description,
            status=ticket.status,
            priority=ticket.priority,
        )


def validate_draft(draft: TicketDraft) -> tuple[TicketDraft | None, dict[str, str]]:
    """Check a draft and normalize it.

    Returns (normalized_draft, {}) when valid, or (None, errors) where errors
    maps field name to message. Title and description are trimmed.
    """
    errors: dict[str, str] = {}
    title = (draft.title or "").strip()
    description = (draft.description or "").strip()

    if not title:
        errors["title"] = "Title is required"
    elif len(title) < TITLE_MIN:
        errors["title"] = f"Title must be at least {TITLE_MIN} characters"
    elif len(title) > TITLE_MAX:
        errors["title"] = f"Title must not exceed {TITLE_MAX} characters"

    if len(description) > DESCRIPTION_MAX:
        errors["description"] = f"Description must not exceed {DESCRIPTION_MAX} characters"

    status = draft.status or DEFAULT_STATUS
    if status not in STATUSES:
        errors["status"] = f"Status must be one of: {', '.join(STATUSES)}"

    priority = draft.priority or DEFAULT_PRIORITY
    if priority not in PRIORITIES:
        errors["priority"] = f"Priority must be one of: {', '.join(PRIORITIES)}"

    if errors:
        return None, errors
    return TicketDraft(title=title, description=description, status=status, priority=priority), {}


def today() -> str:
    """Today's date as YYYY-MM-DD."""
    return date.today().isoformat()


# --- Collection format ---


def _decode_ticket(raw) -> Ticket:
    if not isinstance(raw, dict):
        raise StorageCorrupt(f"ticket is not an object: {raw!r}")
    missing = [f for f in ("id", "title", "status", "priority", "created") if f not in raw]
    if missing:
        raise StorageCorrupt(f"ticket missing fields: {', '.join(missing)}")
    ticket_id = raw["id"]
    if isinstance(ticket_id, bool) or not isinstance(ticket_id, int):
        raise StorageCorrupt(f"ticket id is not an integer: {ticket_id!r}")
    title = raw["title"]
    description = raw.get("description") or ""
    if not isinstance(title, str) or not isinstance(description, str):
        raise StorageCorrupt(f"ticket {ticket_id} has non-text title or description")
    if not TITLE_MIN <= len(title.strip()) <= TITLE_MAX:
        raise StorageCorrupt(f"ticket {ticket_id} title length is outside {TITLE_MIN}-{TITLE_MAX}")
    if len(description.strip()) > DESCRIPTION_MAX:
        raise StorageCorrupt(f"ticket {ticket_id} description is longer than {DESCRIPTION_MAX}")
    if raw["status"] not in STATUSES:
        raise StorageCorrupt(f"ticket {ticket_id} has unknown status {raw['status']!r}")
    if raw["priority"] not in PRIORITIES:
        raise StorageCorrupt(f"ticket {ticket_id} has unknown priority {raw['priority']!r}")
    try:
        created = date.fromisoformat(raw["created"]).isoformat()
    except (TypeError, ValueError):
        raise StorageCorrupt(f"ticket {ticket_id} has invalid date {raw['created']!r}")
    return Ticket(
        id=ticket_id,
        title=title,
        description=description,
        status=raw["status"],
        priority=raw["priority"],
        created=created,
    )


def decode_tickets(text: str) -> list[Ticket]:
    """Parse a stored collection snapshot.

    Raises StorageCorrupt if the text is not a JSON array of valid tickets
    with distinct ids.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise StorageCorrupt(f"collection is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise StorageCorrupt("collection is not a JSON array")
    tickets = [_decode_ticket(raw) for raw in data]
    ids = [t.id for t in tickets]
    if len(set(ids)) != len(ids):
        raise StorageCorrupt("collection contains duplicate ticket ids")
    return tickets


def encode_tickets(tickets: list[Ticket]) -> str:
    """Serialize a collection snapshot."""
    return json.dumps([t.to_dict() for t in tickets])
