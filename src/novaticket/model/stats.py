"""Dashboard statistics over a ticket collection."""

from collections import Counter
from datetime import date, timedelta

from novaticket.constants import PRIORITIES, STATUSES
from novaticket.model.ticket import Ticket


def summarize(tickets: list[Ticket]) -> dict:
    """Totals by status and priority."""
    statuses = Counter(t.status for t in tickets)
    priorities = Counter(t.priority for t in tickets)
    return {
        "total": len(tickets),
        "by_status": {s: statuses.get(s, 0) for s in STATUSES},
        "by_priority": {p: priorities.get(p, 0) for p in PRIORITIES},
    }


def daily_counts(tickets: list[Ticket], days: int = 7, today: date | None = None) -> list[tuple[str, int]]:
    """Tickets created on each of the last `days` days, oldest first."""
    today = today or date.today()
    created = Counter(t.created for t in tickets)
    result = []
    for offset in range(days - 1, -1, -1):
        day = (today - timedelta(days=offset)).isoformat()
        result.append((day, created.get(day, 0)))
    return result


def recent(tickets: list[Ticket], limit: int = 5) -> list[Ticket]:
    """The newest tickets by creation date, then by id."""
    return sorted(tickets, key=lambda t: (t.created, t.id), reverse=True)[:limit]
