"""Handlers for 'novaticket ticket' commands."""

from novaticket.cli._common import (
    error,
    field_errors,
    find_ticket,
    format_ticket_line,
    open_services,
    output_json,
    output_result,
    parse_id,
    require_session,
)
from novaticket.constants import STATUS_LABELS
from novaticket.model.ticket import TicketDraft


def ticket_list(args) -> int:
    """List tickets, optionally filtered by search text and status."""
    services = open_services(args.data)
    require_session(services, args.json)
    services.store.load()

    tickets = services.store.query(args.search or "", args.status)

    if args.json:
        output_json([t.to_dict() for t in tickets])
    elif not tickets:
        print("no tickets")
    else:
        for t in tickets:
            print(format_ticket_line(t))

    return 0


def ticket_get(args) -> int:
    """Show one ticket in full."""
    services = open_services(args.data)
    require_session(services, args.json)
    ticket = find_ticket(services, parse_id(args.id, args.json), args.json)

    if args.json:
        output_json(ticket.to_dict())
    else:
        print(f"# {ticket.title}")
        print()
        print(f"id: {ticket.id}")
        print(f"status: {STATUS_LABELS[ticket.status]}")
        print(f"priority: {ticket.priority}")
        print(f"created: {ticket.created}")
        if ticket.description:
            print()
            print(ticket.description)

    return 0


def ticket_add(args) -> int:
    """Create a ticket."""
    services = open_services(args.data)
    require_session(services, args.json)

    draft = TicketDraft(
        title=args.title,
        description=args.description or "",
        status=args.status,
        priority=args.priority,
    )
    outcome = services.store.create(draft)
    if outcome.errors:
        field_errors(outcome.errors, args.json)
    if outcome.error:
        error(outcome.error, args.json)

    ticket = outcome.ticket
    output_result(ticket.to_dict(), f"Created ticket {ticket.id}: {ticket.title}", args.json)
    return 0


def ticket_edit(args) -> int:
    """Update a ticket. Fields not given keep their current values."""
    services = open_services(args.data)
    require_session(services, args.json)
    ticket_id = parse_id(args.id, args.json)
    current = find_ticket(services, ticket_id, args.json)

    draft = TicketDraft(
        title=current.title if args.title is None else args.title,
        description=current.description if args.description is None else args.description,
        status=args.status or current.status,
        priority=args.priority or current.priority,
    )
    outcome = services.store.update(ticket_id, draft)
    if outcome.errors:
        field_errors(outcome.errors, args.json)
    if outcome.error:
        error(outcome.error, args.json)

    output_result(outcome.ticket.to_dict(), f"Updated ticket {ticket_id}", args.json)
    return 0


def ticket_delete(args) -> int:
    """Delete a ticket."""
    services = open_services(args.data)
    require_session(services, args.json)
    ticket_id = parse_id(args.id, args.json)
    find_ticket(services, ticket_id, args.json)

    outcome = services.store.delete(ticket_id)
    if outcome.error:
        error(outcome.error, args.json)

    output_result({"id": ticket_id, "deleted": True}, f"Deleted ticket {ticket_id}", args.json)
    return 0
