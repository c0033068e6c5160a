"""Shared helpers for CLI command handlers."""

import json
import sys
from pathlib import Path

from novaticket.config import open_partition, read_config
from novaticket.constants import STATUS_LABELS
from novaticket.model.ticket import Ticket
from novaticket.services import Services


def open_services(data: str) -> Services:
    """Open the data directory as a single storage context."""
    data_dir = Path(data).expanduser().resolve()
    return Services.open(open_partition(data_dir, read_config(data_dir)))


def require_session(services: Services, json_mode: bool) -> None:
    """Exit 1 unless someone is logged in."""
    if not services.gate.is_authenticated():
        error("not logged in; run 'novaticket login' first", json_mode)


def parse_id(raw: str, json_mode: bool) -> int:
    """Parse a ticket ID argument. Exit 1 if it is not a number."""
    try:
        return int(raw)
    except ValueError:
        error(f"Ticket ID must be a number, got '{raw}'.", json_mode)


def find_ticket(services: Services, ticket_id: int, json_mode: bool) -> Ticket:
    """Lookup ticket by ID. Exit 1 if not found."""
    ticket = services.store.get(ticket_id)
    if ticket is not None:
        return ticket
    error(f"Ticket '{ticket_id}' not found.", json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def field_errors(errors: dict[str, str], json_mode: bool) -> None:
    """Report validation errors per field and exit 1."""
    if json_mode:
        print(json.dumps({"errors": errors}), file=sys.stderr)
    else:
        for name, message in errors.items():
            print(f"error: {name}: {message}", file=sys.stderr)
    sys.exit(1)


def format_ticket_line(t: Ticket) -> str:
    """Format a ticket as a single text line."""
    status = STATUS_LABELS.get(t.status, t.status)
    return f"{t.id}  {status:<11} {t.priority:<8} {t.created}  {t.title}"
