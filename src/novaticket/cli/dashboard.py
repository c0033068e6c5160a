"""Handler for 'novaticket dashboard'."""

from novaticket.cli._common import format_ticket_line, open_services, output_json, require_session
from novaticket.constants import STATUS_LABELS
from novaticket.model.stats import daily_counts, recent, summarize


def dashboard(args) -> int:
    """Show ticket statistics and the most recent tickets."""
    services = open_services(args.data)
    require_session(services, args.json)
    session = services.gate.current()
    tickets = services.store.load()

    summary = summarize(tickets)
    daily = daily_counts(tickets)
    latest = recent(tickets)

    if args.json:
        output_json(
            {
                **summary,
                "daily": [{"date": day, "tickets": n} for day, n in daily],
                "recent": [t.to_dict() for t in latest],
            }
        )
        return 0

    print(f"Welcome back, {session.first_name}!")
    print()
    print(f"Total tickets  {summary['total']}")
    for status, count in summary["by_status"].items():
        print(f"{STATUS_LABELS[status]:<14} {count}")
    print()
    print("Created in the last 7 days")
    for day, count in daily:
        print(f"  {day}  {'#' * count}{' ' if count else ''}{count}")
    if latest:
        print()
        print("Recent tickets")
        for t in latest:
            print(f"  {format_ticket_line(t)}")
    return 0
