"""CLI argument parser and dispatch for novaticket."""

import argparse

from novaticket.cli.auth import login, logout, signup, whoami
from novaticket.cli.config import config_get, config_set
from novaticket.cli.dashboard import dashboard
from novaticket.cli.ticket import ticket_add, ticket_delete, ticket_edit, ticket_get, ticket_list
from novaticket.cli.web import web
from novaticket.constants import PRIORITIES, STATUS_FILTER_ALL, STATUSES

DEFAULT_DATA = "~/.novaticket"


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data", default=DEFAULT_DATA, help=f"Data directory (default: {DEFAULT_DATA})")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log what is happening to stderr")

    parser = argparse.ArgumentParser(
        prog="novaticket",
        description="Local support-ticket tracker",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- accounts ---
    signup_p = nouns.add_parser("signup", help="Create an account", parents=[common])
    signup_p.add_argument("--email", required=True, help="Gmail address")
    signup_p.add_argument("--name", required=True, help="Full name")
    signup_p.add_argument("--password", help="Password (prompted if omitted)")
    signup_p.set_defaults(func=signup)

    login_p = nouns.add_parser("login", help="Log in", parents=[common])
    login_p.add_argument("--email", required=True, help="Gmail address")
    login_p.add_argument("--password", help="Password (prompted if omitted)")
    login_p.set_defaults(func=login)

    logout_p = nouns.add_parser("logout", help="Log out", parents=[common])
    logout_p.set_defaults(func=logout)

    whoami_p = nouns.add_parser("whoami", help="Show the logged-in user", parents=[common])
    whoami_p.set_defaults(func=whoami)

    # --- dashboard ---
    dash_p = nouns.add_parser("dashboard", help="Show ticket statistics", parents=[common])
    dash_p.set_defaults(func=dashboard)

    # --- ticket ---
    ticket_p = nouns.add_parser("ticket", help="Ticket operations", parents=[common])
    ticket_verbs = ticket_p.add_subparsers(dest="verb")

    list_p = ticket_verbs.add_parser("list", help="List tickets", parents=[common])
    list_p.add_argument("--search", default="", help="Case-insensitive text in title or description")
    list_p.add_argument(
        "--status",
        default=STATUS_FILTER_ALL,
        choices=(STATUS_FILTER_ALL, *STATUSES),
        help="Only tickets with this status (default: all)",
    )
    list_p.set_defaults(func=ticket_list)

    get_p = ticket_verbs.add_parser("get", help="Show a ticket", parents=[common])
    get_p.add_argument("id", help="Ticket ID")
    get_p.set_defaults(func=ticket_get)

    add_p = ticket_verbs.add_parser("add", help="Create a ticket", parents=[common])
    add_p.add_argument("title", help="Ticket title (5-100 characters)")
    add_p.add_argument("--description", default="", help="Ticket description (up to 500 characters)")
    add_p.add_argument("--status", default="open", choices=STATUSES, help="Status (default: open)")
    add_p.add_argument("--priority", default="medium", choices=PRIORITIES, help="Priority (default: medium)")
    add_p.set_defaults(func=ticket_add)

    edit_p = ticket_verbs.add_parser("edit", help="Edit a ticket", parents=[common])
    edit_p.add_argument("id", help="Ticket ID")
    edit_p.add_argument("--title", help="New title")
    edit_p.add_argument("--description", help="New description")
    edit_p.add_argument("--status", choices=STATUSES, help="New status")
    edit_p.add_argument("--priority", choices=PRIORITIES, help="New priority")
    edit_p.set_defaults(func=ticket_edit)

    delete_p = ticket_verbs.add_parser("delete", help="Delete a ticket", parents=[common])
    delete_p.add_argument("id", help="Ticket ID")
    delete_p.set_defaults(func=ticket_delete)

    # ticket with no verb = list
    ticket_p.set_defaults(func=ticket_list, search="", status=STATUS_FILTER_ALL)

    # --- config ---
    config_p = nouns.add_parser("config", help="Settings", parents=[common])
    config_verbs = config_p.add_subparsers(dest="verb")

    config_get_p = config_verbs.add_parser("get", help="Show settings", parents=[common])
    config_get_p.add_argument("key", nargs="?", help="Setting name")
    config_get_p.set_defaults(func=config_get)

    config_set_p = config_verbs.add_parser("set", help="Change a setting", parents=[common])
    config_set_p.add_argument("key", help="Setting name")
    config_set_p.add_argument("value", help="New value")
    config_set_p.set_defaults(func=config_set)

    # config with no verb = get
    config_p.set_defaults(func=config_get, key=None)

    # --- web ---
    web_p = nouns.add_parser("web", help="Serve the app in a browser", parents=[common])
    web_p.add_argument("--host", default="localhost", help="Bind address (default: localhost)")
    web_p.add_argument("--port", type=int, default=8618, help="Port (default: 8618)")
    web_p.set_defaults(func=web)

    return parser
