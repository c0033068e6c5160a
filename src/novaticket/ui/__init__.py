"""Textual UI for novaticket."""

from novaticket.ui.app import NovaTicketApp
from novaticket.ui.auth import AuthScreen
from novaticket.ui.dashboard import DashboardScreen
from novaticket.ui.form import ConfirmDeleteScreen, TicketFormScreen
from novaticket.ui.tickets import TicketsScreen

__all__ = [
    "AuthScreen",
    "ConfirmDeleteScreen",
    "DashboardScreen",
    "NovaTicketApp",
    "TicketFormScreen",
    "TicketsScreen",
]
