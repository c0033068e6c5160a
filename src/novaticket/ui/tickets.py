"""Ticket management screen: search, filter, create, edit, delete."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Footer, Input, Select, Static

from novaticket.constants import STATUS_FILTER_ALL, STATUS_LABELS, STATUSES
from novaticket.model.stats import summarize
from novaticket.model.ticket import Ticket
from novaticket.ui.form import ConfirmDeleteScreen, TicketFormScreen
from novaticket.ui.protected import ProtectedScreen
from novaticket.ui.styles import PRIORITY_STYLES, STATUS_STYLES

FILTER_OPTIONS = [("All Status", STATUS_FILTER_ALL)] + [(STATUS_LABELS[s], s) for s in STATUSES]


class TicketsScreen(ProtectedScreen):
    """The full ticket list with search and status filter."""

    CSS = """
    #tickets-heading {
        text-style: bold;
        padding: 1 1 0 1;
    }
    #ticket-stats {
        padding: 0 1;
        color: $text-muted;
    }
    #filters {
        height: 3;
    }
    #search {
        width: 2fr;
    }
    #status-filter {
        width: 1fr;
    }
    #tickets {
        height: 1fr;
    }
    #empty {
        padding: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        ("n", "create", "New ticket"),
        ("e", "edit", "Edit"),
        ("d", "delete", "Delete"),
        ("slash", "search", "Search"),
        ("b", "dashboard", "Dashboard"),
        ("l", "logout", "Logout"),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.rows: list[Ticket] = []
        self.search_text = ""
        self.status_filter = STATUS_FILTER_ALL
        self.projection = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Ticket Management", id="tickets-heading")
            yield Static("", id="ticket-stats")
            with Horizontal(id="filters"):
                yield Input(placeholder="Search tickets...", id="search")
                yield Select(FILTER_OPTIONS, value=STATUS_FILTER_ALL, allow_blank=False, id="status-filter")
            yield DataTable(id="tickets", cursor_type="row")
            yield Static("No tickets found.", id="empty")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#tickets", DataTable)
        table.add_columns("ID", "Title", "Status", "Priority", "Created")
        if not self.services.gate.is_authenticated():
            return
        self.projection = self.follow(self.services.projection())
        self.node_watch(self.projection.state, "revision", self._on_reload)
        self.refresh_rows()
        table.focus()

    def _on_reload(self, node, key, old, new) -> None:
        self.refresh_rows()

    def refresh_rows(self) -> None:
        """Re-run the query and redraw the table, keeping the cursor on the same ticket."""
        if self.projection is None:
            return
        self.refresh_stats()
        table = self.query_one("#tickets", DataTable)
        selected = self.selected()
        self.rows = self.services.store.query(self.search_text, self.status_filter)
        table.clear()
        for t in self.rows:
            table.add_row(
                str(t.id),
                t.title,
                Text(STATUS_LABELS[t.status], style=STATUS_STYLES[t.status]),
                Text(t.priority, style=PRIORITY_STYLES[t.priority]),
                t.created,
                key=str(t.id),
            )
        self.query_one("#empty", Static).display = not self.rows
        if selected is not None:
            for i, t in enumerate(self.rows):
                if t.id == selected.id:
                    table.move_cursor(row=i)
                    break

    def refresh_stats(self) -> None:
        """Per-status counts over the whole collection, ignoring filters."""
        by_status = summarize(self.projection.snapshot())["by_status"]
        self.query_one("#ticket-stats", Static).update(
            "   ".join(f"{STATUS_LABELS[status]}: {count}" for status, count in by_status.items())
        )

    def selected(self) -> Ticket | None:
        """The ticket under the table cursor."""
        table = self.query_one("#tickets", DataTable)
        if not self.rows or table.cursor_row is None:
            return None
        if 0 <= table.cursor_row < len(self.rows):
            return self.rows[table.cursor_row]
        return None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self.search_text = event.value
            self.refresh_rows()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "status-filter":
            self.status_filter = event.value
            self.refresh_rows()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_edit()

    def action_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_create(self) -> None:
        self.app.push_screen(TicketFormScreen(self.services.store))

    def action_edit(self) -> None:
        ticket = self.selected()
        if ticket is None:
            return
        self.app.push_screen(TicketFormScreen(self.services.store, ticket))

    def action_delete(self) -> None:
        ticket = self.selected()
        if ticket is None:
            return

        def on_confirm(confirmed: bool) -> None:
            if confirmed:
                self.delete_ticket(ticket)

        self.app.push_screen(ConfirmDeleteScreen(ticket), on_confirm)

    def delete_ticket(self, ticket: Ticket) -> None:
        if self.services.store.get(ticket.id) is None:
            self.app.notify("Ticket not found", severity="error")
            return
        outcome = self.services.store.delete(ticket.id)
        if outcome.error:
            self.app.notify(outcome.error, severity="error")
        else:
            self.app.notify("Ticket deleted successfully!")

    def action_dashboard(self) -> None:
        from novaticket.ui.dashboard import DashboardScreen

        self.app.switch_screen(DashboardScreen(self.services))
