"""Dashboard screen: ticket statistics and recent tickets."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Footer, Static

from novaticket.constants import STATUS_LABELS, STATUSES
from novaticket.model.stats import daily_counts, recent, summarize
from novaticket.ui.protected import ProtectedScreen
from novaticket.ui.styles import PRIORITY_STYLES, STATUS_STYLES

BAR_WIDTH = 30


def render_chart(daily: list[tuple[str, int]]) -> Text:
    """Horizontal bar chart of tickets created per day."""
    text = Text()
    peak = max((n for _, n in daily), default=0)
    for day, count in daily:
        width = round(count / peak * BAR_WIDTH) if peak else 0
        text.append(f"{day[5:]} ")
        text.append("█" * width, style="cyan")
        text.append(f" {count}\n")
    return text


class StatCard(Static):
    """One number with a caption."""

    DEFAULT_CSS = """
    StatCard {
        width: 1fr;
        height: 5;
        border: round $primary;
        content-align: center middle;
        text-align: center;
    }
    """

    def __init__(self, caption: str, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.caption = caption
        self.number = 0

    def set_count(self, count: int) -> None:
        self.number = count
        self.update(Text.assemble((str(count), "bold"), "\n", self.caption))


class DashboardScreen(ProtectedScreen):
    """Totals by status, a 7-day chart and the most recent tickets."""

    CSS = """
    #welcome {
        text-style: bold;
        padding: 1 1 0 1;
    }
    #stats {
        height: 5;
    }
    #chart {
        height: auto;
        border: round $secondary;
        padding: 0 1;
    }
    #recent {
        height: 1fr;
    }
    """

    BINDINGS = [
        ("t", "tickets", "Manage tickets"),
        ("l", "logout", "Logout"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("", id="welcome")
            with Horizontal(id="stats"):
                yield StatCard("Total Tickets", id="stat-total")
                for status in STATUSES:
                    yield StatCard(STATUS_LABELS[status], id=f"stat-{status}")
            yield Static("", id="chart")
            yield DataTable(id="recent", cursor_type="row")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#recent", DataTable)
        table.add_columns("Title", "Status", "Priority", "Created")
        if not self.services.gate.is_authenticated():
            return
        session = self.services.gate.current()
        self.query_one("#welcome", Static).update(f"Welcome back, {session.first_name}!")
        self.projection = self.follow(self.services.projection())
        self.node_watch(self.projection.state, "revision", self._on_reload)
        self.refresh_stats()

    def _on_reload(self, node, key, old, new) -> None:
        self.refresh_stats()

    def refresh_stats(self) -> None:
        """Redraw everything from the projection."""
        tickets = self.projection.snapshot()
        summary = summarize(tickets)
        self.query_one("#stat-total", StatCard).set_count(summary["total"])
        for status, count in summary["by_status"].items():
            self.query_one(f"#stat-{status}", StatCard).set_count(count)

        self.query_one("#chart", Static).update(render_chart(daily_counts(tickets)))

        table = self.query_one("#recent", DataTable)
        table.clear()
        for t in recent(tickets):
            table.add_row(
                t.title,
                Text(STATUS_LABELS[t.status], style=STATUS_STYLES[t.status]),
                Text(t.priority, style=PRIORITY_STYLES[t.priority]),
                t.created,
                key=str(t.id),
            )

    def action_tickets(self) -> None:
        from novaticket.ui.tickets import TicketsScreen

        self.app.switch_screen(TicketsScreen(self.services))
