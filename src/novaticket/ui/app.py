"""Main Textual application for novaticket."""

import asyncio
from pathlib import Path

from textual.app import App

from novaticket.config import default_config, open_partition, read_config
from novaticket.services import Services
from novaticket.storage import StoragePartition
from novaticket.sync import StoragePoller, run_poll_cycle
from novaticket.ui.auth import AuthScreen
from novaticket.ui.dashboard import DashboardScreen


class NovaTicketApp(App):
    """Local support-ticket tracker TUI.

    Opens on the dashboard when a session exists, otherwise on the login
    screen. Writes by other processes to the same data directory are
    picked up every ``sync-interval`` seconds.
    """

    CSS = """
    Tooltip {
        padding: 0 1;
        margin: 0;
    }
    """

    TITLE = "NovaTicket"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, data_dir: Path | None = None, partition: StoragePartition | None = None):
        super().__init__()
        self.data_dir = data_dir
        self.config = read_config(data_dir) if data_dir is not None else default_config()
        if partition is None:
            partition = open_partition(data_dir, self.config) if data_dir is not None else StoragePartition()
        self.services = Services.open(partition)
        self.auth_latency = self.config["auth_latency"]
        self.poller = StoragePoller(self.services.context)
        self._poll_task: asyncio.Task | None = None

    def on_mount(self) -> None:
        if self.services.gate.is_authenticated():
            self.push_screen(DashboardScreen(self.services))
        else:
            self.push_screen(AuthScreen(self.services))
        self.set_interval(self.config["sync_interval"], self._poll_tick)

    def _poll_tick(self) -> None:
        """Start a storage poll unless one is still running."""
        if self._poll_task is not None and not self._poll_task.done():
            return
        self._poll_task = asyncio.create_task(run_poll_cycle(self.poller))

    def action_quit(self) -> None:
        """Stop polling and quit."""
        if self._poll_task is not None:
            self._poll_task.cancel()
        self.services.close()
        self.exit()
