"""Base screen for views that need a logged-in session."""

from textual.screen import Screen

from novaticket.constants import SESSION_KEY
from novaticket.services import Services
from novaticket.storage import StorageEvent
from novaticket.ui.watcher import NodeWatcherMixin


class ProtectedScreen(NodeWatcherMixin, Screen):
    """Checks the session when shown and when another view logs out.

    Without a session the screen is replaced by the login screen.
    """

    def __init__(self, services: Services, **kwargs) -> None:
        self._init_watcher()
        super().__init__(**kwargs)
        self.services = services

    def _watch_live(self) -> bool:
        return self.is_running

    def admit(self) -> bool:
        """True if a session exists; otherwise switch to the login screen."""
        if self.services.gate.is_authenticated():
            return True
        from novaticket.ui.auth import AuthScreen

        self.app.switch_screen(AuthScreen(self.services))
        return False

    def on_mount(self) -> None:
        self._unwatches.append(self.services.context.add_listener(self._on_storage_event))

    def _on_storage_event(self, event: StorageEvent) -> None:
        if event.key == SESSION_KEY and self.is_current:
            self.admit()

    def on_screen_resume(self) -> None:
        self.admit()

    def action_logout(self) -> None:
        """Clear the session and go back to the login screen."""
        failure = self.services.gate.clear()
        if failure:
            self.app.notify(failure, severity="error")
            return
        self.app.notify("Logged out")
        self.admit()
