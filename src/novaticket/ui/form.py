"""Modal screens for creating, editing and deleting tickets."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static, TextArea

from novaticket.constants import PRIORITIES, STATUS_LABELS, STATUSES
from novaticket.model.store import TicketStore
from novaticket.model.ticket import Ticket, TicketDraft

STATUS_OPTIONS = [(STATUS_LABELS[s], s) for s in STATUSES]
PRIORITY_OPTIONS = [(p.capitalize(), p) for p in PRIORITIES]


class TicketFormScreen(ModalScreen[Ticket | None]):
    """Create a ticket, or edit one when given an existing ticket.

    Dismisses with the saved ticket, or None on cancel. Validation errors
    keep the form open with a message under each bad field.
    """

    CSS = """
    TicketFormScreen {
        align: center middle;
        background: rgba(0, 0, 0, 0.6);
    }
    #form {
        width: 72;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #form-heading {
        text-style: bold;
        margin-bottom: 1;
    }
    #description {
        height: 6;
    }
    .field-error {
        color: $error;
        height: auto;
    }
    #form-buttons {
        height: 3;
        align: right middle;
        margin-top: 1;
    }
    #form-buttons Button {
        margin-left: 1;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, store: TicketStore, ticket: Ticket | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.ticket = ticket

    def compose(self) -> ComposeResult:
        draft = TicketDraft.from_ticket(self.ticket) if self.ticket else TicketDraft()
        with Vertical(id="form"):
            yield Static("Edit Ticket" if self.ticket else "Create Ticket", id="form-heading")
            yield Label("Title *")
            yield Input(draft.title, placeholder="Short summary of the issue", id="title")
            yield Static("", id="title-error", classes="field-error")
            yield Label("Description")
            yield TextArea(draft.description, id="description")
            yield Static("", id="description-error", classes="field-error")
            yield Label("Status")
            yield Select(STATUS_OPTIONS, value=draft.status, allow_blank=False, id="status")
            yield Label("Priority")
            yield Select(PRIORITY_OPTIONS, value=draft.priority, allow_blank=False, id="priority")
            with Horizontal(id="form-buttons"):
                yield Button("Cancel", id="cancel")
                yield Button("Save", id="save", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def draft(self) -> TicketDraft:
        """The form's current values."""
        return TicketDraft(
            title=self.query_one("#title", Input).value,
            description=self.query_one("#description", TextArea).text,
            status=self.query_one("#status", Select).value,
            priority=self.query_one("#priority", Select).value,
        )

    def save(self) -> None:
        """Create or update from the form; dismiss on success."""
        if self.ticket is None:
            outcome = self.store.create(self.draft())
        else:
            outcome = self.store.update(self.ticket.id, self.draft())

        for name in ("title", "description"):
            message = outcome.errors.get(name)
            self.query_one(f"#{name}-error", Static).update(f"⚠ {message}" if message else "")

        if outcome.errors:
            self.app.notify("Please fix the errors in the form", severity="error")
        elif outcome.error:
            self.app.notify(outcome.error, severity="error")
        else:
            self.app.notify("Ticket updated successfully!" if self.ticket else "Ticket created successfully!")
            self.dismiss(outcome.ticket)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.save()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.save()

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Ask before deleting a ticket."""

    CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }
    #dialog {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }
    #message {
        text-align: center;
        margin-bottom: 1;
    }
    #buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }
    Button {
        margin: 0 2;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, ticket: Ticket):
        super().__init__()
        self.ticket = ticket

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(f'Delete "{self.ticket.title}"? This cannot be undone.', id="message")
            with Horizontal(id="buttons"):
                yield Button("Delete", id="yes", variant="error")
                yield Button("Cancel", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_cancel(self) -> None:
        self.dismiss(False)
