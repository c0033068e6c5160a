"""Login and signup screen."""

import asyncio

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Input, Static

from novaticket.services import Services

FIELDS = ("full_name", "email", "password", "confirm_password")
SIGNUP_ONLY = ("full_name", "confirm_password")


class AuthScreen(Screen):
    """Sign in, or create an account and then sign in."""

    CSS = """
    AuthScreen {
        align: center middle;
    }
    #auth-card {
        width: 60;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #auth-heading {
        text-style: bold;
        text-align: center;
    }
    #auth-subheading {
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }
    .field-error {
        color: $error;
        height: auto;
    }
    #auth-buttons {
        height: 3;
        align: center middle;
        margin-top: 1;
    }
    #auth-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, services: Services, **kwargs) -> None:
        super().__init__(**kwargs)
        self.services = services
        self.is_login = True
        self.busy = False

    def compose(self) -> ComposeResult:
        with Vertical(id="auth-card"):
            yield Static("", id="auth-heading")
            yield Static("", id="auth-subheading")
            yield Input(placeholder="Full name", id="full_name")
            yield Static("", id="full_name-error", classes="field-error")
            yield Input(placeholder="you@gmail.com", id="email")
            yield Static("", id="email-error", classes="field-error")
            yield Input(placeholder="Password", password=True, id="password")
            yield Static("", id="password-error", classes="field-error")
            yield Input(placeholder="Confirm password", password=True, id="confirm_password")
            yield Static("", id="confirm_password-error", classes="field-error")
            with Horizontal(id="auth-buttons"):
                yield Button("Sign In", id="submit", variant="primary")
                yield Button("Need an account? Sign up", id="switch")
        yield Footer()

    def on_mount(self) -> None:
        self._apply_mode()

    def _apply_mode(self) -> None:
        self.query_one("#auth-heading", Static).update("Welcome Back" if self.is_login else "Create Account")
        self.query_one("#auth-subheading", Static).update(
            "Sign in to access your dashboard" if self.is_login else "Sign up to get started with NovaTicket"
        )
        for name in SIGNUP_ONLY:
            self.query_one(f"#{name}", Input).display = not self.is_login
            self.query_one(f"#{name}-error", Static).display = not self.is_login
        self.query_one("#submit", Button).label = "Sign In" if self.is_login else "Sign Up"
        self.query_one("#switch", Button).label = (
            "Need an account? Sign up" if self.is_login else "Have an account? Sign in"
        )
        self.query_one("#email", Input).focus()

    def switch_mode(self) -> None:
        """Toggle between login and signup, clearing the form."""
        self.is_login = not self.is_login
        for name in FIELDS:
            self.query_one(f"#{name}", Input).value = ""
        self.show_errors({})
        self._apply_mode()

    def show_errors(self, errors: dict[str, str]) -> None:
        for name in FIELDS:
            message = errors.get(name)
            self.query_one(f"#{name}-error", Static).update(f"⚠ {message}" if message else "")

    def _value(self, name: str) -> str:
        return self.query_one(f"#{name}", Input).value

    async def submit(self) -> None:
        """Run login or signup with the current form values."""
        if self.busy:
            return
        self.busy = True
        try:
            latency = getattr(self.app, "auth_latency", 0.0)
            if latency:
                await asyncio.sleep(latency)
            if self.is_login:
                result = self.services.users.login(self._value("email"), self._value("password"))
            else:
                result = self.services.users.signup(
                    self._value("email"),
                    self._value("password"),
                    self._value("confirm_password"),
                    self._value("full_name"),
                )
        finally:
            self.busy = False

        self.show_errors(result.errors)
        if result.errors:
            self.app.notify("Please correct the errors before proceeding", severity="error")
            return
        if result.error:
            self.app.notify(result.error, severity="error")
            return

        if self.is_login:
            from novaticket.ui.dashboard import DashboardScreen

            self.app.notify("Login successful!")
            self.app.switch_screen(DashboardScreen(self.services))
        else:
            self.app.notify("Account created! Please log in.")
            email = result.user.email
            self.switch_mode()
            self.query_one("#email", Input).value = email
            self.query_one("#password", Input).focus()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            await self.submit()
        elif event.button.id == "switch":
            self.switch_mode()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        await self.submit()
