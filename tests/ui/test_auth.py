"""Tests for the login and signup screen."""

import pytest
from textual.widgets import Input, Static

from novaticket.ui.auth import AuthScreen
from novaticket.ui.dashboard import DashboardScreen


def _fill(screen, **values):
    for name, value in values.items():
        screen.query_one(f"#{name}", Input).value = value


def _error(screen, name):
    return str(screen.query_one(f"#{name}-error", Static).content)


@pytest.mark.asyncio
async def test_logged_out_starts_on_login(app):
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, AuthScreen)
        assert app.screen.is_login


@pytest.mark.asyncio
async def test_login_opens_dashboard(registered, app):
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        _fill(screen, email="jane.doe@gmail.com", password="secret1")
        await screen.submit()
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
        assert app.services.gate.is_authenticated()


@pytest.mark.asyncio
async def test_login_shows_field_errors(app):
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        _fill(screen, email="jane@yahoo.com", password="abc")
        await screen.submit()
        await pilot.pause()
        assert isinstance(app.screen, AuthScreen)
        assert "valid Gmail address" in _error(screen, "email")
        assert "at least 5 characters" in _error(screen, "password")


@pytest.mark.asyncio
async def test_wrong_password_stays_on_login(registered, app):
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        _fill(screen, email="jane.doe@gmail.com", password="wrong-password")
        await screen.submit()
        await pilot.pause()
        assert isinstance(app.screen, AuthScreen)
        assert not app.services.gate.is_authenticated()


@pytest.mark.asyncio
async def test_signup_then_login(app):
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        screen.switch_mode()
        assert not screen.is_login
        assert screen.query_one("#full_name", Input).display

        _fill(
            screen,
            full_name="Sam Lee",
            email="sam.lee@gmail.com",
            password="hunter22",
            confirm_password="hunter22",
        )
        await screen.submit()
        await pilot.pause()

        assert screen.is_login
        assert screen.query_one("#email", Input).value == "sam.lee@gmail.com"
        assert not app.services.gate.is_authenticated()

        _fill(screen, password="hunter22")
        await screen.submit()
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)


@pytest.mark.asyncio
async def test_signup_mismatched_passwords(app):
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        screen.switch_mode()
        _fill(
            screen,
            full_name="Sam Lee",
            email="sam.lee@gmail.com",
            password="hunter22",
            confirm_password="hunter23",
        )
        await screen.submit()
        await pilot.pause()
        assert "do not match" in _error(screen, "confirm_password")
        assert app.services.users.find("sam.lee@gmail.com") is None


@pytest.mark.asyncio
async def test_switch_mode_clears_form(app):
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        _fill(screen, email="jane.doe@gmail.com")
        screen.switch_mode()
        assert screen.query_one("#email", Input).value == ""
