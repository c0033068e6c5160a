"""Shared fixtures for CLI tests."""

import pytest

from novaticket.cli._common import open_services

EMAIL = "jane.doe@gmail.com"
PASSWORD = "secret1"


@pytest.fixture
def data_dir(tmp_path):
    """An empty data directory."""
    return tmp_path / "data"


@pytest.fixture
def account(data_dir):
    """A data directory with one registered account, logged out."""
    services = open_services(str(data_dir))
    services.users.signup(EMAIL, PASSWORD, PASSWORD, "Jane Doe")
    return data_dir


@pytest.fixture
def logged_in(account):
    """A data directory with a logged-in session and the sample tickets."""
    services = open_services(str(account))
    services.users.login(EMAIL, PASSWORD)
    services.store.load()
    return account


@pytest.fixture
def seeded_ids(logged_in):
    """IDs of the sample tickets, in stored order."""
    return [t.id for t in open_services(str(logged_in)).store.load()]
