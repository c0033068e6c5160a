"""Fixtures for UI tests."""

import pytest

from novaticket.services import Services
from novaticket.storage import StoragePartition
from novaticket.ui import NovaTicketApp

EMAIL = "jane.doe@gmail.com"
PASSWORD = "secret1"


@pytest.fixture
def partition():
    return StoragePartition()


@pytest.fixture
def other_tab(partition):
    """A second view on the same partition, for writes from elsewhere."""
    return Services.open(partition)


@pytest.fixture
def registered(partition, other_tab):
    """A partition with one account and the sample tickets."""
    other_tab.users.signup(EMAIL, PASSWORD, PASSWORD, "Jane Doe")
    other_tab.store.load()
    return partition


@pytest.fixture
def logged_in(registered, other_tab):
    other_tab.users.login(EMAIL, PASSWORD)
    return registered


@pytest.fixture
def app(partition):
    return NovaTicketApp(partition=partition)
