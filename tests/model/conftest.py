"""Shared fixtures for model tests."""

import pytest

from novaticket.ids import IdAllocator
from novaticket.model.store import TicketStore
from novaticket.services import Services
from novaticket.storage import MemoryBackend, StoragePartition
from novaticket.sync import SyncBroadcaster


class Clock:
    """A millisecond clock that only moves when told to."""

    def __init__(self, now=1_700_000_000_000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def partition():
    return StoragePartition(MemoryBackend())


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def broadcaster(partition):
    return SyncBroadcaster(partition.open_context())


@pytest.fixture
def today():
    return "2025-03-14"


@pytest.fixture
def store(broadcaster, clock, today):
    """A store on its own context, with a frozen clock and date."""
    return TicketStore(broadcaster.context, broadcaster, ids=IdAllocator(clock), clock=lambda: today)


@pytest.fixture
def services(partition):
    return Services.open(partition)
