"""Tests for ticket ID generation."""

from novaticket.ids import IdAllocator, max_id, next_id


def test_max_id_empty():
    assert max_id([]) is None


def test_max_id():
    assert max_id([5, 900, 12]) == 900


def test_next_id_uses_timestamp_when_ahead():
    assert next_id(None, 1700000000000) == 1700000000000
    assert next_id(10, 1700000000000) == 1700000000000


def test_next_id_same_millisecond():
    assert next_id(1700000000000, 1700000000000) == 1700000000001


def test_next_id_clock_behind():
    """A clock that went backwards still yields a larger ID."""
    assert next_id(1700000000500, 1700000000000) == 1700000000501


def test_allocator_frozen_clock_never_repeats():
    ids = IdAllocator(clock=lambda: 1000)
    issued = [ids.allocate() for _ in range(5)]
    assert issued == [1000, 1001, 1002, 1003, 1004]


def test_allocator_observe_raises_floor():
    ids = IdAllocator(clock=lambda: 1000)
    ids.observe([5000, 42])
    assert ids.allocate() == 5001


def test_allocator_observe_never_lowers_floor():
    ids = IdAllocator(clock=lambda: 1000)
    ids.observe([5000])
    ids.observe([10])
    assert ids.allocate() == 5001


def test_allocator_observe_empty():
    ids = IdAllocator(clock=lambda: 1000)
    ids.observe([])
    assert ids.allocate() == 1000
