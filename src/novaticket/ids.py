"""Ticket ID generation."""

import time


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def max_id(ids) -> int | None:
    """Find the highest ID, or None if there are none."""
    highest = None
    for id_ in ids:
        if highest is None or id_ > highest:
            highest = id_
    return highest


def next_id(current_max: int | None, timestamp: int) -> int:
    """Generate the next ID after current_max.

    - If None, returns timestamp
    - If timestamp is ahead of current_max, returns timestamp
    - Otherwise returns current_max + 1 (same millisecond, or clock skew)
    """
    if current_max is None or timestamp > current_max:
        return timestamp
    return current_max + 1


class IdAllocator:
    """Hands out timestamp-derived IDs that only ever increase.

    The floor is raised by every ID it sees, so IDs already present in a
    loaded collection are never reissued.
    """

    def __init__(self, clock=now_ms) -> None:
        self._clock = clock
        self._last: int | None = None

    def observe(self, ids) -> None:
        """Raise the floor to the highest of ids."""
        self._last = max_id([*ids, *([] if self._last is None else [self._last])])

    def allocate(self) -> int:
        """Return an ID greater than every ID allocated or observed so far."""
        self._last = next_id(self._last, self._clock())
        return self._last
