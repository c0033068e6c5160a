"""Local key-value storage partitions with cross-context change events.

A partition is one shared key-value space (string keys, string values).
Each open view holds a StorageContext on it, the way a browser tab holds
``window.localStorage``. Announcing a change delivers a StorageEvent to
every *other* context on the partition, never to the writer.
"""

from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageError(Exception):
    """Base class for storage failures."""


class StorageWriteFailed(StorageError):
    """A write was rejected (quota exceeded, disk error, storage disabled)."""


class StorageCorrupt(StorageError):
    """A stored value is present but cannot be decoded."""


@dataclass(frozen=True)
class StorageEvent:
    """A change to one key, as seen by another context."""

    key: str
    old_value: str | None
    new_value: str | None


Listener = Callable[[StorageEvent], None]


def _size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class MemoryBackend:
    """In-process storage, optionally limited to quota bytes."""

    def __init__(self, quota: int | None = None) -> None:
        self.quota = quota
        self._data: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota is not None:
            used = sum(_size(k, v) for k, v in self._data.items() if k != key)
            if used + _size(key, value) > self.quota:
                raise StorageWriteFailed(f"quota of {self.quota} bytes exceeded writing '{key}'")
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data.keys())


class DirectoryBackend:
    """One file per key in a directory, replaced atomically on write.

    Several processes may share a directory; each sees the others' writes
    on its next read.
    """

    def __init__(self, path: str | Path, quota: int | None = None) -> None:
        self.path = Path(path)
        self.quota = quota

    def _file(self, key: str) -> Path:
        if not KEY_RE.match(key):
            raise ValueError(f"invalid storage key '{key}'")
        return self.path / key

    def get_item(self, key: str) -> str | None:
        try:
            return self._file(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        target = self._file(key)
        if self.quota is not None:
            used = sum(_size(k, self.get_item(k) or "") for k in self.keys() if k != key)
            if used + _size(key, value) > self.quota:
                raise StorageWriteFailed(f"quota of {self.quota} bytes exceeded writing '{key}'")
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{key}.", dir=self.path)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp, target)
            except BaseException:
                os.unlink(tmp)
                raise
        except OSError as e:
            raise StorageWriteFailed(f"cannot write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._file(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageWriteFailed(f"cannot remove '{key}': {e}") from e

    def keys(self) -> list[str]:
        if not self.path.is_dir():
            return []
        return sorted(p.name for p in self.path.iterdir() if p.is_file() and not p.name.startswith("."))


class StoragePartition:
    """A shared key-value space that hands out per-view contexts."""

    def __init__(self, backend: MemoryBackend | DirectoryBackend | None = None) -> None:
        self.backend = backend if backend is not None else MemoryBackend()
        self._contexts: list[StorageContext] = []

    def open_context(self) -> StorageContext:
        """Open a new context (a new tab) on this partition."""
        context = StorageContext(self)
        self._contexts.append(context)
        return context

    def _deliver(self, source: StorageContext, event: StorageEvent) -> None:
        for context in list(self._contexts):
            if context is not source:
                context.dispatch(event)

    def _close(self, context: StorageContext) -> None:
        if context in self._contexts:
            self._contexts.remove(context)


class StorageContext:
    """One view's handle on a partition.

    Reads and writes go straight to the backend. Listeners registered here
    hear about changes announced by other contexts (or detected by a
    StoragePoller), never about this context's own writes.
    """

    def __init__(self, partition: StoragePartition) -> None:
        self.partition = partition
        self._listeners: list[Listener] = []
        self._known: dict[str, str | None] = {}

    def get_item(self, key: str) -> str | None:
        value = self.partition.backend.get_item(key)
        self._known[key] = value
        return value

    def set_item(self, key: str, value: str) -> None:
        self.partition.backend.set_item(key, value)
        self._known[key] = value

    def remove_item(self, key: str) -> None:
        self.partition.backend.remove_item(key)
        self._known[key] = None

    def keys(self) -> list[str]:
        return self.partition.backend.keys()

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Listen for storage events. Returns a remove callable."""
        self._listeners.append(listener)
        return lambda: listener in self._listeners and self._listeners.remove(listener)

    def announce(self, key: str, old_value: str | None, new_value: str | None) -> None:
        """Tell every other context on the partition that key changed."""
        self.partition._deliver(self, StorageEvent(key, old_value, new_value))

    def close(self) -> None:
        """Detach from the partition; no further events are delivered."""
        self._listeners.clear()
        self.partition._close(self)

    def changed(self, key: str) -> StorageEvent | None:
        """Compare key in the backend with what this context last saw.

        Returns an event if another writer changed it, else None. The first
        check of a key this context has never seen only records it.
        """
        current = self.partition.backend.get_item(key)
        if key not in self._known:
            self._known[key] = current
            return None
        if current == self._known[key]:
            return None
        return StorageEvent(key, self._known[key], current)

    def dispatch(self, event: StorageEvent) -> None:
        """Record event as seen and pass it to this context's listeners."""
        self._known[event.key] = event.new_value
        for listener in list(self._listeners):
            listener(event)
