"""Reactive records and collections with change notification."""

from __future__ import annotations

from typing import Any, Callable

Callback = Callable[["Node | ListNode", str, Any, Any], None]


def _adopt(value: Any, parent: Node | ListNode, key: str) -> Any:
    """Wrap dicts as Nodes and point existing Nodes/ListNodes at their new parent."""
    if isinstance(value, dict):
        return Node(_parent=parent, _key=key, **value)
    if isinstance(value, (Node, ListNode)):
        object.__setattr__(value, "_parent", parent)
        object.__setattr__(value, "_key", key)
    return value


def _emit(node: Node | ListNode, key: str, old: Any, new: Any) -> None:
    """Call watchers of key on node, then the watchers of each ancestor."""
    for cb in list(node._watchers.get(key, ())):
        cb(node, key, old, new)
    child = node
    while child._parent is not None:
        parent = child._parent
        for cb in list(parent._watchers.get(child._key, ())):
            cb(node, key, old, new)
        child = parent


def _unwatcher(watchers: dict[str, list[Callback]], key: str, callback: Callback) -> Callable[[], None]:
    def unwatch() -> None:
        callbacks = watchers.get(key, [])
        if callback in callbacks:
            callbacks.remove(callback)

    return unwatch


class Node:
    """Attribute-style record that reports its own changes.

    Reading a missing field gives None and assigning None removes it.
    Assigning a different value calls the field's watchers, and the
    change bubbles to whatever collection holds this record.
    """

    def __init__(
        self,
        _parent: Node | ListNode | None = None,
        _key: str | None = None,
        **fields: Any,
    ) -> None:
        object.__setattr__(self, "_fields", {})
        object.__setattr__(self, "_watchers", {})
        object.__setattr__(self, "_parent", None)
        object.__setattr__(self, "_key", _key)
        object.__setattr__(self, "_version", 0)
        for k, v in fields.items():
            setattr(self, k, v)
        object.__setattr__(self, "_parent", _parent)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._fields.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        old = self._fields.get(name)
        if value is None:
            self._fields.pop(name, None)
        else:
            value = _adopt(value, parent=self, key=name)
            self._fields[name] = value
        if old != value:
            self._version += 1
            _emit(self, name, old, value)

    def __contains__(self, key: str) -> bool:
        return key in self._fields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._fields == other._fields

    __hash__ = None

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        """Call callback(node, key, old, new) when key changes. Returns an unwatch callable."""
        self._watchers.setdefault(key, []).append(callback)
        return _unwatcher(self._watchers, key, callback)

    def keys(self):
        return self._fields.keys()

    def items(self):
        return self._fields.items()

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy, recursing into child Nodes."""
        return {k: v.to_dict() if isinstance(v, Node) else v for k, v in self._fields.items()}

    def update(self, other: Node) -> None:
        """Make this record equal to other field by field, keeping watchers."""
        for key in set(self.keys()) - set(other.keys()):
            setattr(self, key, None)
        for key, new_value in other.items():
            old_value = self._fields.get(key)
            if isinstance(old_value, Node) and isinstance(new_value, Node):
                old_value.update(new_value)
            elif old_value != new_value:
                setattr(self, key, new_value)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"<Node({self._key or ''}) {fields}>"


class ListNode:
    """Ordered collection of Nodes keyed by id, with change notification.

    Keys are stored as strings, so ``tickets[42]`` and ``tickets["42"]``
    name the same item. Assigning None removes an item. Watch "*" to hear
    about reorders.
    """

    def __init__(
        self,
        _parent: Node | None = None,
        _key: str | None = None,
    ) -> None:
        object.__setattr__(self, "_by_id", {})
        object.__setattr__(self, "_watchers", {})
        object.__setattr__(self, "_parent", _parent)
        object.__setattr__(self, "_key", _key)
        object.__setattr__(self, "_version", 0)

    def __getitem__(self, key: str | int) -> Any:
        return self._by_id.get(str(key))

    def __setitem__(self, key: str | int, value: Any) -> None:
        key = str(key)
        old = self._by_id.get(key)
        if value is None:
            if key not in self._by_id:
                return
            del self._by_id[key]
            self._version += 1
            _emit(self, key, old, None)
            return
        value = _adopt(value, parent=self, key=key)
        self._by_id[key] = value
        if old != value:
            self._version += 1
            _emit(self, key, old, value)

    def __iter__(self):
        return iter(list(self._by_id.values()))

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, key: str | int) -> bool:
        return str(key) in self._by_id

    def watch(self, key: str | int, callback: Callback) -> Callable[[], None]:
        """Watch one item id (or "*" for reorders). Returns an unwatch callable."""
        key = str(key)
        self._watchers.setdefault(key, []).append(callback)
        return _unwatcher(self._watchers, key, callback)

    def keys(self) -> list[str]:
        return list(self._by_id.keys())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._by_id.items())

    def update(self, other: ListNode) -> None:
        """Make this collection match other in content and order, keeping watchers."""
        for key in set(self._by_id) - set(other._by_id):
            self[key] = None
        for key, new_value in other._by_id.items():
            old_value = self._by_id.get(key)
            if isinstance(old_value, Node) and isinstance(new_value, Node):
                old_value.update(new_value)
            elif old_value != new_value:
                self[key] = new_value
        old_keys = self.keys()
        new_keys = other.keys()
        if old_keys != new_keys:
            object.__setattr__(self, "_by_id", {k: self._by_id[k] for k in new_keys})
            self._version += 1
            _emit(self, "*", old_keys, new_keys)

    def __repr__(self) -> str:
        return f"<ListNode({self._key or ''}) [{', '.join(self._by_id)}]>"
