"""Observable ordered item list with change notification."""

from __future__ import annotations

from typing import Any, Callable, Iterable

Callback = Callable[["ItemList", str, Any, Any], None]


def _emit(items: ItemList, action: str, old: Any, new: Any) -> None:
    """Fire every watcher with the change."""
    for cb in list(items._watchers):
        cb(items, action, old, new)


class ItemList:
    """Ordered collection of opaque items that notifies on mutation.

    Watchers are called as ``callback(items, action, old, new)`` where
    action is one of ``insert``, ``remove``, ``replace`` or ``reset``.
    Items can be anything; the list never inspects them.
    """

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: list[Any] = list(items)
        self._watchers: list[Callback] = []

    def __getitem__(self, index: int) -> Any:
        return self._items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        old = self._items[index]
        self._items[index] = value
        if old != value:
            _emit(self, "replace", old, value)

    def __delitem__(self, index: int) -> None:
        old = self._items[index]
        del self._items[index]
        _emit(self, "remove", old, None)

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def index(self, item: Any) -> int:
        return self._items.index(item)

    def append(self, item: Any) -> None:
        self.insert(len(self._items), item)

    def insert(self, index: int, item: Any) -> None:
        self._items.insert(index, item)
        _emit(self, "insert", None, item)

    def extend(self, items: Iterable[Any]) -> None:
        for item in items:
            self.append(item)

    def remove(self, item: Any) -> None:
        """Remove the first occurrence of item. Missing items are ignored."""
        try:
            idx = self._items.index(item)
        except ValueError:
            return
        del self[idx]

    def clear(self) -> None:
        self.replace([])

    def replace(self, items: Iterable[Any]) -> None:
        """Swap the whole contents in one notification."""
        old = self._items
        new = list(items)
        if old == new:
            return
        self._items = new
        _emit(self, "reset", old, new)

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch for any change. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def __repr__(self) -> str:
        return f"<ItemList {self._items!r}>"
