"""Live filtered projection over an item source."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]
ViewCallback = Callable[["FilteringView"], None]


class FilteringView:
    """Filterable, observable view over an iterable of items.

    The view never mutates its source. It keeps the subset of source items
    accepted by ``filter`` (all of them when the filter is None) and calls
    its watchers after every recomputation. If the source has a ``watch``
    method (like ``ItemList``), source changes trigger a refresh.
    """

    def __init__(self, source: Iterable[Any]) -> None:
        self._source = source
        self._filter: Predicate | None = None
        self._visible: list[Any] = list(source)
        self._watchers: list[ViewCallback] = []
        self._unwatch_source: Callable[[], Any] | None = None
        watch = getattr(source, "watch", None)
        if callable(watch):
            self._unwatch_source = watch(self._on_source_changed)

    @property
    def source(self) -> Iterable[Any]:
        return self._source

    @property
    def filter(self) -> Predicate | None:
        return self._filter

    @filter.setter
    def filter(self, predicate: Predicate | None) -> None:
        previous = self._filter
        self._filter = predicate
        try:
            self.refresh()
        except Exception:
            # Leave the view consistent with its visible list.
            self._filter = previous
            raise

    def refresh(self) -> None:
        """Recompute the visible subset and notify watchers."""
        predicate = self._filter
        if predicate is None:
            visible = list(self._source)
        else:
            visible = [item for item in self._source if predicate(item)]
        self._visible = visible
        for cb in list(self._watchers):
            cb(self)

    def _on_source_changed(self, source: Any, action: str, old: Any, new: Any) -> None:
        logger.debug("source %s changed, refreshing view", action)
        self.refresh()

    def watch(self, callback: ViewCallback) -> Callable[[], None]:
        """Call callback(view) after every recomputation. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def detach(self) -> None:
        """Stop following the source."""
        if self._unwatch_source is not None:
            self._unwatch_source()
            self._unwatch_source = None

    def __iter__(self):
        return iter(self._visible)

    def __len__(self) -> int:
        return len(self._visible)

    def __getitem__(self, index: int) -> Any:
        return self._visible[index]

    def __contains__(self, item: Any) -> bool:
        return item in self._visible

    def __bool__(self) -> bool:
        # An empty view is still a view.
        return True

    def index(self, item: Any) -> int:
        """Position of item in the visible subset, or -1."""
        for i, candidate in enumerate(self._visible):
            if candidate is item or candidate == item:
                return i
        return -1

    def __repr__(self) -> str:
        state = "filtered" if self._filter is not None else "unfiltered"
        return f"<FilteringView {state} {len(self._visible)} visible>"
