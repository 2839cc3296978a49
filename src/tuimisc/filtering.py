"""Per-widget ownership of the filter installed on an item view."""

from __future__ import annotations

import logging
from typing import Any

from tuimisc.model.view import FilteringView, Predicate

logger = logging.getLogger(__name__)


def acquire_view(source: Any) -> FilteringView | None:
    """Return a view to filter for source.

    A ``FilteringView`` is used as-is. Anything else iterable gets a new,
    private view so filtering never leaks into other readers of the same
    collection. None, or something that cannot be iterated, has no view.
    """
    if source is None:
        return None
    if isinstance(source, FilteringView):
        return source
    try:
        iter(source)
    except TypeError:
        logger.debug("%s is not iterable, filtering disabled", type(source).__name__)
        return None
    return FilteringView(source)


class FilterController:
    """Installs and removes this widget's predicate on its view.

    Every operation is a no-op when no source is bound, so a widget works
    before its data arrives.
    """

    def __init__(self) -> None:
        self._view: FilteringView | None = None
        self._owns_view = False

    @property
    def view(self) -> FilteringView | None:
        return self._view

    def bind(self, source: Any) -> FilteringView | None:
        """Switch to a new source, releasing the previous view."""
        self.release()
        view = acquire_view(source)
        self._view = view
        self._owns_view = view is not None and view is not source
        return view

    def apply_filter(self, predicate: Predicate) -> int:
        """Install predicate and return the number of visible items."""
        view = self._view
        if view is None:
            return 0
        view.filter = predicate
        return len(view)

    def clear_filter(self) -> None:
        """Remove the predicate, restoring every item. Safe to repeat."""
        view = self._view
        if view is None or view.filter is None:
            return
        view.filter = None

    def release(self) -> None:
        """Clear the filter and stop following the source."""
        self.clear_filter()
        if self._view is not None and self._owns_view:
            self._view.detach()
        self._view = None
        self._owns_view = False
