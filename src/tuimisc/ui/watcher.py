"""Mixin that manages source watches with suppression and auto-cleanup."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable


class WatcherMixin:
    """Mixin for widgets that watch observable sources.

    A source is anything with ``watch(callback)`` returning an unwatch
    callable, such as ``ItemList`` or ``FilteringView``.

    Subclasses should:
    - Call ``_init_watcher()`` in ``__init__``
    - Use ``self.source_watch(source, callback)`` instead of ``source.watch(...)``
    - Use ``with self.suppressing():`` around writes whose notifications they
      don't want to handle
    - Skip unwatching in ``on_unmount`` -- the mixin handles cleanup
    """

    def _init_watcher(self) -> None:
        self._watches: list[Callable[[], Any]] = []
        self._suppressing = False

    def source_watch(self, source: Any, callback: Callable[..., None]) -> None:
        """Register a watch that is auto-guarded by suppression and auto-cleaned on unmount."""

        def guarded(*args: Any) -> None:
            if not self._suppressing:
                callback(*args)

        unwatch = source.watch(guarded)
        self._watches.append(unwatch)

    @contextmanager
    def suppressing(self):
        """Context manager that suppresses watch callbacks."""
        self._suppressing = True
        try:
            yield
        finally:
            self._suppressing = False

    def unwatch_all(self) -> None:
        for unwatch in self._watches:
            unwatch()
        self._watches.clear()

    def on_unmount(self) -> None:
        self.unwatch_all()
