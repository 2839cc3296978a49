"""Trailing-edge debounce on top of a host-provided one-shot timer."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from tuimisc.errors import ConfigurationError

DEFAULT_DELAY = 500


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


SetTimer = Callable[[float, Callable[[], None]], TimerHandle]


class DebounceScheduler:
    """Coalesce bursts of ``schedule()`` calls into one callback.

    ``set_timer(seconds, callback)`` must start a one-shot timer and return
    a handle with ``stop()``; Textual's ``Widget.set_timer`` fits. Each
    ``schedule()`` restarts the countdown, so the callback runs once,
    ``delay`` milliseconds after the last call.
    """

    def __init__(self, set_timer: SetTimer, callback: Callable[[], None], delay: int = DEFAULT_DELAY) -> None:
        self._set_timer = set_timer
        self._callback = callback
        self._handle: TimerHandle | None = None
        self._generation = 0
        self.delay = delay

    @property
    def delay(self) -> int:
        """Quiet period in milliseconds."""
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(f"delay must be a non-negative integer, got {value!r}")
        self._delay = value

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """Start, or restart, the countdown."""
        self.cancel()
        self._generation += 1
        gen = self._generation
        self._handle = self._set_timer(self._delay / 1000, lambda: self._fire(gen))

    def cancel(self) -> None:
        """Drop any pending countdown without firing."""
        handle = self._handle
        self._handle = None
        self._generation += 1
        if handle is not None:
            handle.stop()

    def _fire(self, gen: int) -> None:
        # A stopped timer can still have a tick queued.
        if gen != self._generation:
            return
        self._handle = None
        self._callback()
