"""Shared fixtures: a manual clock and a recording combo host."""

import pytest

from tuimisc.combo import ComboController, ComboHost
from tuimisc.config import ComboConfig


class FakeTimer:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.stopped = False
        self.fired = False

    def stop(self) -> None:
        self.stopped = True


class FakeClock:
    """Stands in for ``Widget.set_timer``; time only moves on ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []
        self.fired = 0

    def set_timer(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if not t.stopped and not t.fired and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            timer.fired = True
            self.fired += 1
            timer.callback()
        self.now = target


class FakeHost(ComboHost):
    """Records what the controller asks of the UI.

    With ``echo=True`` a programmatic text write is reported straight back
    to the controller, like a toolkit that notifies synchronously.
    """

    def __init__(self, echo: bool = True) -> None:
        self.controller: ComboController | None = None
        self.echo = echo
        self.text = ""
        self.caret = 0
        self.text_selection = (0, 0)
        self.dropdown_visible = False
        self.selections: list[tuple] = []
        self.caret_moves = 0

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> bool:
        if text == self.text:
            return False
        self.text = text
        self.caret = len(text)
        if self.echo:
            self.controller.on_text_changed(text)
        return self.echo

    def move_caret_to_end(self) -> None:
        self.caret = len(self.text)
        self.caret_moves += 1

    def clear_text_selection(self) -> None:
        self.text_selection = (self.caret, self.caret)

    def show_dropdown(self) -> None:
        self.dropdown_visible = True

    def hide_dropdown(self) -> None:
        self.dropdown_visible = False

    def selection_changed(self, item, index) -> None:
        self.selections.append((item, index))

    def type(self, text: str) -> None:
        """Simulate the user editing the text."""
        self.text = text
        self.caret = len(text)
        self.controller.on_text_changed(text)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_combo(clock):
    """Build a controller bound to items. Returns (controller, host)."""

    def _make(items=None, *, echo=True, display=None, comparer=None, **options):
        host = FakeHost(echo=echo)
        controller = ComboController(
            host,
            clock.set_timer,
            ComboConfig(**options),
            display=display,
            comparer=comparer,
        )
        host.controller = controller
        controller.bind(items)
        return controller, host

    return _make
