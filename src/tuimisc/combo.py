"""Selection and interaction state for a filtering combo box.

``ComboController`` holds everything a filtering combo box has to decide:
when to filter, what to select, when the dropdown opens and closes, and
which text changes were caused by the user rather than by its own
selection updates. It talks to its UI through ``ComboHost`` and knows
nothing about Textual, so it can be driven directly in tests.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from tuimisc.config import ComboConfig
from tuimisc.debounce import DebounceScheduler, SetTimer
from tuimisc.filtering import FilterController
from tuimisc.matching import Display, TextComparer, display_text, make_predicate, resolve_display
from tuimisc.model.view import FilteringView

logger = logging.getLogger(__name__)


class ComboState(Enum):
    IDLE = "idle"
    EDITING = "editing"
    FILTERING = "filtering"
    DROPDOWN_OPEN = "dropdown-open"
    DROPDOWN_CLOSED = "dropdown-closed"


class ComboHost:
    """The UI surface a ``ComboController`` drives.

    Subclasses implement the text methods; the rest default to no-ops.
    """

    def get_text(self) -> str:
        """Return the text currently in the editable surface. Override in subclass."""
        raise NotImplementedError

    def set_text(self, text: str) -> bool:
        """Replace the editable text.

        Return True if a text-changed notification for this write will be
        delivered to the controller, False if it was suppressed or the text
        did not change. Override in subclass.
        """
        raise NotImplementedError

    def move_caret_to_end(self) -> None:
        pass

    def clear_text_selection(self) -> None:
        pass

    def show_dropdown(self) -> None:
        pass

    def hide_dropdown(self) -> None:
        pass

    def selection_changed(self, item: Any, index: int) -> None:
        pass


class ComboController:
    """Debounced type-ahead filtering over a per-widget view.

    Typing schedules a filter pass. The pass installs a predicate for the
    current text on the view, then selects the only match if there is
    exactly one, or opens the dropdown if there are several. Selection
    changes made here or by the user raise a one-shot flag that swallows
    the text change they cause, so they never trigger filtering.
    """

    def __init__(
        self,
        host: ComboHost,
        set_timer: SetTimer,
        config: ComboConfig | None = None,
        *,
        display: Display | None = None,
        comparer: TextComparer | None = None,
    ) -> None:
        config = config or ComboConfig()
        self._host = host
        self._display = resolve_display(display, config.display_member_path)
        self._comparer = comparer or config.comparer()
        self._filters = FilterController()
        self._debounce = DebounceScheduler(set_timer, self.run_filtering, config.delay)
        self._source: Any = None
        self._selected: Any = None
        # Set by a selection change, consumed by the text change it causes.
        self._selection_changed_flag = False
        self._caret_reset_pending = False
        self._dropdown_open = False
        self.state = ComboState.IDLE

    # -- properties --------------------------------------------------------

    @property
    def view(self) -> FilteringView | None:
        return self._filters.view

    @property
    def items(self) -> Any:
        return self._source

    @property
    def selected_item(self) -> Any:
        return self._selected

    @property
    def selected_index(self) -> int:
        """Position of the selection in the visible items, or -1."""
        view = self.view
        if self._selected is None or view is None:
            return -1
        return view.index(self._selected)

    @property
    def dropdown_open(self) -> bool:
        return self._dropdown_open

    @property
    def delay(self) -> int:
        return self._debounce.delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._debounce.delay = value

    @property
    def filtering_pending(self) -> bool:
        return self._debounce.pending

    def text_for(self, item: Any) -> str:
        """Display string for item.

        Without a display member, non-string items show as ``str(item)``;
        only filtering them is an error.
        """
        if item is None:
            return ""
        if self._display is None:
            return str(item)
        return display_text(item, self._display)

    # -- binding and lifecycle ---------------------------------------------

    def bind(self, source: Any) -> FilteringView | None:
        """Bind a new item source. Clears the selection."""
        self._debounce.cancel()
        self._source = source
        view = self._filters.bind(source)
        self._set_selection(None)
        return view

    def on_loaded(self) -> None:
        if self.view is None and self._source is not None:
            self._filters.bind(self._source)

    def on_unloaded(self) -> None:
        """Tear down: no filter left installed, no pass left pending."""
        self._debounce.cancel()
        self.close_dropdown()
        self._filters.release()
        self._selection_changed_flag = False
        self._caret_reset_pending = False
        self.state = ComboState.IDLE

    # -- inbound events ----------------------------------------------------

    def on_text_changed(self, text: str) -> None:
        if self._selection_changed_flag:
            self._selection_changed_flag = False
            return
        self.state = ComboState.EDITING
        self._debounce.schedule()

    def on_key(self, key: str) -> bool:
        """Handle a navigation key. Returns True if the key was consumed."""
        if key in ("enter", "tab"):
            # Committing must not leave a pass queued behind the focus change.
            self._debounce.cancel()
            selected = self._selected
            self.close_dropdown()
            self._commit(selected)
            return True
        if key in ("down", "up"):
            self.open_dropdown()
            if self._selected is None:
                self.run_filtering()
                view = self.view
                if self._selected is None and view is not None and len(view):
                    self._set_selection(view[0] if key == "down" else view[len(view) - 1])
            else:
                self._step(1 if key == "down" else -1)
            return True
        if key == "escape" and self._dropdown_open:
            self.close_dropdown()
            return True
        return False

    def select(self, item: Any) -> None:
        """Select item as if the user picked it."""
        self._set_selection(item)

    def select_index(self, index: int) -> None:
        """Select the visible item at index; -1 clears the selection."""
        if index == -1:
            self._set_selection(None)
            return
        view = self.view
        if view is None:
            raise IndexError(index)
        self._set_selection(view[index])

    def open_dropdown(self) -> None:
        if self._dropdown_open:
            return
        self._dropdown_open = True
        self._host.show_dropdown()
        self.state = ComboState.DROPDOWN_OPEN
        # Typing should append to the text, not replace a highlighted run.
        self._host.clear_text_selection()
        self._host.move_caret_to_end()

    def close_dropdown(self) -> None:
        if not self._dropdown_open:
            return
        self._dropdown_open = False
        self._host.hide_dropdown()
        self.state = ComboState.DROPDOWN_CLOSED
        self._filters.clear_filter()

    # -- filtering ---------------------------------------------------------

    def run_filtering(self) -> None:
        """Filter by the current text and settle selection and dropdown."""
        self.state = ComboState.FILTERING
        # Clearing the selection may wipe the text, so put it back.
        text = self._host.get_text()
        self._set_selection(None)
        self._write_text(text)

        predicate = make_predicate(text, self._display, self._comparer)
        try:
            count = self._filters.apply_filter(predicate)
        except Exception:
            self._filters.clear_filter()
            self._debounce.cancel()
            self._settle()
            raise
        logger.debug("filtered %r: %d visible", text, count)

        if count == 1:
            self._set_selection(self.view[0])
        if count > 1:
            self.open_dropdown()
        else:
            self.close_dropdown()

        if self._caret_reset_pending:
            self._host.move_caret_to_end()
            self._caret_reset_pending = False

        self._debounce.cancel()
        self._settle()

    # -- internals ---------------------------------------------------------

    def _settle(self) -> None:
        self.state = ComboState.DROPDOWN_OPEN if self._dropdown_open else ComboState.DROPDOWN_CLOSED

    def _write_text(self, text: str) -> None:
        if not self._host.set_text(text):
            # No notification is coming to consume the flag.
            self._selection_changed_flag = False

    def _set_selection(self, item: Any) -> None:
        if item is self._selected or (item is not None and item == self._selected):
            return
        self._selected = item
        self._on_selection_changed()

    def _on_selection_changed(self) -> None:
        item = self._selected
        self._selection_changed_flag = True
        self._caret_reset_pending = True
        self._host.selection_changed(item, self.selected_index)
        if item is not None:
            self._write_text(self.text_for(item))
        else:
            self._selection_changed_flag = False
        if not self._dropdown_open:
            self._filters.clear_filter()

    def _commit(self, item: Any) -> None:
        """Re-apply item as the selection after the dropdown closed."""
        if item is not self._selected:
            self._set_selection(item)
        elif item is not None:
            self._selection_changed_flag = True
            self._write_text(self.text_for(item))

    def _step(self, delta: int) -> None:
        view = self.view
        if view is None or not len(view):
            return
        index = view.index(self._selected)
        if index == -1:
            index = 0 if delta > 0 else len(view) - 1
        else:
            index = max(0, min(len(view) - 1, index + delta))
        self._set_selection(view[index])
