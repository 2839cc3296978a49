"""Editable combo box that filters its items as you type."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import DescendantBlur, Key
from textual.message import Message
from textual.widgets import Input, OptionList
from textual.widgets.option_list import Option

from tuimisc.combo import ComboController, ComboHost
from tuimisc.config import ComboConfig
from tuimisc.matching import Display, TextComparer
from tuimisc.model.view import FilteringView
from tuimisc.ui.watcher import WatcherMixin


class FilteredComboBox(ComboHost, WatcherMixin, Container):
    """Text input over a dropdown of items narrowed by what is typed.

    Items can be any iterable; an ``ItemList`` keeps the dropdown in sync
    with later changes. Non-string items need ``display_member_path`` (or a
    ``display`` callable) to be filtered. Filtering runs ``delay``
    milliseconds after the last keystroke. A single match is selected
    automatically; several open the dropdown.

    Each combo box filters a private view of its items, so two combo boxes
    bound to the same list never see each other's filter.
    """

    DEFAULT_CSS = """
    FilteredComboBox {
        height: auto;
    }
    FilteredComboBox > OptionList {
        max-height: 8;
        display: none;
    }
    FilteredComboBox > OptionList.-visible {
        display: block;
    }
    """

    class SelectionChanged(Message):
        """Posted when the selected item changes, by the user or by filtering."""

        def __init__(self, combo: FilteredComboBox, item: Any, index: int) -> None:
            super().__init__()
            self.combo = combo
            self.item = item
            self.index = index

        @property
        def control(self) -> FilteredComboBox:
            return self.combo

    class Submitted(Message):
        """Posted when the user commits with Enter."""

        def __init__(self, combo: FilteredComboBox, item: Any, text: str) -> None:
            super().__init__()
            self.combo = combo
            self.item = item
            self.text = text

        @property
        def control(self) -> FilteredComboBox:
            return self.combo

    class Cancelled(Message):
        """Posted on Escape with the dropdown already closed."""

        pass

    def __init__(
        self,
        items: Any = None,
        *,
        display: Display | None = None,
        display_member_path: str | None = None,
        delay: int | None = None,
        comparer: TextComparer | None = None,
        config: ComboConfig | None = None,
        placeholder: str = "",
        value: str = "",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._init_watcher()
        overrides: dict[str, Any] = {}
        if display_member_path is not None:
            overrides["display_member_path"] = display_member_path
        if delay is not None:
            overrides["delay"] = delay
        config = replace(config or ComboConfig(), **overrides)
        self._input = Input(placeholder=placeholder, value=value)
        self._options = OptionList()
        self._controller = ComboController(
            self,
            self.set_timer,
            config,
            display=display,
            comparer=comparer,
        )
        self._controller.bind(items)

    def compose(self) -> ComposeResult:
        yield self._input
        yield self._options

    # -- public API ---------------------------------------------------------

    @property
    def controller(self) -> ComboController:
        return self._controller

    @property
    def items(self) -> Any:
        return self._controller.items

    @items.setter
    def items(self, source: Any) -> None:
        self._controller.bind(source)
        if self.is_mounted:
            self._watch_view()

    @property
    def view(self) -> FilteringView | None:
        return self._controller.view

    @property
    def selected_item(self) -> Any:
        return self._controller.selected_item

    @selected_item.setter
    def selected_item(self, item: Any) -> None:
        self._controller.select(item)

    @property
    def selected_index(self) -> int:
        return self._controller.selected_index

    @property
    def text(self) -> str:
        return self._input.value

    @property
    def delay(self) -> int:
        return self._controller.delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._controller.delay = value

    @property
    def dropdown_open(self) -> bool:
        return self._controller.dropdown_open

    # -- ComboHost ------------------------------------------------------------

    def get_text(self) -> str:
        return self._input.value

    def set_text(self, text: str) -> bool:
        if self._input.value != text:
            with self.prevent(Input.Changed):
                self._input.value = text
        self._input.cursor_position = len(text)
        return False

    def move_caret_to_end(self) -> None:
        self._input.cursor_position = len(self._input.value)

    def clear_text_selection(self) -> None:
        # Re-setting the cursor collapses any selection onto it.
        self._input.cursor_position = self._input.cursor_position

    def show_dropdown(self) -> None:
        self._options.add_class("-visible")

    def hide_dropdown(self) -> None:
        self._options.remove_class("-visible")

    def selection_changed(self, item: Any, index: int) -> None:
        if self.is_mounted:
            self._options.highlighted = index if index >= 0 else None
        self.post_message(self.SelectionChanged(self, item, index))

    # -- view ---------------------------------------------------------------

    def _watch_view(self) -> None:
        self.unwatch_all()
        view = self._controller.view
        if view is not None:
            self.source_watch(view, self._on_view_changed)
        self._populate()

    def _on_view_changed(self, view: FilteringView) -> None:
        self._populate()

    def _populate(self) -> None:
        """Rebuild the dropdown from the visible items."""
        options = self._options
        options.clear_options()
        view = self._controller.view
        if view is None:
            return
        options.add_options([Option(self._controller.text_for(item)) for item in view])
        index = self._controller.selected_index
        options.highlighted = index if index >= 0 else None

    # -- events -------------------------------------------------------------

    def on_mount(self) -> None:
        self._controller.on_loaded()
        self._watch_view()

    def on_unmount(self) -> None:
        # The dropdown is going away; don't rebuild it while clearing the filter.
        with self.suppressing():
            self._controller.on_unloaded()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self._controller.on_text_changed(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()

    def _on_key(self, event: Key) -> None:
        """Intercept navigation keys before they reach the Input."""
        key = event.key
        if key in ("down", "up"):
            event.prevent_default()
            event.stop()
            self._controller.on_key(key)
        elif key == "enter":
            event.prevent_default()
            event.stop()
            self._controller.on_key(key)
            item = self._controller.selected_item
            self.post_message(self.Submitted(self, item, self._input.value))
        elif key == "tab":
            # Let focus move on.
            self._controller.on_key(key)
        elif key == "escape":
            event.prevent_default()
            event.stop()
            if not self._controller.on_key(key):
                self.post_message(self.Cancelled())

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Handle a click on a dropdown item."""
        event.stop()
        self._controller.select_index(event.option_index)
        self._controller.close_dropdown()

    def on_descendant_blur(self, event: DescendantBlur) -> None:
        """Close dropdown when focus leaves a child widget."""
        self.call_after_refresh(self._maybe_close_on_blur)

    def _maybe_close_on_blur(self) -> None:
        """Close dropdown if focus has truly left us."""
        if not self.is_attached:
            return
        focused = self.app.focused
        if focused is None or focused not in self.walk_children():
            self._controller.close_dropdown()
