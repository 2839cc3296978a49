"""Demo application showing two combo boxes over one item list."""

from __future__ import annotations

import logging
from typing import Any

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from tuimisc.config import ComboConfig
from tuimisc.model.items import ItemList
from tuimisc.ui.combo import FilteredComboBox

logger = logging.getLogger(__name__)


class DemoApp(App):
    """Two filtered combo boxes sharing one ``ItemList``.

    Filtering in one never narrows the other.
    """

    CSS = """
    #main {
        padding: 1 2;
        height: auto;
    }
    .caption {
        margin-top: 1;
        color: $text-muted;
    }
    #status {
        margin-top: 1;
    }
    """

    TITLE = "tuimisc"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, items: list[Any], config: ComboConfig | None = None):
        super().__init__()
        self.items = ItemList(items)
        self.config = config or ComboConfig()

    def compose(self) -> ComposeResult:
        with Vertical(id="main"):
            yield Static("First", classes="caption")
            yield FilteredComboBox(self.items, config=self.config, placeholder="Type to filter", id="first")
            yield Static("Second (same items)", classes="caption")
            yield FilteredComboBox(self.items, config=self.config, placeholder="Type to filter", id="second")
            yield Static("", id="status")

    def on_filtered_combo_box_selection_changed(self, event: FilteredComboBox.SelectionChanged) -> None:
        combo = event.control
        text = "nothing" if event.item is None else combo.controller.text_for(event.item)
        logger.info("%s selected %s", combo.id, text)
        self.query_one("#status", Static).update(f"{combo.id}: {text}")

    def on_filtered_combo_box_submitted(self, event: FilteredComboBox.Submitted) -> None:
        logger.info("submitted %r", event.text)
