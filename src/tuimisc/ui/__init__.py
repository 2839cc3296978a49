"""Textual UI for tuimisc."""

from tuimisc.ui.app import DemoApp
from tuimisc.ui.combo import FilteredComboBox
from tuimisc.ui.watcher import WatcherMixin

__all__ = [
    "DemoApp",
    "FilteredComboBox",
    "WatcherMixin",
]
