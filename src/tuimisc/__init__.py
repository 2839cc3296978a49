"""Filtered combo box and grid auto-layout for Textual."""

from tuimisc.combo import ComboController, ComboHost, ComboState
from tuimisc.config import ComboConfig
from tuimisc.errors import ConfigurationError, TuimiscError
from tuimisc.layout import GridChild, auto_set_cells
from tuimisc.matching import TextComparer, make_predicate, matches
from tuimisc.model import FilteringView, ItemList

__all__ = [
    "ComboConfig",
    "ComboController",
    "ComboHost",
    "ComboState",
    "ConfigurationError",
    "FilteringView",
    "GridChild",
    "ItemList",
    "TextComparer",
    "TuimiscError",
    "auto_set_cells",
    "make_predicate",
    "matches",
]
