"""Observable item sources and filtered views."""

from tuimisc.model.items import ItemList
from tuimisc.model.view import FilteringView

__all__ = [
    "FilteringView",
    "ItemList",
]
