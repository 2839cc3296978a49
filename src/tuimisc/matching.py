"""Accent- and case-insensitive substring matching for filter predicates.

The comparison rules are a value passed in by the caller (``TextComparer``)
rather than read from the process locale, so the same query always filters
the same way regardless of where the code runs.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from tuimisc.errors import ConfigurationError

Display = Callable[[Any], str]

_MISSING = object()


@dataclass(frozen=True)
class TextComparer:
    """Rules for comparing display strings against a query.

    Accent folding decomposes text (NFKD) and drops combining marks, so
    ``"café"`` contains ``"cafe"``. Case folding uses ``str.casefold``.
    """

    ignore_case: bool = True
    ignore_accents: bool = True

    def fold(self, text: str) -> str:
        """Normalise text according to these rules."""
        if self.ignore_accents:
            decomposed = unicodedata.normalize("NFKD", text)
            text = "".join(c for c in decomposed if not unicodedata.combining(c))
        if self.ignore_case:
            text = text.casefold()
        return text

    def contains(self, haystack: str, needle: str) -> bool:
        """Return True if needle occurs anywhere in haystack."""
        return self.fold(needle) in self.fold(haystack)


DEFAULT_COMPARER = TextComparer()


def _member_accessor(path: str) -> Display:
    """Build an accessor that reads a (possibly dotted) member path."""
    parts = path.split(".")

    def accessor(item: Any) -> str:
        value = item
        for part in parts:
            if isinstance(value, Mapping):
                value = value.get(part, _MISSING)
            else:
                value = getattr(value, part, _MISSING)
            if value is _MISSING:
                raise ConfigurationError(
                    f"display_member_path {path!r}: {type(item).__name__} has no member {part!r}"
                )
        return "" if value is None else str(value)

    return accessor


def resolve_display(display: Display | None = None, display_member_path: str | None = None) -> Display | None:
    """Resolve the display accessor once.

    An explicit ``display`` callable wins over ``display_member_path``.
    Returns None when neither is given; that is only valid for string items,
    which is checked lazily by ``display_text``.
    """
    if display is not None:
        return display
    if display_member_path:
        return _member_accessor(display_member_path)
    return None


def display_text(item: Any, display: Display | None) -> str:
    """Return the string an item is shown and matched as."""
    if isinstance(item, str):
        return item
    if display is None:
        raise ConfigurationError(
            f"cannot filter {type(item).__name__} items without display_member_path"
        )
    return display(item)


def matches(
    query: str,
    item: Any,
    *,
    display: Display | None = None,
    comparer: TextComparer = DEFAULT_COMPARER,
) -> bool:
    """Decide whether item matches query.

    An empty query matches everything, None included. None never matches
    anything else.
    """
    if not query:
        return True
    if item is None:
        return False
    return comparer.contains(display_text(item, display), query)


def make_predicate(
    query: str,
    display: Display | None = None,
    comparer: TextComparer = DEFAULT_COMPARER,
) -> Callable[[Any], bool]:
    """Return a one-argument predicate for installing on a view."""
    folded = comparer.fold(query)

    def predicate(item: Any) -> bool:
        if not query:
            return True
        if item is None:
            return False
        return folded in comparer.fold(display_text(item, display))

    return predicate
