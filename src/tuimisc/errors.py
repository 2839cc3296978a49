"""Exceptions raised by tuimisc."""

from __future__ import annotations


class TuimiscError(Exception):
    """Base class for tuimisc errors."""


class ConfigurationError(TuimiscError, ValueError):
    """A widget or layout was configured in a way that cannot work.

    Raised at the point of use rather than at construction, since items
    may not be bound yet when a widget is built.
    """
