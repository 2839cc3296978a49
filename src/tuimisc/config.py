"""Configuration for filtered combo boxes."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from tuimisc.debounce import DEFAULT_DELAY
from tuimisc.errors import ConfigurationError
from tuimisc.matching import TextComparer


@dataclass
class ComboConfig:
    """Options recognised by ``FilteredComboBox`` and ``ComboController``.

    ``delay`` is the debounce quiet period in milliseconds.
    ``display_member_path`` names the field holding the display string of
    non-string items; dotted paths reach nested fields.
    """

    delay: int = DEFAULT_DELAY
    display_member_path: str | None = None
    ignore_case: bool = True
    ignore_accents: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.delay, bool) or not isinstance(self.delay, int) or self.delay < 0:
            raise ConfigurationError(f"delay must be a non-negative integer, got {self.delay!r}")
        if self.display_member_path is not None and not isinstance(self.display_member_path, str):
            raise ConfigurationError("display_member_path must be a string")
        for name in ("ignore_case", "ignore_accents"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ComboConfig:
        """Build a config from a dict, e.g. parsed JSON. Unknown keys are an error."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown option(s): {', '.join(unknown)}")
        return cls(**data)

    def comparer(self) -> TextComparer:
        return TextComparer(ignore_case=self.ignore_case, ignore_accents=self.ignore_accents)
