"""Typed read access over an event's open metadata map.

Events accept arbitrary metadata. A few keys have conventional meaning
(browser, os, screenSize); this wrapper exposes them as optional strings and
leaves everything else untouched.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

KNOWN_STRING_FIELDS = ("browser", "os", "screenSize")


@dataclass(frozen=True, slots=True)
class EventMetadata:
    """Read-only view of event metadata."""

    raw: Mapping[str, Any] = field(default_factory=dict)

    def _string(self, name: str) -> str | None:
        value = self.raw.get(name)
        return value if isinstance(value, str) else None

    @property
    def browser(self) -> str | None:
        return self._string("browser")

    @property
    def os(self) -> str | None:
        return self._string("os")

    @property
    def screen_size(self) -> str | None:
        return self._string("screenSize")

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)
